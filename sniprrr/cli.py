"""Command-line front door for sniprrr.

Loads settings, configures file logging, and runs the interactive session.
Fatal errors are printed to standard output and turned into exit status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .app import run_app
from .config import load_settings
from .errors import SniprrrError
from .logs import setup_logging

log = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and launch the snippet manager.

    ``argv`` is primarily for tests; when omitted ``sys.argv`` is used.
    """
    parser = argparse.ArgumentParser(
        prog="sniprrr",
        description="Record, browse, and copy text snippets in the terminal.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level)
    try:
        run_app(settings)
    except SniprrrError as exc:
        log.error("fatal: %s", exc)
        sys.stdout.write(f"error: {exc}\n")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
