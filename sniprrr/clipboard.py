"""System clipboard access through pyperclip."""

from __future__ import annotations

import enum
import logging

import pyperclip

log = logging.getLogger(__name__)


class ClipboardOutcome(enum.Enum):
    COPIED = "copied"
    UNAVAILABLE = "unavailable"


def copy_text(text: str) -> ClipboardOutcome:
    """Copy ``text`` to the clipboard. Failures are reported, never raised."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        log.warning("clipboard copy failed: %s", exc)
        return ClipboardOutcome.UNAVAILABLE
    log.debug("copied %d characters to clipboard", len(text))
    return ClipboardOutcome.COPIED
