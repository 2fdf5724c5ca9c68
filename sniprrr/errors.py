"""Exception types raised across sniprrr modules."""

from __future__ import annotations

from pathlib import Path


class SniprrrError(Exception):
    """Base class for errors the CLI reports and exits on."""


class StoreWriteError(SniprrrError):
    """Saving the snippet list failed; the caller must not continue silently."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"could not save snippets to {path}: {reason}")
