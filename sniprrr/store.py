"""JSON persistence for the snippet list.

Reads fail open: any problem loading yields an empty list, with the reason
kept as a ``LoadStatus``. Writes fail closed with ``StoreWriteError``.
"""

from __future__ import annotations

import enum
import json
import logging
import os
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import SNIPPETS_FILENAME, config_dir
from .errors import StoreWriteError
from .models import Snippet

log = logging.getLogger(__name__)


class LoadStatus(enum.Enum):
    OK = "ok"
    MISSING = "missing"
    UNREADABLE = "unreadable"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class LoadOutcome:
    status: LoadStatus
    snippets: list[Snippet] = field(default_factory=list)
    detail: str = ""

    @property
    def degraded(self) -> bool:
        """True when data existed but could not be used."""
        return self.status in {LoadStatus.UNREADABLE, LoadStatus.MALFORMED}


def snippets_path() -> Path:
    return config_dir() / SNIPPETS_FILENAME


def decode_snippets(raw: str) -> list[Snippet] | None:
    """Parse a persisted JSON array; ``None`` when any part has the wrong shape."""
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(data, list):
        return None
    snippets: list[Snippet] = []
    for item in data:
        snippet = Snippet.from_json(item)
        if snippet is None:
            return None
        snippets.append(snippet)
    return snippets


def encode_snippets(snippets: Sequence[Snippet]) -> str:
    return json.dumps([snippet.to_json() for snippet in snippets], indent=2, ensure_ascii=False) + "\n"


def load_outcome(path: Path | None = None) -> LoadOutcome:
    """Load snippets and report why the result is empty when it is."""
    target = path if path is not None else snippets_path()
    try:
        raw = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        return LoadOutcome(LoadStatus.MISSING)
    except (OSError, UnicodeDecodeError) as exc:
        log.warning("could not read %s: %s", target, exc)
        return LoadOutcome(LoadStatus.UNREADABLE, detail=str(exc))

    snippets = decode_snippets(raw)
    if snippets is None:
        log.warning("ignoring malformed snippet file %s", target)
        return LoadOutcome(LoadStatus.MALFORMED, detail=f"{target.name} is not a snippet list")
    log.debug("loaded %d snippets from %s", len(snippets), target)
    return LoadOutcome(LoadStatus.OK, snippets)


def load(path: Path | None = None) -> list[Snippet]:
    """Return stored snippets, or an empty list on any read or parse failure."""
    return load_outcome(path).snippets


def save(snippets: Sequence[Snippet], path: Path | None = None) -> None:
    """Replace the snippet file with ``snippets``.

    Data is written to a temporary file in the same directory and moved into
    place, so readers never see a partial file.
    """
    target = path if path is not None else snippets_path()
    payload = encode_snippets(snippets)
    tmp_name: str | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, target)
        tmp_name = None
    except OSError as exc:
        log.error("saving %d snippets to %s failed: %s", len(snippets), target, exc)
        raise StoreWriteError(target, exc.strerror or str(exc)) from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
    log.info("saved %d snippets to %s", len(snippets), target)
