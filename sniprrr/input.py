"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens:
single characters for typed text, upper-case names for everything else.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_TOKENS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_TOKENS: dict[bytes, str] = {
    b"3": "DELETE",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    data = lead
    for _ in range(_utf8_length(lead[0]) - 1):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _CSI_FINAL_TOKENS:
        return _CSI_FINAL_TOKENS[seq]
    if seq in _CSI_TILDE_TOKENS:
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return _CSI_TILDE_TOKENS[seq]
    # Drain the rest of an unrecognized sequence up to its final byte.
    payload_len = 0
    while seq is not None and not (b"@" <= seq <= b"~") and payload_len < 32:
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        payload_len += 1
    return "UNKNOWN"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` on timeout or end of input."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_TOKENS:
        return _CONTROL_TOKENS[ch]

    if ch != b"\x1b":
        return _read_utf8_char(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        # SS3 arrows sent by terminals in application cursor mode.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is not None and final in _CSI_FINAL_TOKENS:
            return _CSI_FINAL_TOKENS[final]
        if final is not None:
            _PENDING_BYTES.append(final)
        return "ESC"
    _PENDING_BYTES.append(seq)
    return "ESC"
