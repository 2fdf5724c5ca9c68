"""Syntax highlighting for snippet description previews.

Descriptions carry no filename, so the lexer is guessed from content and
falls back to plain text. Control bytes are escaped before highlighting.
"""

from __future__ import annotations

import logging

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, guess_lexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .ansi import sanitize_terminal_text
from .config import DEFAULT_STYLE

log = logging.getLogger(__name__)

_FORMATTERS: dict[str, TerminalFormatter] = {}
_LEXERS: dict[str, Lexer] = {}
_LEXER_CACHE_LIMIT = 64
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        log.warning("unknown pygments style %r; using %s", style, DEFAULT_STYLE)
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def _lexer_for(source: str) -> Lexer:
    lexer = _LEXERS.get(source)
    if lexer is not None:
        return lexer
    try:
        lexer = guess_lexer(source)
    except ClassNotFound:
        lexer = TextLexer()
    if len(_LEXERS) >= _LEXER_CACHE_LIMIT:
        _LEXERS.clear()
    _LEXERS[source] = lexer
    return lexer


def highlight_description(source: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> list[str]:
    """Return display lines for ``source``, colorized unless ``no_color``."""
    safe = sanitize_terminal_text(source)
    if not safe:
        return []
    if no_color:
        return safe.splitlines()
    formatter = _formatter_for_style(_normalize_style(style))
    rendered = pygments_highlight(safe, _lexer_for(safe), formatter)
    return rendered.rstrip("\n").splitlines()
