"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (chrome, table, inputs). Syntax highlighting
style for the description preview remains a separate setting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    border: str
    border_focused: str
    input_editing: str
    table_header: str
    table_marker: str
    help_key: str
    help_dim: str
    status: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2m",
    border_focused="\033[33m",
    input_editing="\033[33m",
    table_header="\033[1;37;44m",
    table_marker="\033[38;5;208m",
    help_key="\033[1;38;5;229m",
    help_dim="\033[2;38;5;250m",
    status="\033[7m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2;38;5;31m",
    border_focused="\033[1;38;5;45m",
    input_editing="\033[38;5;117m",
    table_header="\033[1;38;5;231;48;5;24m",
    table_marker="\033[38;5;45m",
    help_key="\033[1;38;5;45m",
    help_dim="\033[2;38;5;110m",
    status="\033[7;38;5;31m",
)

THEMES: dict[str, UITheme] = {theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME)}


def resolve_theme(name: str | None) -> UITheme:
    """Return the named theme, falling back to the default for unknown names."""
    if name is None:
        return DEFAULT_THEME
    theme = THEMES.get(name.strip().lower())
    if theme is None:
        log.warning("unknown theme %r; using %s", name, DEFAULT_THEME.name)
        return DEFAULT_THEME
    return theme
