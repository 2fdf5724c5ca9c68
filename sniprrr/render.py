"""Frame rendering for the snippet manager.

``build_frame`` is a pure function of ``AppState`` and terminal size; the
runtime loop writes its result to the terminal after every event.
"""

from __future__ import annotations

from dataclasses import dataclass

from .ansi import clip_ansi_line, display_width, fit_ansi_line, sanitize_terminal_text, tail_ansi_free
from .config import DEFAULT_STYLE
from .highlight import highlight_description
from .state import DESCRIPTION_FIELD, TITLE_FIELD, AppState, Mode, selected_snippet
from .ui_theme import DEFAULT_THEME, UITheme

HIGHLIGHT_SYMBOL = "» "
INPUT_BOX_HEIGHT = 3
MIN_PREVIEW_ROWS = 8


@dataclass(frozen=True)
class FrameLayout:
    """Row offsets (0-based) of each region for a given terminal height."""

    width: int
    title_box_row: int
    description_box_row: int
    table_row: int
    table_height: int
    preview_row: int
    preview_height: int
    status_row: int


def compute_layout(columns: int, lines: int) -> FrameLayout:
    width = max(1, columns - 1)
    height = max(INPUT_BOX_HEIGHT * 2 + 4, lines)
    status_row = height - 1
    body_top = 1 + INPUT_BOX_HEIGHT * 2
    body_rows = max(2, status_row - body_top)
    preview_height = body_rows // 3 if body_rows >= MIN_PREVIEW_ROWS else 0
    return FrameLayout(
        width=width,
        title_box_row=1,
        description_box_row=1 + INPUT_BOX_HEIGHT,
        table_row=body_top,
        table_height=body_rows - preview_height,
        preview_row=body_top + body_rows - preview_height,
        preview_height=preview_height,
        status_row=status_row,
    )


def _help_line(state: AppState, theme: UITheme) -> str:
    if state.mode is Mode.EDITING:
        hints = (("Esc", "stop editing"), ("Tab", "next field"), ("Enter", "next field / save"))
    else:
        hints = (("q", "quit"), ("e", "add"), ("j/k", "move"), ("c", "copy"), ("Del", "delete"))
    parts = [f"{theme.help_key}{key}{theme.reset} {theme.help_dim}{label}{theme.reset}" for key, label in hints]
    return "  ".join(parts)


def _box_top(title: str, width: int, style: str, theme: UITheme) -> str:
    if width < 2:
        return ""
    label = f"─ {title} " if width > display_width(title) + 4 else ""
    fill = "─" * max(0, width - 2 - display_width(label))
    return f"{style}┌{label}{fill}┐{theme.reset}"


def _box_bottom(width: int, style: str, theme: UITheme) -> str:
    if width < 2:
        return ""
    return f"{style}└{'─' * (width - 2)}┘{theme.reset}"


def _box_row(content: str, width: int, style: str, theme: UITheme) -> str:
    if width < 2:
        return ""
    inner = fit_ansi_line(content, width - 2)
    if "\033" in inner:
        inner += theme.reset
    return f"{style}│{theme.reset}{inner}{style}│{theme.reset}"


def single_line(text: str) -> str:
    """Sanitized ``text`` with CR/LF escaped so it occupies exactly one row."""
    return sanitize_terminal_text(text).replace("\r", "\\r").replace("\n", "\\n")


def _input_box(label: str, text: str, field: int, state: AppState, width: int, theme: UITheme) -> list[str]:
    focused = state.mode is Mode.EDITING and state.focused_field == field
    border = theme.border_focused if focused else theme.border
    visible = tail_ansi_free(single_line(text), max(0, width - 3))
    content = f"{theme.input_editing}{visible}{theme.reset}" if state.mode is Mode.EDITING else visible
    return [
        _box_top(label, width, border, theme),
        _box_row(content, width, border, theme),
        _box_bottom(width, border, theme),
    ]


def _first_line(text: str) -> str:
    lines = sanitize_terminal_text(text).splitlines()
    if not lines:
        return ""
    return lines[0] + (" …" if len(lines) > 1 else "")


def table_window_start(selection: int | None, count: int, rows: int) -> int:
    """First snippet index shown so that ``selection`` stays inside ``rows`` visible rows."""
    if rows <= 0 or selection is None:
        return 0
    start = max(0, selection - rows + 1)
    return min(start, max(0, count - rows))


def _table(state: AppState, width: int, height: int, theme: UITheme) -> list[str]:
    if height <= 0:
        return []
    inner = max(0, width - 2)
    marker_width = display_width(HIGHLIGHT_SYMBOL)
    title_width = max(1, (inner - marker_width) * 2 // 5)
    description_width = max(0, inner - marker_width - title_width - 1)

    def row_text(title: str, description: str) -> str:
        return fit_ansi_line(title, title_width) + " " + fit_ansi_line(description, description_width)

    lines = [_box_top(f"Snippets ({len(state.snippets)})", width, theme.border, theme)]
    header = theme.table_header + fit_ansi_line(" " * marker_width + row_text("Title", "Description"), inner)
    lines.append(_box_row(header + theme.reset, width, theme.border, theme))

    data_rows = max(0, height - 3)
    start = table_window_start(state.selection, len(state.snippets), data_rows)
    for offset in range(data_rows):
        idx = start + offset
        if idx >= len(state.snippets):
            lines.append(_box_row("", width, theme.border, theme))
            continue
        snippet = state.snippets[idx]
        text = row_text(single_line(snippet.title), _first_line(snippet.description))
        if idx == state.selection:
            text = f"{theme.table_marker}{HIGHLIGHT_SYMBOL}{theme.reset}{theme.reverse}{text}{theme.reset}"
        else:
            text = " " * marker_width + text
        lines.append(_box_row(text, width, theme.border, theme))
    lines.append(_box_bottom(width, theme.border, theme))
    return lines[:height]


def _preview(state: AppState, width: int, height: int, theme: UITheme, style: str, no_color: bool) -> list[str]:
    if height <= 0:
        return []
    snippet = selected_snippet(state)
    title = f"Preview: {single_line(snippet.title)}" if snippet is not None else "Preview"
    body = highlight_description(snippet.description, style, no_color) if snippet is not None else []
    lines = [_box_top(title, width, theme.border, theme)]
    for row in range(max(0, height - 2)):
        lines.append(_box_row(body[row] if row < len(body) else "", width, theme.border, theme))
    lines.append(_box_bottom(width, theme.border, theme))
    return lines[:height]


def build_status_line(left_text: str, width: int, right_text: str) -> str:
    usable = max(1, width)
    right_width = display_width(right_text)
    if usable <= right_width:
        return clip_ansi_line(right_text, usable)
    left_limit = max(0, usable - right_width - 1)
    left = clip_ansi_line(single_line(left_text), left_limit)
    gap = " " * (usable - display_width(left) - right_width)
    return f"{left}{gap}{right_text}"


def cursor_position(state: AppState, layout: FrameLayout) -> tuple[int, int] | None:
    """1-based (row, col) for the text cursor while editing, else ``None``."""
    if state.mode is not Mode.EDITING:
        return None
    if state.focused_field == TITLE_FIELD:
        row, text = layout.title_box_row, state.title_buffer
    else:
        row, text = layout.description_box_row, state.description_buffer
    visible = tail_ansi_free(single_line(text), max(0, layout.width - 3))
    return row + 2, 2 + display_width(visible)


def build_frame(
    state: AppState,
    columns: int,
    lines: int,
    theme: UITheme = DEFAULT_THEME,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> str:
    """Render the full screen for ``state`` as one string of ANSI output."""
    layout = compute_layout(columns, lines)
    width = layout.width
    rows: list[str] = [_help_line(state, theme)]
    rows += _input_box("Title", state.title_buffer, TITLE_FIELD, state, width, theme)
    rows += _input_box("Description", state.description_buffer, DESCRIPTION_FIELD, state, width, theme)
    rows += _table(state, width, layout.table_height, theme)
    rows += _preview(state, width, layout.preview_height, theme, style, no_color)
    while len(rows) < layout.status_row:
        rows.append("")

    mode_label = "EDITING" if state.mode is Mode.EDITING else "BROWSING"
    left_status = state.status or f"{len(state.snippets)} snippets"
    status = build_status_line(left_status, width, f"│ {mode_label}")

    out: list[str] = ["\033[H\033[J"]
    for row in rows[: layout.status_row]:
        out.append(fit_ansi_line(row, width))
        if "\033" in row:
            out.append(theme.reset)
        out.append("\r\n")
    out.append(theme.status)
    out.append(status)
    out.append(theme.reset)

    cursor = cursor_position(state, layout)
    if cursor is None:
        out.append("\033[?25l")
    else:
        out.append(f"\033[{cursor[0]};{cursor[1]}H\033[?25h")
    return "".join(out)
