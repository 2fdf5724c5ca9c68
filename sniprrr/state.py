"""Application state and the pure helpers that derive new states from it.

``AppState`` is immutable. Every helper returns a new instance built with
``dataclasses.replace`` so the state machine can stay a pure function.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, replace

from .models import Snippet

TITLE_FIELD = 0
DESCRIPTION_FIELD = 1
FIELD_COUNT = 2


class Mode(enum.Enum):
    BROWSING = "browsing"
    EDITING = "editing"


@dataclass(frozen=True)
class AppState:
    snippets: tuple[Snippet, ...] = ()
    mode: Mode = Mode.BROWSING
    focused_field: int = TITLE_FIELD
    title_buffer: str = ""
    description_buffer: str = ""
    selection: int | None = None
    status: str = ""


def initial_state(snippets: Iterable[Snippet], status: str = "") -> AppState:
    """Build the startup state from loaded snippets."""
    return AppState(snippets=tuple(snippets), status=status)


def selected_snippet(state: AppState) -> Snippet | None:
    if state.selection is None:
        return None
    if 0 <= state.selection < len(state.snippets):
        return state.snippets[state.selection]
    return None


def select_next(state: AppState) -> AppState:
    """Move selection down one row, wrapping from the last row to the first."""
    count = len(state.snippets)
    if count == 0:
        return state
    if state.selection is None:
        return replace(state, selection=0)
    return replace(state, selection=(state.selection + 1) % count)


def select_previous(state: AppState) -> AppState:
    """Move selection up one row, wrapping from the first row to the last."""
    count = len(state.snippets)
    if count == 0:
        return state
    if state.selection is None:
        return replace(state, selection=0)
    if state.selection == 0:
        return replace(state, selection=count - 1)
    return replace(state, selection=state.selection - 1)


def revalidate_selection(state: AppState) -> AppState:
    """Clamp selection into range, or clear it when no rows remain."""
    if state.selection is None:
        return state
    if not state.snippets:
        return replace(state, selection=None)
    clamped = max(0, min(state.selection, len(state.snippets) - 1))
    if clamped == state.selection:
        return state
    return replace(state, selection=clamped)


def delete_selected(state: AppState) -> AppState:
    """Remove the selected snippet; returns ``state`` unchanged when none is selected."""
    if selected_snippet(state) is None:
        return state
    assert state.selection is not None
    remaining = state.snippets[: state.selection] + state.snippets[state.selection + 1 :]
    return revalidate_selection(replace(state, snippets=remaining))


def focused_buffer(state: AppState) -> str:
    if state.focused_field == TITLE_FIELD:
        return state.title_buffer
    return state.description_buffer


def with_focused_buffer(state: AppState, text: str) -> AppState:
    if state.focused_field == TITLE_FIELD:
        return replace(state, title_buffer=text)
    return replace(state, description_buffer=text)


def advance_focus(state: AppState) -> AppState:
    return replace(state, focused_field=(state.focused_field + 1) % FIELD_COUNT)


def commit_draft(state: AppState) -> AppState:
    """Append the buffered snippet, clear both buffers, and go back to browsing."""
    snippet = Snippet(title=state.title_buffer, description=state.description_buffer)
    return replace(
        state,
        snippets=state.snippets + (snippet,),
        title_buffer="",
        description_buffer="",
        focused_field=TITLE_FIELD,
        mode=Mode.BROWSING,
    )
