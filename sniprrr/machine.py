"""Keyboard-driven state machine for browsing and editing snippets.

``transition`` is pure: it maps the current ``AppState`` and one key event to
the next state plus the effects the runtime must carry out (persist the list,
copy to the clipboard, quit). No I/O happens here.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

from .key_registry import KeyComboBinding, KeyComboRegistry
from .models import Snippet
from .state import (
    FIELD_COUNT,
    TITLE_FIELD,
    AppState,
    Mode,
    advance_focus,
    commit_draft,
    delete_selected,
    focused_buffer,
    select_next,
    select_previous,
    selected_snippet,
    with_focused_buffer,
)


class KeyKind(enum.Enum):
    PRESS = "press"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    key: str
    kind: KeyKind = KeyKind.PRESS


@dataclass(frozen=True)
class Persist:
    snippets: tuple[Snippet, ...]


@dataclass(frozen=True)
class CopyToClipboard:
    text: str


@dataclass(frozen=True)
class Quit:
    pass


Effect = Persist | CopyToClipboard | Quit


@dataclass(frozen=True)
class Transition:
    state: AppState
    effects: tuple[Effect, ...] = ()

    @property
    def quits(self) -> bool:
        return any(isinstance(effect, Quit) for effect in self.effects)


def is_printable_key(key: str) -> bool:
    """Return whether ``key`` is a single typed character rather than a named token."""
    return len(key) == 1 and key.isprintable()


def _browsing_transition(state: AppState, key: str, quit_after_copy: bool) -> Transition:
    def start_editing() -> Transition:
        return Transition(replace(state, mode=Mode.EDITING, focused_field=TITLE_FIELD))

    def move_down() -> Transition:
        return Transition(select_next(state))

    def move_up() -> Transition:
        return Transition(select_previous(state))

    def delete() -> Transition:
        if selected_snippet(state) is None:
            return Transition(state)
        updated = delete_selected(state)
        return Transition(updated, (Persist(updated.snippets),))

    def copy() -> Transition:
        snippet = selected_snippet(state)
        if snippet is None:
            return Transition(state)
        effects: tuple[Effect, ...] = (CopyToClipboard(snippet.description),)
        if quit_after_copy:
            effects += (Quit(),)
        return Transition(state, effects)

    def quit_app() -> Transition:
        return Transition(state, (Quit(),))

    bindings: KeyComboRegistry[Transition] = KeyComboRegistry()
    bindings.register_bindings(
        KeyComboBinding(("e",), start_editing),
        KeyComboBinding(("j", "DOWN"), move_down),
        KeyComboBinding(("k", "UP"), move_up),
        KeyComboBinding(("BACKSPACE", "DELETE"), delete),
        KeyComboBinding(("c",), copy),
        KeyComboBinding(("q",), quit_app),
    )
    handled = bindings.dispatch(key)
    if handled is not None:
        return handled
    return Transition(state)


def _editing_transition(state: AppState, key: str) -> Transition:
    def erase() -> Transition:
        return Transition(with_focused_buffer(state, focused_buffer(state)[:-1]))

    def next_field() -> Transition:
        return Transition(advance_focus(state))

    def enter() -> Transition:
        if state.focused_field != FIELD_COUNT - 1:
            return Transition(advance_focus(state))
        committed = commit_draft(state)
        return Transition(committed, (Persist(committed.snippets),))

    def abandon() -> Transition:
        # Draft buffers survive so re-entering edit mode resumes them.
        return Transition(replace(state, mode=Mode.BROWSING))

    bindings: KeyComboRegistry[Transition] = KeyComboRegistry()
    bindings.register_bindings(
        KeyComboBinding(("BACKSPACE",), erase),
        KeyComboBinding(("TAB",), next_field),
        KeyComboBinding(("ENTER",), enter),
        KeyComboBinding(("ESC",), abandon),
    )
    handled = bindings.dispatch(key)
    if handled is not None:
        return handled
    if is_printable_key(key):
        return Transition(with_focused_buffer(state, focused_buffer(state) + key))
    return Transition(state)


def transition(state: AppState, event: KeyEvent, *, quit_after_copy: bool = False) -> Transition:
    """Apply one key event and return the next state with its effects.

    ``CTRL_C`` quits from either mode. In editing mode only key presses are
    processed so releases reported by some terminals never repeat input.
    """
    if event.key == "CTRL_C":
        return Transition(state, (Quit(),))
    if state.mode is Mode.EDITING:
        if event.kind is not KeyKind.PRESS:
            return Transition(state)
        state = replace(state, status="") if state.status else state
        return _editing_transition(state, event.key)
    state = replace(state, status="") if state.status else state
    return _browsing_transition(state, event.key, quit_after_copy)
