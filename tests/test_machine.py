"""Unit tests for the browsing/editing key state machine.

Drives ``transition`` directly with key events; no terminal is involved.
"""

from __future__ import annotations

import unittest
from dataclasses import replace

from sniprrr.machine import (
    CopyToClipboard,
    KeyEvent,
    KeyKind,
    Persist,
    Quit,
    is_printable_key,
    transition,
)
from sniprrr.models import Snippet
from sniprrr.state import DESCRIPTION_FIELD, FIELD_COUNT, TITLE_FIELD, AppState, Mode


def _press(state: AppState, *keys: str, quit_after_copy: bool = False):
    effects = []
    for key in keys:
        step = transition(state, KeyEvent(key), quit_after_copy=quit_after_copy)
        state = step.state
        effects.extend(step.effects)
    return state, effects


def _type(state: AppState, text: str):
    return _press(state, *text)


def _listed(count: int, selection: int | None = None) -> AppState:
    snippets = tuple(Snippet(f"title {idx}", f"body {idx}") for idx in range(count))
    return AppState(snippets=snippets, selection=selection)


class BrowsingTransitionTests(unittest.TestCase):
    def test_e_enters_editing_on_title_field(self) -> None:
        state = replace(AppState(), focused_field=DESCRIPTION_FIELD)
        state, effects = _press(state, "e")
        self.assertIs(state.mode, Mode.EDITING)
        self.assertEqual(state.focused_field, TITLE_FIELD)
        self.assertEqual(effects, [])

    def test_j_and_down_advance_with_wraparound(self) -> None:
        state, _ = _press(_listed(3, selection=2), "j")
        self.assertEqual(state.selection, 0)
        state, _ = _press(state, "DOWN")
        self.assertEqual(state.selection, 1)

    def test_k_and_up_retreat_with_wraparound(self) -> None:
        state, _ = _press(_listed(3, selection=0), "k")
        self.assertEqual(state.selection, 2)
        state, _ = _press(state, "UP")
        self.assertEqual(state.selection, 1)

    def test_navigation_on_empty_list_keeps_selection_cleared(self) -> None:
        state, effects = _press(AppState(), "j", "k", "DOWN", "UP")
        self.assertIsNone(state.selection)
        self.assertEqual(effects, [])

    def test_backspace_deletes_selected_and_persists_once(self) -> None:
        state, effects = _press(_listed(2, selection=1), "BACKSPACE")
        self.assertEqual(state.snippets, (Snippet("title 0", "body 0"),))
        self.assertEqual(state.selection, 0)
        self.assertEqual(effects, [Persist(state.snippets)])

    def test_delete_key_removes_selected(self) -> None:
        state, effects = _press(_listed(3, selection=0), "DELETE")
        self.assertEqual([s.title for s in state.snippets], ["title 1", "title 2"])
        self.assertEqual(len(effects), 1)

    def test_delete_without_selection_does_not_persist(self) -> None:
        state, effects = _press(_listed(2), "BACKSPACE")
        self.assertEqual(len(state.snippets), 2)
        self.assertEqual(effects, [])

    def test_c_copies_selected_description_and_keeps_running(self) -> None:
        state, effects = _press(_listed(2, selection=1), "c")
        self.assertEqual(effects, [CopyToClipboard("body 1")])
        self.assertIs(state.mode, Mode.BROWSING)

    def test_c_quits_after_copy_when_configured(self) -> None:
        _, effects = _press(_listed(2, selection=0), "c", quit_after_copy=True)
        self.assertEqual(effects, [CopyToClipboard("body 0"), Quit()])

    def test_c_without_selection_does_nothing(self) -> None:
        _, effects = _press(_listed(2), "c", quit_after_copy=True)
        self.assertEqual(effects, [])

    def test_q_quits(self) -> None:
        step = transition(_listed(1), KeyEvent("q"))
        self.assertTrue(step.quits)

    def test_unbound_keys_are_noops(self) -> None:
        start = _listed(2, selection=0)
        state, effects = _press(start, "x", "TAB", "ENTER", "ESC", "LEFT")
        self.assertEqual(state, start)
        self.assertEqual(effects, [])

    def test_any_key_clears_status_message(self) -> None:
        state, _ = _press(replace(_listed(1), status="Copied"), "x")
        self.assertEqual(state.status, "")


class EditingTransitionTests(unittest.TestCase):
    def test_typing_goes_to_focused_buffer(self) -> None:
        state, _ = _press(AppState(), "e")
        state, _ = _type(state, "Hi")
        state, _ = _press(state, "TAB")
        state, effects = _type(state, "There")
        self.assertEqual(state.title_buffer, "Hi")
        self.assertEqual(state.description_buffer, "There")
        self.assertEqual(effects, [])

    def test_browsing_keys_are_text_while_editing(self) -> None:
        state, effects = _press(AppState(mode=Mode.EDITING), "q", "j", "c", "e")
        self.assertEqual(state.title_buffer, "qjce")
        self.assertIs(state.mode, Mode.EDITING)
        self.assertEqual(effects, [])

    def test_backspace_erases_from_focused_buffer_only(self) -> None:
        state = AppState(mode=Mode.EDITING, title_buffer="ab", description_buffer="cd", focused_field=DESCRIPTION_FIELD)
        state, _ = _press(state, "BACKSPACE", "BACKSPACE", "BACKSPACE")
        self.assertEqual(state.description_buffer, "")
        self.assertEqual(state.title_buffer, "ab")

    def test_tab_cycles_back_to_first_field(self) -> None:
        state = AppState(mode=Mode.EDITING)
        state, _ = _press(state, *(["TAB"] * FIELD_COUNT))
        self.assertEqual(state.focused_field, TITLE_FIELD)

    def test_enter_on_title_advances_without_commit(self) -> None:
        state, effects = _press(AppState(mode=Mode.EDITING, title_buffer="x"), "ENTER")
        self.assertEqual(state.focused_field, DESCRIPTION_FIELD)
        self.assertEqual(state.snippets, ())
        self.assertEqual(effects, [])

    def test_enter_on_last_field_commits_and_persists(self) -> None:
        state, _ = _press(_listed(1), "e")
        state, _ = _type(state, "Hi")
        state, _ = _press(state, "TAB")
        state, _ = _type(state, "There")
        state, effects = _press(state, "ENTER")

        self.assertEqual(len(state.snippets), 2)
        self.assertEqual(state.snippets[-1], Snippet("Hi", "There"))
        self.assertEqual((state.title_buffer, state.description_buffer), ("", ""))
        self.assertIs(state.mode, Mode.BROWSING)
        self.assertEqual(effects, [Persist(state.snippets)])

    def test_escape_returns_to_browsing_and_keeps_draft(self) -> None:
        state, _ = _press(AppState(), "e")
        state, _ = _type(state, "draft")
        state, effects = _press(state, "ESC")
        self.assertIs(state.mode, Mode.BROWSING)
        self.assertEqual(state.title_buffer, "draft")
        self.assertEqual(effects, [])

        state, _ = _press(state, "e")
        state, _ = _type(state, "!")
        self.assertEqual(state.title_buffer, "draft!")

    def test_key_release_is_ignored_while_editing(self) -> None:
        state = AppState(mode=Mode.EDITING)
        step = transition(state, KeyEvent("a", KeyKind.RELEASE))
        self.assertEqual(step.state, state)
        self.assertEqual(step.effects, ())

    def test_named_tokens_are_not_typed(self) -> None:
        state, _ = _press(AppState(mode=Mode.EDITING), "UP", "DOWN", "DELETE", "UNKNOWN")
        self.assertEqual(state.title_buffer, "")

    def test_unicode_characters_are_typed(self) -> None:
        state, _ = _press(AppState(mode=Mode.EDITING), "é", "漢")
        self.assertEqual(state.title_buffer, "é漢")

    def test_ctrl_c_quits_from_editing(self) -> None:
        step = transition(AppState(mode=Mode.EDITING), KeyEvent("CTRL_C"))
        self.assertTrue(step.quits)


class PrintableKeyTests(unittest.TestCase):
    def test_printable_detection(self) -> None:
        self.assertTrue(is_printable_key("a"))
        self.assertTrue(is_printable_key(" "))
        self.assertFalse(is_printable_key("TAB"))
        self.assertFalse(is_printable_key("\x01"))
        self.assertFalse(is_printable_key(""))


if __name__ == "__main__":
    unittest.main()
