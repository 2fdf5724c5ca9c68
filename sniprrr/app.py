"""Interactive runtime: event loop and effect execution.

The loop reads one key, asks the state machine for the next state, carries
out the returned effects in order, and redraws. Clipboard failures become a
status message; save failures propagate as ``StoreWriteError``.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from . import clipboard, store
from .clipboard import ClipboardOutcome
from .config import Settings
from .input import read_key
from .machine import CopyToClipboard, KeyEvent, Persist, Quit, Transition, transition
from .models import Snippet
from .render import build_frame
from .state import AppState, initial_state
from .store import LoadOutcome
from .terminal import TerminalController
from .ui_theme import resolve_theme

log = logging.getLogger(__name__)

COPY_STATUS = {
    ClipboardOutcome.COPIED: "Copied description to clipboard",
    ClipboardOutcome.UNAVAILABLE: "Clipboard unavailable; nothing copied",
}


@dataclass
class EffectRunner:
    """Executes state-machine effects against the store and clipboard."""

    snippets_path: Path | None = None
    copy_text: Callable[[str], ClipboardOutcome] = clipboard.copy_text
    save: Callable[..., None] = store.save

    def run(self, step: Transition) -> tuple[AppState, bool]:
        """Apply ``step.effects`` and return the resulting state and a quit flag."""
        state = step.state
        should_quit = False
        for effect in step.effects:
            if isinstance(effect, Persist):
                self.save(list(effect.snippets), self.snippets_path)
            elif isinstance(effect, CopyToClipboard):
                outcome = self.copy_text(effect.text)
                state = replace(state, status=COPY_STATUS[outcome])
            elif isinstance(effect, Quit):
                should_quit = True
        return state, should_quit


def startup_status(outcome: LoadOutcome) -> str:
    if outcome.degraded:
        return f"Could not load saved snippets ({outcome.status.value}); starting empty"
    return ""


def run_session(
    state: AppState,
    runner: EffectRunner,
    settings: Settings,
    next_key: Callable[[], str],
    draw: Callable[[AppState], None],
) -> AppState:
    """Drive the event loop until a quit effect or end of input; return the final state."""
    while True:
        draw(state)
        key = next_key()
        if not key:
            log.info("input closed; leaving session")
            return state
        step = transition(state, KeyEvent(key), quit_after_copy=settings.quit_after_copy)
        state, should_quit = runner.run(step)
        if should_quit:
            return state


def print_snippets(snippets: list[Snippet]) -> None:
    """Non-interactive fallback: one ``title<TAB>description`` line per snippet."""
    for snippet in snippets:
        description = snippet.description.replace("\n", "\\n")
        sys.stdout.write(f"{snippet.title}\t{description}\n")


def run_app(settings: Settings, snippets_path: Path | None = None) -> None:
    """Load snippets and run the interactive session on the controlling terminal."""
    outcome = store.load_outcome(snippets_path)
    if not (os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())):
        print_snippets(outcome.snippets)
        return

    if outcome.degraded:
        log.warning("starting with no snippets: %s", outcome.detail)
    state = initial_state(outcome.snippets, status=startup_status(outcome))
    runner = EffectRunner(snippets_path=snippets_path)
    theme = resolve_theme(settings.theme)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())

    def draw(current: AppState) -> None:
        term = shutil.get_terminal_size((80, 24))
        frame = build_frame(
            current, term.columns, term.lines, theme=theme, style=settings.style, no_color=settings.no_color
        )
        terminal.write(frame)

    log.info("starting session with %d snippets", len(state.snippets))
    with terminal.raw_mode():
        final = run_session(state, runner, settings, lambda: read_key(stdin_fd), draw)
    log.info("session ended with %d snippets", len(final.snippets))
