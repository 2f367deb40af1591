"""Main interactive event loop for the terminal UI.

Coordinates status expiry, list scrolling, rendering, and input dispatch.
Feature logic lives in the injected callbacks.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..terminal import TerminalController
from .layout import clamp_left_width, scroll_start_for_selection
from .screen import key_pane_rows
from .state import AppState

PANE_RESIZE_STEP = 2


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    draw: Callable[[int], None]
    row_count: Callable[[], int]
    selected_index: Callable[[], int]
    handle_normal_key: Callable[[str], bool]
    handle_prompt_key: Callable[[str], None]
    handle_dialog_key: Callable[[str], None]
    sync_status: Callable[[], None]
    save_left_pane_width: Callable[[int, int], None]


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the interactive loop until a quit key is pressed."""
    ops = callbacks

    def adjust_left_pane_width(term_columns: int, delta: int) -> None:
        prev_left = state.left_width
        state.left_width = clamp_left_width(term_columns, state.left_width + delta)
        if state.left_width == prev_left:
            return
        ops.save_left_pane_width(term_columns, state.left_width)
        state.dirty = True

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            now = time.monotonic()
            if state.status_message and now >= state.status_message_until:
                state.status_message = ""
                state.status_message_until = 0.0
                state.dirty = True

            prev_usable = state.usable
            prev_left = state.left_width
            state.usable = max(1, term.lines - 1)
            state.left_width = clamp_left_width(term.columns, state.left_width)
            if state.usable != prev_usable or state.left_width != prev_left:
                state.dirty = True

            prev_list_start = state.list_start
            state.list_start = scroll_start_for_selection(
                ops.selected_index(),
                state.list_start,
                key_pane_rows(state),
                ops.row_count(),
            )
            if state.list_start != prev_list_start:
                state.dirty = True

            if state.dirty:
                ops.draw(term.columns)
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=timing.key_timeout_ms)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue

            if state.show_help:
                state.show_help = False
                state.dirty = True
                continue

            if state.prompt_mode is not None:
                ops.handle_prompt_key(key)
            elif state.dialog_mode is not None:
                ops.handle_dialog_key(key)
            elif key in {"<", ">"}:
                adjust_left_pane_width(term.columns, PANE_RESIZE_STEP if key == ">" else -PANE_RESIZE_STEP)
            elif ops.handle_normal_key(key):
                return
            ops.sync_status()
