"""Runtime composition layer for lazyredis.

Connects to the store, builds the session and initial state, wires the key
handlers to browser actions, and runs the terminal loop.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from dataclasses import dataclass

from ..input import (
    DialogKeyContext,
    NormalKeyContext,
    PromptKeyContext,
    handle_dialog_key,
    handle_normal_key,
    handle_prompt_key,
)
from ..keyspace import DELETE_BATCH_SIZE, SCAN_BATCH_SIZE
from ..store.client import connect_store
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .actions import BrowserActions
from .config import load_left_pane_percent, load_theme_name, save_left_pane_percent, save_theme_name
from .layout import initial_left_width
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .screen import BrowserScreen, key_pane_rows
from .session import Session
from .settings import Settings
from .state import AppState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowserOptions:
    """Startup options taken from the command line."""

    pattern: str = "*"
    tree_mode: bool = False
    theme: str | None = None
    style: str = "monokai"
    no_color: bool = False
    scan_batch_size: int = SCAN_BATCH_SIZE
    delete_batch_size: int = DELETE_BATCH_SIZE


def _print_status(message: str) -> None:
    print(message, file=sys.stderr)


def run_browser(settings: Settings, options: BrowserOptions | None = None) -> None:
    """Run the interactive browser until the user quits.

    Connection errors propagate before the terminal switches to raw mode; the
    connection is always closed on the way out.
    """
    options = options or BrowserOptions()
    connection = connect_store(settings.redis, settings.ssh, status_callback=_print_status)
    session = Session(
        connection.client,
        env_label=settings.env_label,
        connection=connection,
        scan_batch_size=options.scan_batch_size,
        delete_batch_size=options.delete_batch_size,
        colorize_values=not options.no_color,
        style=options.style,
    )
    try:
        _run_session(session, options)
    finally:
        session.close()
        logger.info("session closed")


def _run_session(session: Session, options: BrowserOptions) -> None:
    if options.theme:
        save_theme_name(options.theme)
    theme = resolve_theme(options.theme or load_theme_name(), no_color=options.no_color)

    if options.tree_mode:
        session.keys.toggle_tree_mode()
    session.load(options.pattern)

    term = shutil.get_terminal_size((80, 24))
    state = AppState(left_width=initial_left_width(term.columns, load_left_pane_percent()))
    state.usable = max(1, term.lines - 1)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    screen = BrowserScreen(state, session, theme)
    actions = BrowserActions(state, session, redraw=screen.draw_now)
    actions.sync_status()

    normal_context = NormalKeyContext(
        state=state,
        session=session,
        visible_rows=lambda: key_pane_rows(state),
        open_prompt=actions.open_prompt,
        request_delete=actions.request_delete,
        show_ttl=actions.show_ttl,
        reload_keys=actions.reload_keys,
        toggle_help=actions.toggle_help,
        show_value=actions.show_value,
    )
    prompt_context = PromptKeyContext(
        state=state,
        submit_prompt=actions.submit_prompt,
        cancel_prompt=actions.cancel_prompt,
    )
    dialog_context = DialogKeyContext(
        state=state,
        confirm_bulk_delete=actions.confirm_bulk_delete,
        close_dialog=actions.close_dialog,
    )

    callbacks = RuntimeLoopCallbacks(
        draw=screen.draw,
        row_count=session.row_count,
        selected_index=lambda: session.selected_idx,
        handle_normal_key=lambda key: handle_normal_key(key, normal_context),
        handle_prompt_key=lambda key: handle_prompt_key(key, prompt_context),
        handle_dialog_key=lambda key: handle_dialog_key(key, dialog_context),
        sync_status=actions.sync_status,
        save_left_pane_width=save_left_pane_percent,
    )
    logger.debug("starting browser loop (pid %d)", os.getpid())
    run_main_loop(state, terminal, stdin_fd, RuntimeLoopTiming(), callbacks)
