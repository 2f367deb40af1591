"""User-facing browser actions shared by the key handlers.

Each action mutates ``AppState`` (prompts, dialogs, status text) and calls
into the ``Session`` for anything that touches keys or the store. Blocking
store calls are preceded by a redraw so the status line shows what is
happening.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from ..render.dialogs import bulk_delete_lines, delete_confirm_lines, message_lines
from .session import Session
from .state import DIALOG_BULK_DELETE, DIALOG_TTL, PROMPT_DELETE, PROMPT_PATTERN, PROMPT_SEARCH, AppState

STATUS_MESSAGE_SECONDS = 3.0
DELETE_CONFIRM_WORD = "yes"


class BrowserActions:
    """Prompt, dialog, and status-line operations for one browser run."""

    def __init__(
        self,
        state: AppState,
        session: Session,
        redraw: Callable[[], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self.session = session
        self._redraw = redraw or (lambda: None)
        self._clock = clock

    # Status --------------------------------------------------------------

    def set_status(self, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
        self.state.status_message = message
        self.state.status_message_until = self._clock() + seconds
        self.state.dirty = True

    def sync_status(self) -> None:
        """Move a pending session message into the timed status line."""
        if self.session.status_message:
            self.set_status(self.session.status_message)
            self.session.status_message = ""

    def _show_progress(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_message_until = float("inf")
        self._redraw()

    # Prompts -------------------------------------------------------------

    def open_prompt(self, mode: str) -> None:
        self.state.prompt_mode = mode
        if mode == PROMPT_SEARCH:
            self.state.prompt_text = self.session.search_term
        elif mode == PROMPT_PATTERN:
            self.state.prompt_text = self.session.pattern
        else:
            self.state.prompt_text = ""
        self.state.dirty = True

    def cancel_prompt(self) -> None:
        mode = self.state.prompt_mode
        self._close_prompt()
        if mode == PROMPT_DELETE:
            self._cancel_delete()

    def submit_prompt(self) -> None:
        mode = self.state.prompt_mode
        text = self.state.prompt_text
        self._close_prompt()
        if mode == PROMPT_SEARCH:
            self.session.apply_search(text)
            self.state.list_start = 0
        elif mode == PROMPT_PATTERN:
            self.reload_keys(text.strip() or "*")
        elif mode == PROMPT_DELETE:
            key = self.state.pending_delete_key
            self.state.pending_delete_key = None
            if key is not None and text.strip().lower() == DELETE_CONFIRM_WORD:
                self.session.delete_key(key)
                self.state.value_start = 0
            else:
                self._cancel_delete()
        self.sync_status()

    def _close_prompt(self) -> None:
        self.state.prompt_mode = None
        self.state.prompt_text = ""
        self.state.dialog_lines = []
        self.state.dirty = True

    def _cancel_delete(self) -> None:
        self.state.pending_delete_key = None
        self.session.value_key = None
        self.session.value_text = "Delete cancelled"
        self.state.value_start = 0

    # Store actions -------------------------------------------------------

    def reload_keys(self, pattern: str | None = None) -> bool:
        self._show_progress("Loading keys...")
        loaded = self.session.load(pattern)
        self.state.status_message = ""
        self.state.status_message_until = 0.0
        self.state.list_start = 0
        self.state.dirty = True
        self.sync_status()
        return loaded

    def show_value(self) -> None:
        if self.session.show_selected_value():
            self.state.value_start = 0
            self.state.dirty = True

    def show_ttl(self) -> None:
        key = self.session.selected_key()
        if key is None or self.session.is_selected_folder():
            return
        self.state.dialog_mode = DIALOG_TTL
        self.state.dialog_lines = message_lines(self.session.ttl_text(key))
        self.state.dirty = True

    def request_delete(self) -> None:
        """Open the single-key prompt, or the folder confirmation in tree mode."""
        if self.session.is_selected_folder():
            path = self.session.selected_folder_path()
            keys = self.session.selected_folder_keys()
            if path is None or not keys:
                return
            self.state.pending_bulk_path = path
            self.state.pending_bulk_keys = keys
            self.state.dialog_mode = DIALOG_BULK_DELETE
            self.state.dialog_lines = bulk_delete_lines(path, self.session.delimiter, len(keys))
            self.state.dirty = True
            return
        key = self.session.selected_key()
        if key is None:
            return
        self.state.pending_delete_key = key
        self.open_prompt(PROMPT_DELETE)
        self.state.dialog_lines = delete_confirm_lines(key)

    def confirm_bulk_delete(self) -> None:
        keys = self.state.pending_bulk_keys
        self.state.pending_bulk_keys = []
        self.close_dialog()
        if not keys:
            return
        total = len(keys)

        def on_progress(done: int, _total: int) -> None:
            self._show_progress(f"Deleting keys... {done}/{total}")

        self._show_progress(f"Deleting keys... 0/{total}")
        self.session.bulk_delete(keys, on_progress)
        self.state.value_start = 0
        self.state.list_start = 0
        self.state.status_message = ""
        self.sync_status()

    def close_dialog(self) -> None:
        if self.state.dialog_mode == DIALOG_BULK_DELETE and self.state.pending_bulk_keys:
            self.session.value_key = None
            self.session.value_text = "Delete cancelled"
        self.state.dialog_mode = None
        self.state.dialog_lines = []
        self.state.pending_bulk_keys = []
        self.state.pending_bulk_path = None
        self.state.dirty = True

    def toggle_help(self) -> None:
        self.state.show_help = not self.state.show_help
        self.state.dirty = True
