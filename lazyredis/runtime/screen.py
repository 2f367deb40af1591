"""Translate ``AppState`` plus the session into a ``RenderContext``.

The loop redraws from here when state is dirty, and actions call
``BrowserScreen.draw_now`` before blocking store calls so progress text is
visible while the terminal is otherwise frozen.
"""

from __future__ import annotations

import shutil

from ..render import RenderContext, format_key_row, format_tree_row, render_frame, status_left_text
from ..ui_theme import DEFAULT_THEME, UITheme
from .session import Session
from .state import DIALOG_BULK_DELETE, DIALOG_TTL, PROMPT_DELETE, PROMPT_PATTERN, PROMPT_SEARCH, AppState

PROMPT_LABELS = {
    PROMPT_SEARCH: "Search:",
    PROMPT_PATTERN: "Pattern:",
    PROMPT_DELETE: "Confirm:",
}


def dialog_chrome(state: AppState) -> tuple[str | None, bool]:
    """Return ``(title, danger)`` for the open dialog, if any."""
    if state.prompt_mode == PROMPT_DELETE:
        return "Delete Key", True
    if state.dialog_mode == DIALOG_BULK_DELETE:
        return "Delete Folder", True
    if state.dialog_mode == DIALOG_TTL:
        return "TTL Info", False
    return None, False


def key_pane_rows(state: AppState) -> int:
    """Rows available to key entries after the inline prompt row."""
    inline_prompt = state.prompt_mode in {PROMPT_SEARCH, PROMPT_PATTERN}
    return max(1, state.usable - (1 if inline_prompt else 0))


def build_render_context(state: AppState, session: Session, columns: int, theme: UITheme) -> RenderContext:
    if session.navigator is not None:
        key_rows = [format_tree_row(item, theme) for item in session.navigator.items]
    else:
        key_rows = [format_key_row(key, theme) for key in session.keys.filtered_keys]
    counts = session.counts()
    title, danger = dialog_chrome(state)
    prompt_label = PROMPT_LABELS.get(state.prompt_mode) if state.prompt_mode else None
    return RenderContext(
        key_rows=key_rows,
        list_start=state.list_start,
        selected=session.selected_idx,
        max_lines=state.usable,
        width=columns,
        left_width=state.left_width,
        status_left=status_left_text(
            session.env_label,
            counts.total,
            counts.filtered,
            pattern=session.pattern,
            search_term=session.search_term,
            tree_mode=session.tree_mode,
            message=state.status_message,
        ),
        value_title=session.value_key,
        value_text=session.value_text,
        value_start=state.value_start,
        prompt_label=prompt_label,
        prompt_text=state.prompt_text,
        dialog_title=title,
        dialog_lines=state.dialog_lines,
        dialog_danger=danger,
        show_help=state.show_help,
        theme=theme,
    )


class BrowserScreen:
    """Owns the active theme and writes frames for the current state."""

    def __init__(self, state: AppState, session: Session, theme: UITheme = DEFAULT_THEME) -> None:
        self.state = state
        self.session = session
        self.theme = theme

    def draw(self, columns: int) -> None:
        render_frame(build_render_context(self.state, self.session, columns, self.theme))
        self.state.dirty = False

    def draw_now(self) -> None:
        self.draw(shutil.get_terminal_size((80, 24)).columns)
