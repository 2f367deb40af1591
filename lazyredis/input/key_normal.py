"""Normal-mode keyboard handling for the key pane."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..runtime.session import Session
from ..runtime.state import PROMPT_PATTERN, PROMPT_SEARCH, AppState
from .key_registry import KeyComboBinding, KeyComboRegistry


@dataclass(frozen=True)
class NormalKeyContext:
    """State and bound operations required for normal-mode key handling."""

    state: AppState
    session: Session
    visible_rows: Callable[[], int]
    open_prompt: Callable[[str], None]
    request_delete: Callable[[], None]
    show_ttl: Callable[[], None]
    reload_keys: Callable[[str | None], None]
    toggle_help: Callable[[], None]
    show_value: Callable[[], None]


def handle_normal_key(key: str, context: NormalKeyContext) -> bool:
    """Handle one normal-mode key and return ``True`` when the app should quit."""
    state = context.state
    session = context.session

    def moved(changed: bool) -> bool:
        if changed:
            state.value_start = 0
            state.dirty = True
        return False

    def move(delta: int) -> bool:
        return moved(session.move_selection(delta))

    def half_page(direction: int) -> bool:
        return move(direction * max(1, context.visible_rows() // 2))

    def activate() -> bool:
        if session.is_selected_folder():
            session.toggle_selected()
        else:
            context.show_value()
        state.dirty = True
        return False

    def toggle_folder() -> bool:
        if session.toggle_selected():
            state.dirty = True
        return False

    def expand() -> bool:
        if session.expand_selected():
            state.dirty = True
        return False

    def collapse() -> bool:
        if session.collapse_selected():
            state.dirty = True
        return False

    def expand_all() -> bool:
        if session.expand_all():
            state.dirty = True
        return False

    def collapse_all() -> bool:
        if session.collapse_all():
            state.list_start = 0
            state.dirty = True
        return False

    def toggle_tree() -> bool:
        session.toggle_tree_mode()
        state.list_start = 0
        state.dirty = True
        return False

    def clear_search() -> bool:
        if session.search_term:
            session.clear_search()
            state.list_start = 0
            state.dirty = True
        return False

    def run(action: Callable[[], None]) -> Callable[[], bool]:
        def handler() -> bool:
            action()
            state.dirty = True
            return False

        return handler

    bindings = KeyComboRegistry().register_bindings(
        KeyComboBinding(("q", "CTRL_C"), lambda: True),
        KeyComboBinding(("j", "DOWN"), lambda: move(1)),
        KeyComboBinding(("k", "UP"), lambda: move(-1)),
        KeyComboBinding(("g", "HOME"), lambda: moved(session.select(0))),
        KeyComboBinding(("G", "END"), lambda: moved(session.select(session.row_count() - 1))),
        KeyComboBinding(("CTRL_D", "PAGE_DOWN"), lambda: half_page(1)),
        KeyComboBinding(("CTRL_U", "PAGE_UP"), lambda: half_page(-1)),
        KeyComboBinding(("ENTER",), activate),
        KeyComboBinding((" ",), toggle_folder),
        KeyComboBinding(("l", "RIGHT"), expand),
        KeyComboBinding(("h", "LEFT"), collapse),
        KeyComboBinding(("E",), expand_all),
        KeyComboBinding(("C",), collapse_all),
        KeyComboBinding(("CTRL_T",), toggle_tree),
        KeyComboBinding(("ESC",), clear_search),
        KeyComboBinding(("/",), run(lambda: context.open_prompt(PROMPT_SEARCH))),
        KeyComboBinding(("p",), run(lambda: context.open_prompt(PROMPT_PATTERN))),
        KeyComboBinding(("r",), run(lambda: context.reload_keys(None))),
        KeyComboBinding(("d", "DELETE"), run(context.request_delete)),
        KeyComboBinding(("t",), run(context.show_ttl)),
        KeyComboBinding(("v",), run(context.show_value)),
        KeyComboBinding(("?", "CTRL_QUESTION"), run(context.toggle_help)),
    )
    handled = bindings.dispatch(key)
    return bool(handled)
