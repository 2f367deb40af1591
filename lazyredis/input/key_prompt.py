"""Keyboard handling while a text prompt or modal dialog is open."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..runtime.state import DIALOG_BULK_DELETE, AppState


@dataclass(frozen=True)
class PromptKeyContext:
    state: AppState
    submit_prompt: Callable[[], None]
    cancel_prompt: Callable[[], None]


@dataclass(frozen=True)
class DialogKeyContext:
    state: AppState
    confirm_bulk_delete: Callable[[], None]
    close_dialog: Callable[[], None]


def handle_prompt_key(key: str, context: PromptKeyContext) -> None:
    """Edit the prompt buffer; Enter submits and Esc cancels."""
    state = context.state
    if key == "ENTER":
        context.submit_prompt()
    elif key in {"ESC", "CTRL_C"}:
        context.cancel_prompt()
    elif key == "BACKSPACE":
        state.prompt_text = state.prompt_text[:-1]
    elif key == "CTRL_U":
        state.prompt_text = ""
    elif len(key) == 1 and key.isprintable():
        state.prompt_text += key
    else:
        return
    state.dirty = True


def handle_dialog_key(key: str, context: DialogKeyContext) -> None:
    """Bulk-delete dialogs accept ``y``/``n``/Esc; message dialogs close on any key."""
    state = context.state
    if state.dialog_mode == DIALOG_BULK_DELETE:
        if key in {"y", "Y"}:
            context.confirm_bulk_delete()
        elif key in {"n", "N", "ESC", "CTRL_C"}:
            context.close_dialog()
        else:
            return
    else:
        context.close_dialog()
    state.dirty = True
