from __future__ import annotations

from dataclasses import dataclass, field

PROMPT_SEARCH = "search"
PROMPT_PATTERN = "pattern"
PROMPT_DELETE = "delete"

DIALOG_TTL = "ttl"
DIALOG_BULK_DELETE = "bulk_delete"


@dataclass
class AppState:
    left_width: int
    usable: int = 24
    list_start: int = 0
    value_start: int = 0
    dirty: bool = True
    show_help: bool = False
    status_message: str = ""
    status_message_until: float = 0.0
    prompt_mode: str | None = None
    prompt_text: str = ""
    dialog_mode: str | None = None
    dialog_lines: list[str] = field(default_factory=list)
    pending_delete_key: str | None = None
    pending_bulk_keys: list[str] = field(default_factory=list)
    pending_bulk_path: str | None = None
