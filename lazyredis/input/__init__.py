"""Input-layer public API for key decoding and mode handlers.

Low-level terminal decoding (``read_key``) is kept apart from the mode
handlers the runtime loop dispatches to.
"""

from .key_normal import NormalKeyContext, handle_normal_key
from .key_prompt import DialogKeyContext, PromptKeyContext, handle_dialog_key, handle_prompt_key
from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "NormalKeyContext",
    "handle_normal_key",
    "PromptKeyContext",
    "DialogKeyContext",
    "handle_prompt_key",
    "handle_dialog_key",
]
