"""Help overlay content.

Sections mirror the key handlers in ``lazyredis.input``; rendering here is
presentation-only and side-effect free.
"""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "NAVIGATION",
        (
            ("Up/Down j/k", "move selection"),
            ("g/G", "first/last key"),
            ("Ctrl+U/Ctrl+D", "half page up/down"),
            ("Enter", "view value (toggle folder in tree view)"),
            ("v", "view value of the selected row"),
        ),
    ),
    (
        "SEARCH & FILTER",
        (
            ("/", "search loaded keys (client-side)"),
            ("p", "reload with a Redis pattern"),
            ("Esc", "clear search"),
            ("r", "refresh key list"),
        ),
    ),
    (
        "ACTIONS",
        (
            ("d", "delete selected key (type 'yes')"),
            ("d on folder", "delete every key under the folder"),
            ("t", "show TTL of selected key"),
            ("Ctrl+T", "toggle tree view"),
        ),
    ),
    (
        "TREE VIEW",
        (
            ("Enter/Space", "expand/collapse folder"),
            ("Right/l", "expand folder"),
            ("Left/h", "collapse folder"),
            ("E/C", "expand/collapse all folders"),
        ),
    ),
    (
        "PATTERNS",
        (
            ("*", "any characters"),
            ("?", "single character"),
            ("user:*", "keys starting with 'user:'"),
            ("*:session", "keys ending with ':session'"),
        ),
    ),
    (
        "OTHER",
        (
            ("</>", "narrow/widen the key pane"),
            ("?", "toggle this help"),
            ("q/Ctrl+C", "quit"),
        ),
    ),
)

HELP_KEY_COLUMN_WIDTH = 14


def help_lines(theme: UITheme | None = None) -> list[str]:
    """Return themed help rows, one blank row between sections."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    lines: list[str] = []
    for heading, bindings in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{active_theme.help_heading}{heading}{reset}")
        for keys, description in bindings:
            lines.append(f"  {active_theme.help_key}{keys.ljust(HELP_KEY_COLUMN_WIDTH)}{reset}{description}")
    lines.append("")
    lines.append(f"{active_theme.help_dim}Press any key to close{reset}")
    return lines
