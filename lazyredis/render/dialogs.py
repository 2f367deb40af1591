"""Confirmation and message dialog content plus box framing."""

from __future__ import annotations

from ..ansi import pad_ansi_line
from ..ui_theme import DEFAULT_THEME, UITheme

BULK_DELETE_WARNING_THRESHOLD = 1000


def bulk_delete_lines(folder_path: str, delimiter: str, key_count: int) -> list[str]:
    """Body of the folder delete confirmation."""
    lines = ["Delete ALL keys under this folder?"]
    if key_count > BULK_DELETE_WARNING_THRESHOLD:
        lines.append(f"WARNING: This will delete {key_count} keys!")
    lines.extend(
        [
            "",
            f"Folder: {folder_path}",
            f"Pattern: {folder_path}{delimiter}*",
            f"Keys to delete: {key_count}",
            "",
            "Press 'y' to confirm, 'n' or ESC to cancel",
        ]
    )
    return lines


def delete_confirm_lines(key: str) -> list[str]:
    return [
        "WARNING",
        "",
        f"Key: {key}",
        "",
        "This action CANNOT be undone!",
        "",
        "Type 'yes' to confirm deletion:",
    ]


def message_lines(message: str) -> list[str]:
    lines = message.splitlines() or [""]
    return [*lines, "", "Press any key to close"]


def frame_dialog(
    title: str,
    body: list[str],
    width: int,
    theme: UITheme | None = None,
    danger: bool = False,
) -> list[str]:
    """Draw ``body`` inside a titled box exactly ``width`` columns wide."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    border = active_theme.dialog_danger if danger else active_theme.dialog_border
    inner = max(1, width - 4)
    label = f" {title} "[: max(0, width - 4)]
    top_fill = "─" * max(0, width - 3 - len(label))
    lines = [f"{border}┌─{reset}{active_theme.dialog_title}{label}{reset}{border}{top_fill}┐{reset}"]
    for line in body:
        lines.append(f"{border}│{reset} {pad_ansi_line(line, inner)} {border}│{reset}")
    lines.append(f"{border}└{'─' * max(0, width - 2)}┘{reset}")
    return lines
