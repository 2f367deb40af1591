"""Rendering engine for the split key/value terminal view.

Defines render context data and writes fully composed ANSI frames. The
key pane shows either the flat key list or the flattened tree; the value
pane shows the selected value, a dialog, or the help overlay.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

from ..ansi import build_value_lines, clip_ansi_line, pad_ansi_line
from ..keyspace import FlatItem
from ..ui_theme import DEFAULT_THEME, UITheme
from .dialogs import frame_dialog
from .help import help_lines

STATUS_HELP_SUFFIX = "│ ? Help"


@dataclass
class RenderContext:
    key_rows: list[str]
    list_start: int
    selected: int
    max_lines: int
    width: int
    left_width: int
    status_left: str
    value_title: str | None = None
    value_text: str = ""
    value_start: int = 0
    prompt_label: str | None = None
    prompt_text: str = ""
    dialog_title: str | None = None
    dialog_lines: list[str] = field(default_factory=list)
    dialog_danger: bool = False
    show_help: bool = False
    theme: UITheme = DEFAULT_THEME


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def build_status_line(left_text: str, width: int, right_text: str = STATUS_HELP_SUFFIX) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def status_left_text(
    env_label: str,
    total: int,
    filtered: int,
    pattern: str = "*",
    search_term: str = "",
    tree_mode: bool = False,
    message: str = "",
) -> str:
    """Compose ``[ENV] | Keys: N`` (or ``Showing: F/N``) plus active modes."""
    showing = f"Showing: {filtered}/{total}" if filtered != total else f"Keys: {total}"
    parts = [f" [{env_label.upper()}]", showing]
    if pattern != "*":
        parts.append(f"Pattern: {pattern}")
    if search_term:
        parts.append(f"Search: {search_term}")
    if tree_mode:
        parts.append("Tree")
    if message:
        parts.append(message)
    return " | ".join(parts)


def format_tree_row(item: FlatItem, theme: UITheme | None = None) -> str:
    """Color the marker and name of one flattened tree row."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    indent_len = 2 * max(0, item.level)
    indent = item.display[:indent_len]
    marker = item.display[indent_len : indent_len + 2]
    name = item.display[indent_len + 2 :]
    name_color = active_theme.tree_folder if item.is_parent else active_theme.tree_key
    return f"{indent}{active_theme.tree_marker}{marker}{reset}{name_color}{name}{reset}"


def format_key_row(key: str, theme: UITheme | None = None) -> str:
    active_theme = theme or DEFAULT_THEME
    return f"{active_theme.key_row}{key}{active_theme.reset}"


def _value_pane_lines(context: RenderContext, right_width: int) -> list[str]:
    theme = context.theme
    if context.show_help:
        return help_lines(theme)
    if context.dialog_title is not None:
        dialog_width = max(20, min(right_width - 2, 72))
        framed = frame_dialog(
            context.dialog_title,
            context.dialog_lines,
            dialog_width,
            theme,
            danger=context.dialog_danger,
        )
        if context.prompt_label is not None:
            framed.insert(-1, frame_dialog("", [f"> {context.prompt_text}_"], dialog_width, theme)[1])
        return ["", *[f" {line}" for line in framed]]

    lines: list[str] = []
    if context.value_title is not None:
        lines.append(f"{theme.value_header}Key: {context.value_title}{theme.reset}")
        lines.append("")
    body = build_value_lines(context.value_text, right_width) if context.value_text else []
    return lines + body[context.value_start :]


def _key_pane_lines(context: RenderContext, content_rows: int) -> list[str]:
    theme = context.theme
    rows: list[str] = []
    if context.prompt_label is not None and context.dialog_title is None:
        rows.append(selected_with_ansi(f"{theme.prompt_query}{context.prompt_label} {context.prompt_text}_{theme.reset}"))
    list_rows = content_rows - len(rows)
    for offset in range(list_rows):
        idx = context.list_start + offset
        if idx >= len(context.key_rows):
            break
        row = context.key_rows[idx]
        if idx == context.selected:
            row = selected_with_ansi(pad_ansi_line(row, context.left_width))
        rows.append(row)
    if not context.key_rows and not rows:
        rows.append(f"{theme.prompt_hint}(no keys){theme.reset}")
    return rows


def compose_frame(context: RenderContext) -> str:
    """Build the full ANSI frame for ``context`` without writing it."""
    theme = context.theme
    content_rows = max(1, context.max_lines)
    left_width = max(1, min(context.left_width, context.width - 2))
    right_width = max(1, context.width - left_width - 2)
    key_lines = _key_pane_lines(context, content_rows)
    value_lines = _value_pane_lines(context, right_width)

    out: list[str] = ["\033[H\033[J"]
    for row in range(content_rows):
        left = key_lines[row] if row < len(key_lines) else ""
        right = value_lines[row] if row < len(value_lines) else ""
        out.append(pad_ansi_line(left, left_width))
        if "\033" in left:
            out.append("\033[0m")
        out.append(f"{theme.divider}│{theme.reset}")
        right_text = clip_ansi_line(right, right_width)
        out.append(right_text)
        if "\033" in right_text:
            out.append("\033[0m")
        out.append("\r\n")

    out.append("\033[7m")
    out.append(build_status_line(context.status_left, context.width))
    out.append("\033[0m")
    return "".join(out)


def render_frame(context: RenderContext) -> None:
    os.write(sys.stdout.fileno(), compose_frame(context).encode("utf-8", errors="replace"))
