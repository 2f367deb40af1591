"""Key-pane width helpers."""

from __future__ import annotations


def compute_left_width(total_width: int) -> int:
    """Choose default key-pane width from total terminal width."""
    if total_width <= 60:
        return max(16, total_width // 2)
    return max(24, min(60, (total_width * 2) // 5))


def clamp_left_width(total_width: int, desired_left: int) -> int:
    """Clamp requested key-pane width so both panes stay usable."""
    max_possible = max(1, total_width - 2)
    min_left = max(12, min(20, total_width - 12))
    max_left = max(min_left, total_width - 12)
    max_left = min(max_left, max_possible)
    min_left = min(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


def initial_left_width(total_width: int, saved_percent: float | None) -> int:
    """Restore the persisted pane split, falling back to the default width."""
    if saved_percent is None:
        return clamp_left_width(total_width, compute_left_width(total_width))
    return clamp_left_width(total_width, int(round(total_width * saved_percent / 100.0)))


def scroll_start_for_selection(selected: int, start: int, visible_rows: int, row_count: int) -> int:
    """Return a list start that keeps ``selected`` inside the visible window."""
    visible_rows = max(1, visible_rows)
    if selected < start:
        start = selected
    elif selected >= start + visible_rows:
        start = selected - visible_rows + 1
    return max(0, min(start, max(0, row_count - visible_rows)))
