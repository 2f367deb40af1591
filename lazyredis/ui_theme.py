"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (key pane, dialogs, help). Value
highlighting uses a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    tree_marker: str
    tree_folder: str
    tree_key: str
    key_row: str
    prompt_query: str
    prompt_hint: str
    value_header: str
    value_ok: str
    value_error: str
    dialog_border: str
    dialog_danger: str
    dialog_title: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    tree_folder="\033[1;34m",
    tree_key="\033[38;5;252m",
    key_row="\033[38;5;252m",
    prompt_query="\033[1;38;5;81m",
    prompt_hint="\033[2;38;5;250m",
    value_header="\033[1;38;5;229m",
    value_ok="\033[38;5;42m",
    value_error="\033[38;5;203m",
    dialog_border="\033[38;5;45m",
    dialog_danger="\033[1;38;5;203m",
    dialog_title="\033[1;38;5;45m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;39m",
    tree_folder="\033[1;38;5;45m",
    tree_key="\033[38;5;153m",
    key_row="\033[38;5;252m",
    prompt_query="\033[1;38;5;45m",
    prompt_hint="\033[2;38;5;110m",
    value_header="\033[1;38;5;117m",
    value_ok="\033[38;5;84m",
    value_error="\033[38;5;209m",
    dialog_border="\033[38;5;39m",
    dialog_danger="\033[1;38;5;209m",
    dialog_title="\033[1;38;5;39m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="",
    tree_folder="",
    tree_key="",
    key_row="",
    prompt_query="",
    prompt_hint="",
    value_header="",
    value_ok="",
    value_error="",
    dialog_border="",
    dialog_danger="",
    dialog_title="",
    help_heading="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Resolve a theme by name; ``no_color`` always yields the plain palette."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]
