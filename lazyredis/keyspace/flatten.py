"""Tree flattening into display rows and selection-relative queries."""

from __future__ import annotations

import unicodedata

from .build import collapse_all, expand_all
from .bulk import keys_under
from .types import ROOT_ID, FlatItem, KeyTree, TreeNode

INDENT = "  "
EXPANDED_ICON = "▼ "
COLLAPSED_ICON = "▶ "
LEAF_ICON = "  "


def _name_sort_key(name: str) -> tuple[str, str]:
    """Accent- and case-insensitive order, lowercase before uppercase on ties."""
    decomposed = unicodedata.normalize("NFKD", name)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return folded, name.swapcase()


def _child_order_key(node: TreeNode) -> tuple[bool, tuple[str, str]]:
    return (not node.is_parent, _name_sort_key(node.name))


def expand_icon(node: TreeNode) -> str:
    if not node.is_parent:
        return LEAF_ICON
    return EXPANDED_ICON if node.is_expanded else COLLAPSED_ICON


def flatten_tree(tree: KeyTree) -> list[FlatItem]:
    """Return visible rows in pre-order, folders before leaves at every level."""
    items: list[FlatItem] = []

    def walk(node_id: int) -> None:
        node = tree.node(node_id)
        if node_id != ROOT_ID:
            items.append(
                FlatItem(
                    display=f"{INDENT * node.level}{expand_icon(node)}{node.name}",
                    is_parent=node.is_parent,
                    is_expanded=node.is_expanded,
                    level=node.level,
                    node_id=node_id,
                    full_key=node.full_key,
                    full_path=node.full_path,
                )
            )
        if node_id != ROOT_ID and not node.is_expanded:
            return
        children = sorted(node.children.values(), key=lambda child_id: _child_order_key(tree.node(child_id)))
        for child_id in children:
            walk(child_id)

    walk(ROOT_ID)
    return items


class TreeNavigator:
    """Flattened view over a ``KeyTree`` answering queries by row index.

    ``items`` is replaced after every toggle; rows are never edited in place.
    Out-of-range indices are no-ops and yield the absent result.
    """

    def __init__(self, tree: KeyTree) -> None:
        self.tree = tree
        self.items: list[FlatItem] = flatten_tree(tree)

    @property
    def delimiter(self) -> str:
        return self.tree.delimiter

    def __len__(self) -> int:
        return len(self.items)

    def item(self, index: int) -> FlatItem | None:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def refresh(self) -> None:
        self.items = flatten_tree(self.tree)

    def selected_key(self, index: int) -> str | None:
        item = self.item(index)
        return item.full_key if item is not None else None

    def selected_folder_path(self, index: int) -> str | None:
        item = self.item(index)
        if item is None or not item.is_parent:
            return None
        return item.full_path

    def selected_folder_keys(self, index: int) -> list[str]:
        item = self.item(index)
        if item is None or not item.is_parent:
            return []
        return keys_under(self.tree, item.node_id)

    def selected_folder_key_count(self, index: int) -> int:
        return len(self.selected_folder_keys(index))

    def is_selected_folder(self, index: int) -> bool:
        item = self.item(index)
        return item is not None and item.is_parent

    def toggle(self, index: int) -> bool:
        item = self.item(index)
        if item is None or not item.is_parent:
            return False
        node = self.tree.node(item.node_id)
        node.is_expanded = not node.is_expanded
        self.refresh()
        return True

    def expand(self, index: int) -> bool:
        item = self.item(index)
        if item is None or not item.is_parent or item.is_expanded:
            return False
        return self.toggle(index)

    def collapse(self, index: int) -> bool:
        item = self.item(index)
        if item is None or not item.is_parent or not item.is_expanded:
            return False
        return self.toggle(index)

    def expand_all(self) -> None:
        expand_all(self.tree)
        self.refresh()

    def collapse_all(self) -> None:
        collapse_all(self.tree)
        self.refresh()
