"""Key-tree construction from flat key lists."""

from __future__ import annotations

from collections.abc import Iterable

from .delimiter import detect_delimiter
from .types import ROOT_ID, KeyTree


def build_tree(keys: Iterable[str], delimiter: str | None = None) -> KeyTree:
    """Build a fresh ``KeyTree`` from ``keys`` split on ``delimiter``.

    The delimiter is inferred when not supplied. The last segment of every key
    gets ``full_key`` set, even if that node is already a folder for a longer
    key; intermediate segments get ``full_path``.
    """
    keys = list(keys)
    if not delimiter:
        delimiter = detect_delimiter(keys)

    tree = KeyTree(delimiter=delimiter)
    for key in keys:
        parts = key.split(delimiter)
        last = len(parts) - 1
        current_id = ROOT_ID
        for idx, part in enumerate(parts):
            child_id = tree.node(current_id).children.get(part)
            if child_id is None:
                child_id = tree.add_child(current_id, part, idx)
            child = tree.node(child_id)
            if idx == last:
                child.full_key = key
            elif child.full_path is None:
                child.full_path = delimiter.join(parts[: idx + 1])
            current_id = child_id
    return tree


def expand_all(tree: KeyTree) -> None:
    for node in tree.nodes:
        node.is_expanded = True


def collapse_all(tree: KeyTree) -> None:
    """Collapse every folder; the synthetic root stays open."""
    for node in tree.nodes[ROOT_ID + 1 :]:
        node.is_expanded = False
