"""Tree datatypes used across key-space modules."""

from __future__ import annotations

from dataclasses import dataclass, field

ROOT_ID = 0


@dataclass
class TreeNode:
    """One path segment of the key hierarchy.

    A node with children is a folder; ``full_key`` is set when the segment
    terminates a stored key, which may also be true for folders.
    """

    name: str
    level: int
    full_key: str | None = None
    full_path: str | None = None
    children: dict[str, int] = field(default_factory=dict)
    is_expanded: bool = False

    @property
    def is_parent(self) -> bool:
        return bool(self.children)


@dataclass
class KeyTree:
    """Arena of tree nodes; node ids index ``nodes`` and ``ROOT_ID`` is the root."""

    delimiter: str
    nodes: list[TreeNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.nodes:
            self.nodes.append(TreeNode(name="root", level=-1, is_expanded=True))

    @property
    def root(self) -> TreeNode:
        return self.nodes[ROOT_ID]

    def node(self, node_id: int) -> TreeNode:
        return self.nodes[node_id]

    def add_child(self, parent_id: int, name: str, level: int) -> int:
        """Append a collapsed child under ``parent_id`` and return its id."""
        node_id = len(self.nodes)
        self.nodes.append(TreeNode(name=name, level=level))
        self.nodes[parent_id].children[name] = node_id
        return node_id


@dataclass(frozen=True)
class FlatItem:
    """One visible row of the flattened tree."""

    display: str
    is_parent: bool
    is_expanded: bool
    level: int
    node_id: int
    full_key: str | None = None
    full_path: str | None = None
