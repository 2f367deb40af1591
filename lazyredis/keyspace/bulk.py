"""Folder key resolution and batched deletion."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from .types import KeyTree

logger = logging.getLogger(__name__)

DELETE_BATCH_SIZE = 500


class DeleteClient(Protocol):
    def delete(self, *names: str) -> int:
        ...


class BulkDeleteError(RuntimeError):
    """A batch failed after ``completed_keys`` were already deleted.

    ``deleted`` is the store-reported count of the completed batches.
    """

    def __init__(self, message: str, deleted: int, completed_keys: list[str]) -> None:
        super().__init__(message)
        self.deleted = deleted
        self.completed_keys = completed_keys


def keys_under(tree: KeyTree, node_id: int) -> list[str]:
    """Collect every stored key in the subtree, pre-order, ignoring expand state."""
    out: list[str] = []
    stack = [node_id]
    while stack:
        node = tree.node(stack.pop())
        if node.full_key is not None:
            out.append(node.full_key)
        stack.extend(reversed(list(node.children.values())))
    return out


def delete_keys_in_batches(
    client: DeleteClient,
    keys: Sequence[str],
    batch_size: int = DELETE_BATCH_SIZE,
    on_progress: Callable[[int, int], None] | None = None,
) -> int:
    """Delete ``keys`` in sequential batches and return the store's total.

    ``on_progress(done, total)`` runs after every successful batch. A failing
    batch raises ``BulkDeleteError``; earlier batches stay deleted.
    """
    total = len(keys)
    batch_size = max(1, batch_size)
    deleted = 0
    done = 0
    for start in range(0, total, batch_size):
        batch = list(keys[start : start + batch_size])
        try:
            deleted += int(client.delete(*batch))
        except Exception as exc:
            logger.warning("bulk delete failed after %d/%d keys: %s", done, total, exc)
            raise BulkDeleteError(f"Bulk delete failed: {exc}", deleted, list(keys[:done])) from exc
        done += len(batch)
        if on_progress is not None:
            on_progress(done, total)
    logger.info("bulk delete removed %d of %d keys", deleted, total)
    return deleted
