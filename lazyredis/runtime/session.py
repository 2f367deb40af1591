"""Browser session: the single owner of key state for one run.

The session wraps the store client, the ``KeyFilter`` and the current tree
navigator, and exposes the operations the key handlers call. Transport errors
are caught here and turned into status/value text; the in-memory state is
left as it was before the failed call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..keyspace import (
    DELETE_BATCH_SIZE,
    SCAN_BATCH_SIZE,
    BulkDeleteError,
    KeyCounts,
    KeyFilter,
    LoadInProgressError,
    TreeNavigator,
    build_tree,
    delete_keys_in_batches,
)
from ..store.client import StoreClient, StoreConnection
from ..store.values import fetch_key_info, ttl_message

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class Session:
    """Key state, selection, and store operations for the running browser."""

    def __init__(
        self,
        client: StoreClient,
        *,
        env_label: str = "default",
        connection: StoreConnection | None = None,
        scan_batch_size: int = SCAN_BATCH_SIZE,
        delete_batch_size: int = DELETE_BATCH_SIZE,
        colorize_values: bool = False,
        style: str = "monokai",
    ) -> None:
        self.client = client
        self.env_label = env_label
        self.connection = connection
        self.keys = KeyFilter(client, scan_batch_size=scan_batch_size)
        self.delete_batch_size = delete_batch_size
        self.colorize_values = colorize_values
        self.style = style
        self.navigator: TreeNavigator | None = None
        self.selected_idx = 0
        self.value_key: str | None = None
        self.value_text = ""
        self.status_message = ""

    # Key set -----------------------------------------------------------

    @property
    def pattern(self) -> str:
        return self.keys.pattern

    @property
    def search_term(self) -> str:
        return self.keys.search_term

    def counts(self) -> KeyCounts:
        return self.keys.counts()

    def load(self, pattern: str | None = None) -> bool:
        """Rescan with ``pattern`` (default: current pattern) and rebuild the view."""
        target = self.keys.pattern if pattern is None else pattern
        try:
            self.keys.load(target)
        except LoadInProgressError as exc:
            self.status_message = str(exc)
            return False
        except Exception as exc:
            logger.warning("loading keys for %r failed: %s", target, exc)
            self.status_message = f"Error loading keys: {exc}"
            return False
        self.status_message = ""
        self.rebuild_view()
        return True

    def refresh(self) -> bool:
        return self.load(self.keys.pattern)

    def apply_search(self, term: str) -> None:
        self.keys.filter(term)
        self.selected_idx = 0
        self.rebuild_view()

    def clear_search(self) -> None:
        self.apply_search("")

    # View ----------------------------------------------------------------

    @property
    def tree_mode(self) -> bool:
        return self.keys.is_tree_mode()

    def toggle_tree_mode(self) -> bool:
        enabled = self.keys.toggle_tree_mode()
        self.selected_idx = 0
        self.rebuild_view()
        self.status_message = "Tree view" if enabled else "List view"
        return enabled

    def rebuild_view(self) -> None:
        """Rebuild the tree from the filtered keys (tree mode) and clamp selection."""
        if self.keys.is_tree_mode():
            self.navigator = TreeNavigator(build_tree(self.keys.filtered_keys))
        else:
            self.navigator = None
        self.clamp_selection()

    def row_count(self) -> int:
        if self.navigator is not None:
            return len(self.navigator)
        return len(self.keys.filtered_keys)

    def row_labels(self) -> list[str]:
        if self.navigator is not None:
            return [item.display for item in self.navigator.items]
        return list(self.keys.filtered_keys)

    def row_is_folder(self, index: int) -> bool:
        return self.navigator is not None and self.navigator.is_selected_folder(index)

    def clamp_selection(self) -> None:
        self.selected_idx = max(0, min(self.selected_idx, self.row_count() - 1))

    def move_selection(self, delta: int) -> bool:
        previous = self.selected_idx
        self.selected_idx += delta
        self.clamp_selection()
        return self.selected_idx != previous

    def select(self, index: int) -> bool:
        previous = self.selected_idx
        self.selected_idx = index
        self.clamp_selection()
        return self.selected_idx != previous

    def selected_key(self) -> str | None:
        if self.navigator is not None:
            return self.navigator.selected_key(self.selected_idx)
        if 0 <= self.selected_idx < len(self.keys.filtered_keys):
            return self.keys.filtered_keys[self.selected_idx]
        return None

    def is_selected_folder(self) -> bool:
        return self.row_is_folder(self.selected_idx)

    def selected_folder_path(self) -> str | None:
        if self.navigator is None:
            return None
        return self.navigator.selected_folder_path(self.selected_idx)

    def selected_folder_keys(self) -> list[str]:
        if self.navigator is None:
            return []
        return self.navigator.selected_folder_keys(self.selected_idx)

    def selected_folder_key_count(self) -> int:
        if self.navigator is None:
            return 0
        return self.navigator.selected_folder_key_count(self.selected_idx)

    @property
    def delimiter(self) -> str:
        if self.navigator is not None:
            return self.navigator.delimiter
        return ":"

    def toggle_selected(self) -> bool:
        return self.navigator is not None and self.navigator.toggle(self.selected_idx)

    def expand_selected(self) -> bool:
        return self.navigator is not None and self.navigator.expand(self.selected_idx)

    def collapse_selected(self) -> bool:
        return self.navigator is not None and self.navigator.collapse(self.selected_idx)

    def expand_all(self) -> bool:
        if self.navigator is None:
            return False
        self.navigator.expand_all()
        return True

    def collapse_all(self) -> bool:
        """Collapse every folder and keep the selection on a visible row."""
        if self.navigator is None:
            return False
        self.navigator.collapse_all()
        self.clamp_selection()
        return True

    def activate_selected(self) -> None:
        """Enter: toggle a folder in tree mode, otherwise show the key's value."""
        if self.is_selected_folder():
            self.toggle_selected()
            return
        self.show_selected_value()

    # Store reads ---------------------------------------------------------

    def show_selected_value(self) -> bool:
        key = self.selected_key()
        if key is None:
            return False
        self.value_key = key
        self.value_text = fetch_key_info(self.client, key, colorize=self.colorize_values, style=self.style)
        return True

    def ttl_text(self, key: str) -> str:
        try:
            return ttl_message(self.client, key)
        except Exception as exc:
            return f"Key: {key}\n\nError fetching TTL: {exc}"

    # Deletion ------------------------------------------------------------

    def delete_key(self, key: str) -> bool:
        """Delete one key and drop it locally without rescanning."""
        try:
            self.client.delete(key)
        except Exception as exc:
            logger.warning("deleting %r failed: %s", key, exc)
            self.value_key = None
            self.value_text = f"✗ Error deleting key: {exc}"
            self.status_message = f"Error deleting key: {exc}"
            return False
        logger.info("deleted key %r", key)
        self.keys.remove_key(key)
        self.rebuild_view()
        self.value_key = None
        self.value_text = f"✓ Key deleted successfully: {key}"
        self.status_message = f"Key deleted: {key}"
        return True

    def bulk_delete(self, keys: list[str], on_progress: ProgressCallback | None = None) -> int:
        """Delete ``keys`` in batches; completed batches are dropped locally even on failure."""
        total = len(keys)
        try:
            deleted = delete_keys_in_batches(self.client, keys, self.delete_batch_size, on_progress)
        except BulkDeleteError as exc:
            self.keys.remove_keys(exc.completed_keys)
            self.rebuild_view()
            self.value_key = None
            self.value_text = f"✗ {exc}\n\nDeleted {exc.deleted} of {total} keys before the failure."
            self.status_message = f"Bulk delete failed after {len(exc.completed_keys)}/{total} keys"
            return exc.deleted
        self.keys.remove_keys(keys)
        self.rebuild_view()
        self.value_key = None
        self.value_text = f"✓ Deleted {deleted} keys"
        self.status_message = f"Deleted {deleted} of {total} keys"
        return deleted

    def close(self) -> None:
        if self.connection is not None:
            self.connection.close()
