"""Loaded key set plus the client-side search narrowing over it.

``KeyFilter`` is the single owner of the key lists. Reloads replace the lists
wholesale and never leave a half-updated state behind.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .scan import SCAN_BATCH_SIZE, ScanClient, scan_keys


class LoadInProgressError(RuntimeError):
    """Raised when a load is requested while another one is still running."""


@dataclass(frozen=True)
class KeyCounts:
    total: int
    filtered: int

    @property
    def is_filtered(self) -> bool:
        return self.filtered != self.total


def filter_keys(keys: list[str], term: str) -> list[str]:
    """Return keys containing ``term`` case-insensitively, order preserved."""
    if not term:
        return list(keys)
    needle = term.lower()
    return [key for key in keys if needle in key.lower()]


class KeyFilter:
    """Full key set, search-filtered subset, and tree-mode flag."""

    def __init__(self, client: ScanClient, scan_batch_size: int = SCAN_BATCH_SIZE) -> None:
        self.client = client
        self.scan_batch_size = scan_batch_size
        self.all_keys: list[str] = []
        self.filtered_keys: list[str] = []
        self.pattern = "*"
        self.search_term = ""
        self.tree_mode = False
        self._loading = False

    @property
    def is_loading(self) -> bool:
        return self._loading

    def load(self, pattern: str = "*") -> list[str]:
        """Scan ``pattern`` and replace the key set, keeping the search term.

        State is untouched when the scan fails.
        """
        if self._loading:
            raise LoadInProgressError("Already loading keys")
        self._loading = True
        try:
            keys = scan_keys(self.client, pattern, self.scan_batch_size)
        finally:
            self._loading = False
        self.pattern = pattern
        self.all_keys = keys
        self.filtered_keys = filter_keys(keys, self.search_term)
        return self.filtered_keys

    def filter(self, term: str) -> list[str]:
        self.search_term = term
        self.filtered_keys = filter_keys(self.all_keys, term)
        return self.filtered_keys

    def clear_filter(self) -> list[str]:
        return self.filter("")

    def remove_key(self, key: str) -> None:
        """Drop ``key`` locally after a confirmed deletion; absent keys are ignored."""
        self.remove_keys((key,))

    def remove_keys(self, keys: Iterable[str]) -> None:
        doomed = set(keys)
        if not doomed:
            return
        self.all_keys = [key for key in self.all_keys if key not in doomed]
        self.filtered_keys = [key for key in self.filtered_keys if key not in doomed]

    def toggle_tree_mode(self) -> bool:
        self.tree_mode = not self.tree_mode
        return self.tree_mode

    def is_tree_mode(self) -> bool:
        return self.tree_mode

    def counts(self) -> KeyCounts:
        return KeyCounts(total=len(self.all_keys), filtered=len(self.filtered_keys))
