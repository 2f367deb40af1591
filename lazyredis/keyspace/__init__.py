"""Key-space scanning, filtering, and hierarchy navigation.

Turns a flat Redis key namespace into a sorted, searchable key set and an
expandable tree keyed by the inferred delimiter.
"""

from __future__ import annotations

from .build import build_tree, collapse_all, expand_all
from .bulk import DELETE_BATCH_SIZE, BulkDeleteError, delete_keys_in_batches, keys_under
from .delimiter import DEFAULT_DELIMITER, DELIMITER_CANDIDATES, detect_delimiter
from .filtering import KeyCounts, KeyFilter, LoadInProgressError, filter_keys
from .flatten import TreeNavigator, flatten_tree
from .scan import SCAN_BATCH_SIZE, scan_keys
from .types import ROOT_ID, FlatItem, KeyTree, TreeNode

__all__ = [
    "ROOT_ID",
    "TreeNode",
    "KeyTree",
    "FlatItem",
    "SCAN_BATCH_SIZE",
    "scan_keys",
    "KeyCounts",
    "KeyFilter",
    "LoadInProgressError",
    "filter_keys",
    "DEFAULT_DELIMITER",
    "DELIMITER_CANDIDATES",
    "detect_delimiter",
    "build_tree",
    "expand_all",
    "collapse_all",
    "flatten_tree",
    "TreeNavigator",
    "DELETE_BATCH_SIZE",
    "BulkDeleteError",
    "keys_under",
    "delete_keys_in_batches",
]
