"""Cursor-driven key enumeration against the store."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)

SCAN_BATCH_SIZE = 100


class ScanClient(Protocol):
    def scan(self, cursor: int = 0, match: str | None = None, count: int | None = None) -> tuple[int, list]:
        ...


def _as_text(key: str | bytes) -> str:
    """Decode raw key bytes so the name round-trips back to the store unchanged."""
    if isinstance(key, bytes):
        return key.decode("utf-8", errors="surrogateescape")
    return key


def scan_keys(client: ScanClient, pattern: str = "*", batch_size: int = SCAN_BATCH_SIZE) -> list[str]:
    """Enumerate every key matching ``pattern`` and return them sorted.

    Batches are requested one at a time until the store hands back cursor
    ``0``. Duplicates reported across batches are dropped. Any client error
    propagates and nothing collected so far is returned.
    """
    seen: set[str] = set()
    cursor = 0
    batches = 0
    while True:
        next_cursor, batch = client.scan(cursor, match=pattern, count=batch_size)
        batches += 1
        seen.update(_as_text(key) for key in batch)
        cursor = int(next_cursor)
        if cursor == 0:
            break
    logger.debug("scan %r finished: %d keys in %d batches", pattern, len(seen), batches)
    return sorted(seen)
