"""Hierarchy separator inference for flat key names."""

from __future__ import annotations

from collections.abc import Iterable

DELIMITER_CANDIDATES: tuple[str, ...] = (":", "/", ".", "-")
DEFAULT_DELIMITER = ":"


def detect_delimiter(keys: Iterable[str]) -> str:
    """Pick the candidate separator occurring most often across ``keys``.

    Ties keep candidate order (``:`` before ``/`` before ``.`` before ``-``);
    when no candidate occurs at all the default ``:`` is returned.
    """
    counts = dict.fromkeys(DELIMITER_CANDIDATES, 0)
    for key in keys:
        for delim in DELIMITER_CANDIDATES:
            counts[delim] += key.count(delim)
    ranked = sorted(DELIMITER_CANDIDATES, key=lambda delim: counts[delim], reverse=True)
    best = ranked[0]
    return best if counts[best] > 0 else DEFAULT_DELIMITER
