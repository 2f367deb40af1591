"""Public package surface for lazyredis.

Exports ``main`` for programmatic CLI invocation.
The key-space engine lives in ``lazyredis.keyspace``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
