"""Redis-facing collaborators: client bootstrap, SSH tunnel, value formatting."""

from __future__ import annotations

from .client import StatusCallback, StoreClient, StoreConnection, connect_store
from .tunnel import SSHTunnel, TunnelError, open_ssh_tunnel
from .values import TTLInfo, colorize_json_value, fetch_key_info, format_ttl, format_ttl_details, ttl_message

__all__ = [
    "StatusCallback",
    "StoreClient",
    "StoreConnection",
    "connect_store",
    "SSHTunnel",
    "TunnelError",
    "open_ssh_tunnel",
    "TTLInfo",
    "colorize_json_value",
    "fetch_key_info",
    "format_ttl",
    "format_ttl_details",
    "ttl_message",
]
