"""Store client contract and Redis connection bootstrap."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import redis

from ..runtime.settings import RedisSettings, SSHSettings
from .tunnel import SSHTunnel, open_ssh_tunnel

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


class StoreClient(Protocol):
    """Subset of the ``redis.Redis`` API the browser relies on."""

    def scan(self, cursor: int = 0, match: str | None = None, count: int | None = None) -> tuple[int, list]:
        ...

    def delete(self, *names: str) -> int:
        ...

    def type(self, name: str) -> Any:
        ...

    def ttl(self, name: str) -> Any:
        ...

    def get(self, name: str) -> Any:
        ...

    def lrange(self, name: str, start: int, end: int) -> Any:
        ...

    def smembers(self, name: str) -> Any:
        ...

    def zrange(self, name: str, start: int, end: int, withscores: bool = False) -> Any:
        ...

    def hgetall(self, name: str) -> Any:
        ...


@dataclass
class StoreConnection:
    """Connected client plus the tunnel it may be riding on."""

    client: redis.Redis
    tunnel: SSHTunnel | None = None

    @property
    def via_tunnel(self) -> bool:
        return self.tunnel is not None

    def close(self) -> None:
        """Close the client and then the tunnel; cleanup errors are logged only."""
        try:
            self.client.close()
        except Exception as exc:
            logger.warning("redis close failed: %s", exc)
        if self.tunnel is not None:
            try:
                self.tunnel.close()
            except Exception as exc:
                logger.warning("ssh tunnel close failed: %s", exc)


def connect_store(
    redis_settings: RedisSettings,
    ssh_settings: SSHSettings | None = None,
    status_callback: StatusCallback | None = None,
) -> StoreConnection:
    """Open a Redis client, tunnelling through SSH when configured.

    The client is pinged before returning so connection problems surface here
    rather than on the first scan.
    """
    host, port = redis_settings.host, redis_settings.port
    tunnel: SSHTunnel | None = None
    if ssh_settings is not None:
        if status_callback is not None:
            status_callback("Establishing SSH tunnel...")
        tunnel = open_ssh_tunnel(ssh_settings, (host, port))
        host, port = tunnel.host, tunnel.port
        if status_callback is not None:
            status_callback("SSH tunnel established, connecting to Redis...")

    client = redis.Redis(
        host=host,
        port=port,
        password=redis_settings.password,
        db=redis_settings.database,
        decode_responses=True,
        encoding_errors="surrogateescape",
    )
    try:
        client.ping()
    except Exception:
        client.close()
        if tunnel is not None:
            tunnel.close()
        raise
    logger.info("connected to redis %s:%d db=%d", host, port, redis_settings.database)
    return StoreConnection(client=client, tunnel=tunnel)
