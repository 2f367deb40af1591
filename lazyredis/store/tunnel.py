"""SSH port forwarding to a Redis server behind a bastion host."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sshtunnel import SSHTunnelForwarder

from ..runtime.settings import SSHSettings

logger = logging.getLogger(__name__)

LOCAL_BIND_HOST = "127.0.0.1"


class TunnelError(RuntimeError):
    """Raised when the SSH forward cannot be established."""


@dataclass
class SSHTunnel:
    """Running forward; connect the store client to ``(host, port)``."""

    host: str
    port: int
    forwarder: SSHTunnelForwarder

    def close(self) -> None:
        self.forwarder.stop()
        logger.debug("ssh tunnel on %s:%d closed", self.host, self.port)


def _forwarder_kwargs(ssh: SSHSettings) -> dict[str, object]:
    kwargs: dict[str, object] = {"ssh_username": ssh.username}
    if ssh.private_key_path:
        kwargs["ssh_pkey"] = ssh.private_key_path
        if ssh.passphrase:
            kwargs["ssh_private_key_password"] = ssh.passphrase
    elif ssh.password:
        kwargs["ssh_password"] = ssh.password
    return kwargs


def open_ssh_tunnel(ssh: SSHSettings, destination: tuple[str, int]) -> SSHTunnel:
    """Forward an OS-assigned local port to ``destination`` through ``ssh``."""
    try:
        forwarder = SSHTunnelForwarder(
            (ssh.host, ssh.port),
            remote_bind_address=destination,
            local_bind_address=(LOCAL_BIND_HOST, 0),
            **_forwarder_kwargs(ssh),
        )
        forwarder.start()
    except Exception as exc:
        raise TunnelError(f"SSH tunnel failed: {exc}") from exc
    port = int(forwarder.local_bind_port)
    logger.info("ssh tunnel %s:%d -> %s:%d via %s", LOCAL_BIND_HOST, port, destination[0], destination[1], ssh.host)
    return SSHTunnel(host=LOCAL_BIND_HOST, port=port, forwarder=forwarder)
