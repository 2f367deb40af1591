"""Connection self-test used by ``lazyredis --test-conn``."""

from __future__ import annotations

import sys
from typing import TextIO

from ..runtime.settings import Settings
from .client import connect_store

SSH_TIPS: tuple[str, ...] = (
    "Verify SSH host and port are correct",
    "Check SSH credentials (username/key/password)",
    "Ensure private key file exists and has correct permissions",
    "Verify Redis host/port on remote server",
    "Check if firewall allows the connection",
)

DIRECT_TIPS: tuple[str, ...] = (
    "Verify Redis host and port are correct",
    "Check if Redis is running",
    "Verify Redis password if required",
    "Check firewall settings",
)


def describe_settings(settings: Settings) -> list[str]:
    redis_settings = settings.redis
    ssh = settings.ssh
    lines = [
        "Configuration:",
        f"  Environment: {settings.env_file}",
        f"  Use SSH: {ssh is not None}",
    ]
    if ssh is not None:
        lines.extend(
            [
                f"  SSH Host: {ssh.host}:{ssh.port}",
                f"  SSH User: {ssh.username}",
                f"  SSH Auth: {ssh.auth_method}",
                f"  Redis Target: {redis_settings.host}:{redis_settings.port}",
            ]
        )
    else:
        lines.append(f"  Redis Host: {redis_settings.host}:{redis_settings.port}")
    lines.append(f"  Redis DB: {redis_settings.database}")
    return lines


def run_connection_test(settings: Settings, out: TextIO | None = None) -> int:
    """Connect, ping, and report server facts; returns a process exit code."""
    out = out or sys.stdout

    def emit(line: str = "") -> None:
        out.write(line + "\n")

    emit("Testing connection...")
    emit()
    for line in describe_settings(settings):
        emit(line)
    emit()

    try:
        connection = connect_store(settings.redis, settings.ssh, status_callback=emit)
        try:
            client = connection.client
            if connection.tunnel is not None:
                emit(f"SSH tunnel established on local port {connection.tunnel.port}")
            emit(f"Redis connection successful: {'PONG' if client.ping() else 'no reply'}")
            server_info = client.info("server")
            emit(f"Redis version: {server_info.get('redis_version', 'unknown')}")
            emit(f"Total keys in DB {settings.redis.database}: {client.dbsize()}")
        finally:
            connection.close()
    except Exception as exc:
        emit("Connection test failed!")
        emit(f"Error: {exc}")
        emit()
        emit("Troubleshooting tips:")
        for tip in SSH_TIPS if settings.ssh is not None else DIRECT_TIPS:
            emit(f"  - {tip}")
        return 1

    emit()
    emit("Connection test passed!")
    return 0
