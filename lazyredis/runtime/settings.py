"""Connection settings resolved from ``.env`` files and the environment.

``--env NAME`` selects ``.env.NAME``; process environment variables win over
file values. Parsing is strict so misconfiguration fails before the UI starts.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

DEFAULT_ENV_FILE = ".env"


class SettingsError(ValueError):
    """Raised for missing env files or invalid setting values."""


@dataclass(frozen=True)
class RedisSettings:
    host: str = "localhost"
    port: int = 6379
    password: str | None = None
    database: int = 0


@dataclass(frozen=True)
class SSHSettings:
    host: str
    username: str
    port: int = 22
    private_key_path: str | None = None
    passphrase: str | None = None
    password: str | None = None

    @property
    def auth_method(self) -> str:
        return "Private Key" if self.private_key_path else "Password"


@dataclass(frozen=True)
class Settings:
    env_file: str
    redis: RedisSettings
    ssh: SSHSettings | None = None

    @property
    def env_label(self) -> str:
        """Short environment name shown in the status bar."""
        if self.env_file == DEFAULT_ENV_FILE:
            return "default"
        return self.env_file.removeprefix(f"{DEFAULT_ENV_FILE}.")


def env_file_name(env_name: str | None) -> str:
    return f"{DEFAULT_ENV_FILE}.{env_name}" if env_name else DEFAULT_ENV_FILE


def _optional(values: Mapping[str, str | None], name: str) -> str | None:
    value = values.get(name)
    return value if value else None


def _int_value(values: Mapping[str, str | None], name: str, default: int) -> int:
    raw = values.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise SettingsError(f"{name} must be an integer, got {raw!r}") from exc


def settings_from_mapping(values: Mapping[str, str | None], env_file: str = DEFAULT_ENV_FILE) -> Settings:
    """Build ``Settings`` from already-merged variable values."""
    redis_settings = RedisSettings(
        host=_optional(values, "REDIS_HOST") or "localhost",
        port=_int_value(values, "REDIS_PORT", 6379),
        password=_optional(values, "REDIS_PASSWORD"),
        database=_int_value(values, "REDIS_DB", 0),
    )

    ssh_settings: SSHSettings | None = None
    if (values.get("USE_SSH") or "").strip().lower() == "true":
        host = _optional(values, "SSH_HOST")
        username = _optional(values, "SSH_USERNAME")
        if host is None or username is None:
            raise SettingsError("USE_SSH=true requires SSH_HOST and SSH_USERNAME")
        key_path = _optional(values, "SSH_PRIVATE_KEY_PATH")
        if key_path is not None:
            key_path = str(Path(key_path).expanduser())
            if not Path(key_path).is_file():
                raise SettingsError(f"SSH private key not found: {key_path}")
        ssh_settings = SSHSettings(
            host=host,
            username=username,
            port=_int_value(values, "SSH_PORT", 22),
            private_key_path=key_path,
            passphrase=_optional(values, "SSH_PASSPHRASE"),
            password=_optional(values, "SSH_PASSWORD"),
        )

    return Settings(env_file=env_file, redis=redis_settings, ssh=ssh_settings)


def load_settings(
    env_name: str | None = None,
    base_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from ``base_dir/.env[.NAME]`` overlaid by ``environ``.

    A missing default ``.env`` is fine; a missing named env file is an error.
    """
    env_file = env_file_name(env_name)
    env_path = (base_dir or Path.cwd()) / env_file
    if env_path.is_file():
        file_values = dict(dotenv_values(env_path))
    elif env_name:
        raise SettingsError(f"Environment file '{env_file}' not found at {env_path}")
    else:
        file_values = {}

    merged: dict[str, str | None] = dict(file_values)
    merged.update(os.environ if environ is None else environ)
    return settings_from_mapping(merged, env_file)
