#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Connection configuration model and JSON persistence."""

from __future__ import annotations

from enum import Enum
import json
from pathlib import Path
from typing import Any

from attrs import asdict, define, evolve, field, validators
from provide.foundation.logger import get_logger

from remotegit.errors import ConfigurationError

log = get_logger(__name__)

DEFAULT_CONFIG_FILENAME = "config.json"
DEFAULT_SSH_PORT = 22
DEFAULT_SSH_USER = "root"
DEFAULT_WORKING_DIR = "/root/projects"
DEFAULT_CONNECT_TIMEOUT = 10.0


class AuthMethod(str, Enum):
    """Supported SSH authentication variants."""

    PASSWORD = "password"
    KEY = "key"


class HostKeyPolicy(str, Enum):
    """How the server's host key is checked on connect.

    STRICT       known_hosts pinning; unknown hosts are rejected.
    ACCEPT_NEW   unknown hosts are trusted on first use and saved to
                 known_hosts_path (default ~/.ssh/known_hosts).
    INSECURE     no verification at all.
    """

    STRICT = "strict"
    ACCEPT_NEW = "accept-new"
    INSECURE = "insecure"


def _positive(instance: Any, attribute: Any, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{attribute.name} must be positive, got {value}")


def _port_range(instance: Any, attribute: Any, value: int) -> None:
    if not 1 <= value <= 65535:
        raise ValueError(f"{attribute.name} must be between 1 and 65535, got {value}")


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


@define(frozen=True)
class ConnectionConfig:
    """Everything needed to reach the remote host and operate on its repositories.

    Exactly one credential is active at a time, selected by ``auth_method``;
    the other credential field is ignored. A missing ``github_token`` only
    disables token injection."""

    host: str = field(default="", converter=str)
    port: int = field(default=DEFAULT_SSH_PORT, converter=int, validator=_port_range)
    user: str = field(default=DEFAULT_SSH_USER, converter=str)
    auth_method: AuthMethod = field(default=AuthMethod.PASSWORD, converter=AuthMethod)
    password: str | None = field(default=None, converter=_optional_str, repr=False)
    key_path: str | None = field(default=None, converter=_optional_str)
    key_passphrase: str | None = field(default=None, converter=_optional_str, repr=False)
    working_dir: str = field(default=DEFAULT_WORKING_DIR, converter=str)
    github_token: str | None = field(default=None, converter=_optional_str, repr=False)
    connect_timeout: float = field(default=DEFAULT_CONNECT_TIMEOUT, converter=float, validator=_positive)
    host_key_policy: HostKeyPolicy = field(default=HostKeyPolicy.STRICT, converter=HostKeyPolicy)
    known_hosts_path: str | None = field(default=None, converter=_optional_str)
    is_configured: bool = field(default=False, validator=validators.instance_of(bool))

    @property
    def credential(self) -> str | None:
        """The credential value for the active auth variant."""
        if self.auth_method is AuthMethod.PASSWORD:
            return self.password
        return self.key_path

    @property
    def has_token(self) -> bool:
        return bool(self.github_token)

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def validate_credentials(self) -> None:
        """Raise ConfigurationError unless the host and active credential are set."""
        if not self.host:
            raise ConfigurationError("SSH host is not configured")
        if self.credential is None:
            if self.auth_method is AuthMethod.PASSWORD:
                raise ConfigurationError("Password authentication selected but no password provided")
            raise ConfigurationError("Key authentication selected but no key path provided")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the on-disk JSON layout."""
        data = asdict(self, recurse=False)
        return {
            "ssh_host": data["host"],
            "ssh_port": str(data["port"]),
            "ssh_user": data["user"],
            "ssh_key_path": data["key_path"] or "",
            "ssh_key_passphrase": data["key_passphrase"] or "",
            "ssh_password": data["password"] or "",
            "auth_method": self.auth_method.value,
            "working_dir": data["working_dir"],
            "github_token": data["github_token"] or "",
            "connect_timeout": data["connect_timeout"],
            "host_key_policy": self.host_key_policy.value,
            "known_hosts_path": data["known_hosts_path"] or "",
            "is_configured": data["is_configured"],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConnectionConfig:
        """Build a config from the on-disk JSON layout; unknown keys are ignored."""
        key_map = {
            "ssh_host": "host",
            "ssh_port": "port",
            "ssh_user": "user",
            "ssh_key_path": "key_path",
            "ssh_key_passphrase": "key_passphrase",
            "ssh_password": "password",
            "auth_method": "auth_method",
            "working_dir": "working_dir",
            "github_token": "github_token",
            "connect_timeout": "connect_timeout",
            "host_key_policy": "host_key_policy",
            "known_hosts_path": "known_hosts_path",
            "is_configured": "is_configured",
        }
        kwargs = {attr: data[key] for key, attr in key_map.items() if key in data}
        if "auth_method" in kwargs:
            # Files written by earlier releases treat anything but "password" as key auth.
            kwargs["auth_method"] = (
                AuthMethod.PASSWORD if kwargs["auth_method"] == AuthMethod.PASSWORD.value else AuthMethod.KEY
            )
        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def with_changes(self, **changes: Any) -> ConnectionConfig:
        try:
            return evolve(self, **changes)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e


def default_config() -> ConnectionConfig:
    """The configuration used when no config file exists yet."""
    return ConnectionConfig()


def load_config(path: Path) -> ConnectionConfig:
    """Load configuration from a JSON file, falling back to defaults if it is missing."""
    if not path.exists():
        log.info("Config file not found, using defaults", path=str(path))
        return default_config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Config file {path} could not be read: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")

    config = ConnectionConfig.from_dict(data)
    log.debug("Configuration loaded", path=str(path), host=config.host, auth_method=config.auth_method.value)
    return config


def save_config(config: ConnectionConfig, path: Path) -> None:
    """Write configuration as indented JSON."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Config file {path} could not be written: {e}") from e
    log.info("Configuration saved", path=str(path), host=config.host)


# 🔼⚙️🔚
