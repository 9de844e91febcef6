#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Ownership of the single authenticated SSH session."""

from __future__ import annotations

from collections.abc import Callable
import io
from pathlib import Path
import socket
import threading
from typing import Any

import paramiko
from provide.foundation.logger import get_logger

from remotegit.config.models import AuthMethod, ConnectionConfig, HostKeyPolicy
from remotegit.errors import ConnectError, HostKeyError, KeyParseError, KeyReadError

log = get_logger(__name__)

DEFAULT_KNOWN_HOSTS = "~/.ssh/known_hosts"

# Key types tried, in order, when parsing a private key file.
PRIVATE_KEY_CLASSES: tuple[type[paramiko.PKey], ...] = (
    paramiko.RSAKey,
    paramiko.ECDSAKey,
    paramiko.Ed25519Key,
)


class _RejectUnknownHost(paramiko.MissingHostKeyPolicy):
    """Refuse hosts that are not in any loaded known_hosts file."""

    def missing_host_key(self, client: paramiko.SSHClient, hostname: str, key: paramiko.PKey) -> None:
        raise HostKeyError(
            f"Host key for {hostname} ({key.get_name()} {key.get_base64()[:16]}...) "
            f"is not in known_hosts; connect once with host_key_policy 'accept-new' "
            f"or add the key manually",
            host=hostname,
        )


class _IgnoreHostKey(paramiko.MissingHostKeyPolicy):
    """Accept any host key without recording it."""

    def missing_host_key(self, client: paramiko.SSHClient, hostname: str, key: paramiko.PKey) -> None:
        log.warning(
            "Accepting unverified host key",
            host=hostname,
            key_type=key.get_name(),
            fingerprint=key.get_fingerprint().hex(),
        )


def load_private_key(key_path: str, passphrase: str | None = None) -> paramiko.PKey:
    """Read and parse a private key file.

    Raises KeyReadError when the file cannot be read and KeyParseError when no
    supported key type accepts its contents."""
    try:
        key_text = Path(key_path).expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise KeyReadError(key_path, str(e)) from e

    failures: list[str] = []
    for key_class in PRIVATE_KEY_CLASSES:
        try:
            return key_class.from_private_key(io.StringIO(key_text), password=passphrase)
        except (paramiko.SSHException, ValueError, TypeError) as e:
            failures.append(f"{key_class.__name__}: {e}")
    raise KeyParseError(key_path, "; ".join(failures))


class ConnectionManager:
    """Owns at most one authenticated SSH session for a ConnectionConfig.

    ``connect``, ``disconnect``, ``ensure_connected`` and ``reconnect`` are
    serialized by a re-entrant lock. Session health is not probed implicitly;
    ``ensure_connected`` only connects when no session handle exists. Use
    ``is_alive`` and ``reconnect`` for an explicit health check."""

    def __init__(
        self,
        config: ConnectionConfig,
        client_factory: Callable[[], paramiko.SSHClient] = paramiko.SSHClient,
    ) -> None:
        self._config = config
        self._client_factory = client_factory
        self._client: paramiko.SSHClient | None = None
        self._lock = threading.RLock()
        self._log = log.bind(host=config.host, port=config.port, user=config.user)

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def client(self) -> paramiko.SSHClient | None:
        """The live client, or None when no session exists."""
        return self._client

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def is_alive(self) -> bool:
        """Probe whether the underlying transport is still active."""
        with self._lock:
            if self._client is None:
                return False
            transport = self._client.get_transport()
            return bool(transport is not None and transport.is_active())

    def connect(self) -> None:
        """Build a new authenticated session, replacing any existing one."""
        with self._lock:
            self._close_client()
            auth_kwargs = self._auth_kwargs()

            client = self._client_factory()
            self._apply_host_key_policy(client)

            self._log.info(
                "Connecting to SSH server",
                auth_method=self._config.auth_method.value,
                host_key_policy=self._config.host_key_policy.value,
                timeout=self._config.connect_timeout,
            )
            try:
                client.connect(
                    hostname=self._config.host,
                    port=self._config.port,
                    username=self._config.user,
                    timeout=self._config.connect_timeout,
                    allow_agent=False,
                    look_for_keys=False,
                    **auth_kwargs,
                )
            except HostKeyError:
                client.close()
                self._log.error("SSH host key rejected")
                raise
            except paramiko.BadHostKeyException as e:
                client.close()
                self._log.error("SSH host key mismatch", error=str(e))
                raise HostKeyError(f"SSH host key mismatch: {e}", host=self._config.host) from e
            except paramiko.AuthenticationException as e:
                client.close()
                self._log.error("SSH authentication failed", error=str(e))
                raise ConnectError(f"SSH authentication failed: {e}", host=self._config.host) from e
            except (paramiko.SSHException, OSError, socket.timeout, EOFError) as e:
                client.close()
                self._log.error("SSH connection failed", error=str(e))
                raise ConnectError(f"SSH connection failed: {e}", host=self._config.host) from e

            self._client = client
            self._log.info("SSH connection established")

    def ensure_connected(self) -> bool:
        """Connect if no session exists. Returns True when a new session was created."""
        with self._lock:
            if self._client is not None:
                return False
            self._log.info("No SSH session, connecting")
            self.connect()
            return True

    def reconnect(self) -> None:
        with self._lock:
            self._log.info("Reconnecting SSH session")
            self.connect()

    def disconnect(self) -> None:
        """Close the session. Safe to call when not connected."""
        with self._lock:
            if self._client is None:
                return
            self._close_client()
            self._log.info("SSH connection closed")

    def __enter__(self) -> ConnectionManager:
        self.ensure_connected()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.disconnect()

    def _close_client(self) -> None:
        if self._client is not None:
            try:
                self._client.close()
            finally:
                self._client = None

    def _auth_kwargs(self) -> dict[str, Any]:
        if self._config.auth_method is AuthMethod.PASSWORD:
            return {"password": self._config.password or ""}

        if not self._config.key_path:
            raise KeyReadError("<unset>", "no key path configured", host=self._config.host)
        try:
            pkey = load_private_key(self._config.key_path, self._config.key_passphrase)
        except (KeyReadError, KeyParseError) as e:
            e.host = self._config.host
            self._log.error("SSH key could not be loaded", key_path=self._config.key_path, error=str(e))
            raise
        return {"pkey": pkey}

    def _apply_host_key_policy(self, client: paramiko.SSHClient) -> None:
        policy = self._config.host_key_policy
        known_hosts = self._config.known_hosts_path

        if policy is HostKeyPolicy.INSECURE:
            self._log.warning("Host key verification is disabled for this connection")
            client.set_missing_host_key_policy(_IgnoreHostKey())
            return

        client.load_system_host_keys()
        if known_hosts is None and policy is HostKeyPolicy.ACCEPT_NEW:
            # AutoAddPolicy only persists keys into a file loaded with load_host_keys.
            known_hosts = DEFAULT_KNOWN_HOSTS
        if known_hosts:
            known_hosts_file = Path(known_hosts).expanduser()
            if policy is HostKeyPolicy.ACCEPT_NEW:
                known_hosts_file.parent.mkdir(parents=True, exist_ok=True)
                known_hosts_file.touch(exist_ok=True)
            if known_hosts_file.exists():
                # paramiko saves auto-added keys back to the last loaded file.
                client.load_host_keys(str(known_hosts_file))

        if policy is HostKeyPolicy.ACCEPT_NEW:
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        else:
            client.set_missing_host_key_policy(_RejectUnknownHost())


# 🔼⚙️🔚
