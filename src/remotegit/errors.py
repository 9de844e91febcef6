#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Exception hierarchy for remotegit.

Connection failures are raised from ``ConnectionManager.connect`` and never
retried internally. Remote commands that exit non-zero are *not* exceptions:
they come back as unsuccessful ``CommandResult`` objects carrying whatever
output was captured. ``CommandExecutionError`` exists for callers that prefer
to opt into raising via ``CommandResult.raise_for_status()``."""

from __future__ import annotations


class RemoteGitError(Exception):
    """Base exception for all remotegit errors."""


class ConfigurationError(RemoteGitError):
    """Raised when the connection configuration is invalid or unreadable."""


class SSHConnectionError(RemoteGitError):
    """Base exception for failures while establishing the SSH session."""

    def __init__(self, message: str, host: str | None = None):
        self.host = host
        super().__init__(message)


class KeyReadError(SSHConnectionError):
    """Raised when the private key file cannot be read."""

    def __init__(self, key_path: str, reason: str, host: str | None = None):
        self.key_path = key_path
        super().__init__(f"SSH key read failed: {key_path}: {reason}", host)


class KeyParseError(SSHConnectionError):
    """Raised when the private key file is not a key paramiko understands."""

    def __init__(self, key_path: str, reason: str, host: str | None = None):
        self.key_path = key_path
        super().__init__(f"SSH key parse failed: {key_path}: {reason}", host)


class HostKeyError(SSHConnectionError):
    """Raised when the server's host key is not trusted by the configured policy."""


class ConnectError(SSHConnectionError):
    """Raised for transport, authentication, network or timeout failures."""


class NotConnectedError(RemoteGitError):
    """Raised when a command is executed without a live SSH session."""

    def __init__(self, message: str = "SSH connection not established"):
        super().__init__(message)


class CommandExecutionError(RemoteGitError):
    """Raised by ``CommandResult.raise_for_status`` for a failed remote command."""

    def __init__(self, command: str, exit_status: int | None, output: str):
        self.command = command
        self.exit_status = exit_status
        self.output = output
        super().__init__(f"Remote command exited with status {exit_status}: {command}")


# 🔼⚙️🔚
