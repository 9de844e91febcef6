#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Run single shell commands over the shared SSH session."""

from __future__ import annotations

from collections.abc import Iterable
import socket

import paramiko
from provide.foundation.logger import get_logger

from remotegit.errors import NotConnectedError
from remotegit.protocols import CommandResult
from remotegit.ssh.connection import ConnectionManager

log = get_logger(__name__)

REDACTED = "***"


def redact(text: str, secrets: Iterable[str | None]) -> str:
    """Replace every occurrence of each non-empty secret with ``***``."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, REDACTED)
    return text


class CommandExecutor:
    """Execute commands on the manager's session, one channel per command.

    There is no command timeout and no cancellation; a call blocks until the
    remote command exits. The executor never connects on its own."""

    def __init__(self, connection: ConnectionManager, secrets: Iterable[str | None] = ()) -> None:
        self._connection = connection
        self._secrets = tuple(s for s in secrets if s)
        self._log = log.bind(host=connection.config.host)

    @property
    def connection(self) -> ConnectionManager:
        return self._connection

    def redact(self, text: str) -> str:
        return redact(text, self._secrets)

    def execute(self, command: str) -> CommandResult:
        """Run ``command`` and capture its combined stdout/stderr.

        Raises NotConnectedError when there is no session. A non-zero exit
        status or a channel failure comes back as an unsuccessful result."""
        client = self._connection.client
        if client is None:
            raise NotConnectedError()

        safe_command = self.redact(command)
        self._log.debug("SSH command", command=safe_command)

        try:
            output, exit_status = self._run_on_channel(client, command)
        except (paramiko.SSHException, OSError, socket.timeout, EOFError) as e:
            self._log.error("SSH channel failed", command=safe_command, error=str(e))
            return CommandResult(command=command, output="", exit_status=None, error=str(e))

        if exit_status != 0:
            error = (
                f"Process exited with status {exit_status}"
                if exit_status >= 0
                else "Process exited without reporting an exit status"
            )
            self._log.error(
                "Command failed",
                command=safe_command,
                exit_status=exit_status,
                output=self.redact(output),
            )
            return CommandResult(command=command, output=output, exit_status=exit_status, error=error)

        self._log.debug("Command succeeded", command=safe_command, output=self.redact(output))
        return CommandResult(command=command, output=output, exit_status=exit_status)

    def _run_on_channel(self, client: paramiko.SSHClient, command: str) -> tuple[str, int]:
        transport = client.get_transport()
        if transport is None or not transport.is_active():
            raise paramiko.SSHException("SSH transport is not active")

        channel = transport.open_session()
        try:
            channel.set_combine_stderr(True)
            channel.exec_command(command)
            with channel.makefile("rb") as stream:
                raw = stream.read()
            exit_status = channel.recv_exit_status()
        finally:
            channel.close()
        return raw.decode("utf-8", errors="replace"), exit_status


PROBE_COMMAND = "hostname && pwd"


def probe_connection(connection: ConnectionManager) -> CommandResult:
    """Open a fresh session, run a trivial command and close it again.

    Connection errors propagate; the probe command's result is returned."""
    connection.connect()
    try:
        return CommandExecutor(connection).execute(PROBE_COMMAND)
    finally:
        connection.disconnect()


# 🔼⚙️🔚
