#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Git workflows composed from remote shell commands.

Each operation is a linear pipeline of commands run over the shared SSH
session. Blocking SSH work runs in a worker thread so the public API is
async, the same way the GitEngine helpers wrap pygit2 calls."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from provide.foundation.logger import get_logger

from remotegit.config.models import ConnectionConfig
from remotegit.engines.git.credentials import inject_token, strip_userinfo
from remotegit.engines.git.discovery import ProjectDiscovery
from remotegit.errors import NotConnectedError, SSHConnectionError
from remotegit.paths import normalize_remote_path
from remotegit.protocols import CommandResult, FileInfo, OperationResult, Project, StepResult
from remotegit.ssh.commands import chain, either, in_directory, shell_command
from remotegit.ssh.connection import ConnectionManager
from remotegit.ssh.executor import CommandExecutor

log = get_logger(__name__)

CREDENTIAL_STEP = "credential_update"
PUSH_STEPS = ("add", "commit", "push")


def _existence_probe(path: str, found: str, missing: str) -> str:
    return either(
        chain(shell_command("test", "-d", path), shell_command("echo", found)),
        shell_command("echo", missing),
    )


class GitOperationOrchestrator:
    """Clone, pull, push, status and remove repositories on the remote host.

    Every operation connects lazily when the manager holds no session and
    returns an OperationResult carrying both the output transcript and the
    error (None on success). Nothing is rolled back when a later step of a
    pipeline fails."""

    def __init__(self, connection: ConnectionManager, executor: CommandExecutor | None = None) -> None:
        self._connection = connection
        self._config: ConnectionConfig = connection.config
        self._executor = executor or CommandExecutor(
            connection,
            secrets=(self._config.github_token, self._config.password, self._config.key_passphrase),
        )
        self._discovery = ProjectDiscovery(self._executor, self._config.working_dir)
        self._log = log.bind(host=self._config.host)
        self._log.debug("GitOperationOrchestrator initialized", working_dir=self._config.working_dir)

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> GitOperationOrchestrator:
        return cls(ConnectionManager(config))

    @property
    def connection(self) -> ConnectionManager:
        return self._connection

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    async def ensure_connected(self) -> None:
        """Connect when no session exists; raises SSHConnectionError on failure."""
        created = await asyncio.to_thread(self._connection.ensure_connected)
        if created:
            self._log.info("SSH session established on demand")

    async def close(self) -> None:
        await asyncio.to_thread(self._connection.disconnect)

    # --- Discovery ---

    async def list_projects(self) -> list[Project]:
        await self.ensure_connected()
        return await asyncio.to_thread(self._discovery.list_projects)

    async def list_files(self, path: str | None = None) -> list[FileInfo]:
        await self.ensure_connected()
        return await asyncio.to_thread(self._discovery.list_files, path)

    # --- Git operations ---

    async def clone(self, repo_url: str, branch: str | None = None) -> OperationResult:
        """Clone ``repo_url`` into the working directory, optionally at ``branch``."""

        def _blocking_clone() -> OperationResult:
            self._log.info("Clone starting", repo_url=strip_userinfo(repo_url), branch=branch or None)
            url = inject_token(repo_url, self._config.github_token)
            if url != repo_url:
                self._log.info("GitHub token added to clone URL")

            args = ["git", "clone"]
            if branch:
                args += ["-b", branch]
            args.append(url)

            result = self._execute(in_directory(self._config.working_dir, args))
            self._log_outcome("Clone", result)
            return OperationResult(
                operation="clone",
                output=result.output,
                error=result.error,
                steps=[StepResult.from_command("clone", result)],
            )

        return await self._perform("clone", _blocking_clone)

    async def pull(self, repo_path: str) -> OperationResult:
        def _blocking_pull() -> OperationResult:
            path = normalize_remote_path(repo_path)
            self._log.info("Pull starting", path=path)
            credential_update = self._update_remote_credentials(path)

            result = self._execute(in_directory(path, ["git", "pull"]))
            self._log_outcome("Pull", result)
            return OperationResult(
                operation="pull",
                output=result.output,
                error=result.error,
                steps=[StepResult.from_command("pull", result)],
                credential_update=credential_update,
            )

        return await self._perform("pull", _blocking_pull)

    async def push(self, repo_path: str, message: str) -> OperationResult:
        """Stage everything, commit with ``message`` and push.

        The pipeline stops at the first failing step; the transcript then holds
        the outputs of all steps run so far, the failing one last."""

        def _blocking_push() -> OperationResult:
            path = normalize_remote_path(repo_path)
            self._log.info("Push starting", path=path, message=message)
            credential_update = self._update_remote_credentials(path)

            step_args = {
                "add": ["git", "add", "."],
                "commit": ["git", "commit", "-m", message],
                "push": ["git", "push"],
            }
            steps: list[StepResult] = []
            outputs: list[str] = []
            for number, name in enumerate(PUSH_STEPS, start=1):
                result = self._execute(in_directory(path, step_args[name]))
                steps.append(StepResult.from_command(name, result))
                outputs.append(result.output)
                if not result.success:
                    self._log.error("Push step failed", step=number, name=name, error=result.error)
                    return OperationResult(
                        operation="push",
                        output="\n".join(outputs),
                        error=f"git {name} failed: {result.error}",
                        steps=steps,
                        credential_update=credential_update,
                    )
                self._log.debug("Push step completed", step=number, name=name)

            self._log.info("Push successful", path=path)
            return OperationResult(
                operation="push",
                output="\n".join(outputs),
                steps=steps,
                credential_update=credential_update,
            )

        return await self._perform("push", _blocking_push)

    async def status(self, repo_path: str) -> OperationResult:
        def _blocking_status() -> OperationResult:
            path = normalize_remote_path(repo_path)
            self._log.info("Status checking", path=path)
            result = self._execute(in_directory(path, ["git", "status"]))
            self._log_outcome("Status", result)
            return OperationResult(
                operation="status",
                output=result.output,
                error=result.error,
                steps=[StepResult.from_command("status", result)],
            )

        return await self._perform("status", _blocking_status)

    async def remove(self, repo_path: str) -> OperationResult:
        """Delete a project directory and report what the remote saw before and after.

        ``rm -rf`` runs even when the existence check finds nothing. Success is
        decided by the ``rm`` command alone, not by the confirmation probe."""

        def _blocking_remove() -> OperationResult:
            path = normalize_remote_path(repo_path)
            self._log.info("Project removing", path=path)

            check = self._execute(_existence_probe(path, "exists", "not exists"))
            self._log.info("Directory existence", path=path, result=check.output.strip())

            command = shell_command("rm", "-rf", path)
            result = self._execute(command)

            confirm = self._execute(_existence_probe(path, "still exists", "deleted"))
            self._log.info("Removal result", path=path, result=confirm.output.strip())
            self._log_outcome("Remove", result)

            transcript = (
                f"Check: {check.output.strip()}\n"
                f"Command: {command}\n"
                f"Result: {result.output}\n"
                f"Confirm: {confirm.output.strip()}"
            )
            return OperationResult(
                operation="remove",
                output=transcript,
                error=result.error,
                steps=[
                    StepResult.from_command("check", check),
                    StepResult.from_command("remove", result),
                    StepResult.from_command("confirm", confirm),
                ],
            )

        return await self._perform("remove", _blocking_remove)

    # --- Internals ---

    async def _perform(self, operation: str, blocking: Callable[[], OperationResult]) -> OperationResult:
        try:
            await self.ensure_connected()
        except SSHConnectionError as e:
            self._log.error("SSH connection error", operation=operation, error=str(e))
            return OperationResult(operation=operation, error=f"SSH connection error: {e}")

        try:
            return await asyncio.to_thread(blocking)
        except NotConnectedError as e:
            # The session was closed by another caller while this one was running.
            self._log.error("SSH session lost during operation", operation=operation, error=str(e))
            return OperationResult(operation=operation, error=str(e))

    def _execute(self, command: str) -> CommandResult:
        return self._executor.execute(command)

    def _update_remote_credentials(self, path: str) -> StepResult | None:
        """Rewrite ``origin`` to carry the GitHub token.

        Optional: returns None without a token. A failure is reported in the
        returned StepResult and never stops the calling operation."""
        if not self._config.has_token:
            return None

        current = self._execute(in_directory(path, ["git", "remote", "get-url", "origin"]))
        remote_url = current.output.strip()
        if not current.success or not remote_url:
            self._log.warning("Could not read origin URL", path=path, error=current.error)
            return StepResult(
                name=CREDENTIAL_STEP,
                command=current.command,
                output=current.output,
                success=False,
                error=f"could not read origin URL: {current.error or 'empty output'}",
            )

        token_url = inject_token(remote_url, self._config.github_token)
        if token_url == remote_url:
            self._log.debug("Origin URL left unchanged", path=path, remote_url=strip_userinfo(remote_url))
            return StepResult(name=CREDENTIAL_STEP, command=current.command, output=current.output)

        updated = self._execute(in_directory(path, ["git", "remote", "set-url", "origin", token_url]))
        if updated.success:
            self._log.info("Remote URL updated with token", path=path)
        else:
            self._log.warning("Remote URL update failed", path=path, error=updated.error)
        return StepResult.from_command(CREDENTIAL_STEP, updated)

    def _log_outcome(self, operation: str, result: CommandResult) -> None:
        if result.success:
            self._log.info(f"{operation} successful")
        else:
            self._log.error(f"{operation} failed", error=result.error)


# 🔼⚙️🔚
