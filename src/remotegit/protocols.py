#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Result and record types shared between the SSH layer, the Git engine and the CLI."""

from __future__ import annotations

from typing import Any

from attrs import define, field

from remotegit.errors import CommandExecutionError


@define(frozen=True)
class CommandResult:
    """Outcome of one remote command.

    ``output`` is the combined stdout/stderr stream; it may be non-empty even
    when the command failed."""

    command: str
    output: str = ""
    exit_status: int | None = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None and self.exit_status == 0

    def raise_for_status(self) -> None:
        if not self.success:
            raise CommandExecutionError(self.command, self.exit_status, self.output)


@define(frozen=True)
class StepResult:
    """One named step of a multi-step Git operation."""

    name: str
    command: str
    output: str = ""
    success: bool = True
    error: str | None = None

    @classmethod
    def from_command(cls, name: str, result: CommandResult) -> StepResult:
        return cls(
            name=name,
            command=result.command,
            output=result.output,
            success=result.success,
            error=result.error,
        )


@define
class OperationResult:
    """Transcript of a Git operation: its output and its error, always both."""

    operation: str
    output: str = ""
    error: str | None = None
    steps: list[StepResult] = field(factory=list)
    credential_update: StepResult | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def credential_update_failed(self) -> bool:
        return self.credential_update is not None and not self.credential_update.success

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "output": self.output,
            "error": self.error,
            "success": self.success,
            "steps": [{"name": s.name, "success": s.success, "error": s.error} for s in self.steps],
            "credential_update": (
                None
                if self.credential_update is None
                else {"success": self.credential_update.success, "error": self.credential_update.error}
            ),
        }


@define(frozen=True)
class Project:
    """A Git repository found under the working directory."""

    name: str
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "path": self.path}


@define(frozen=True)
class FileInfo:
    """One entry of a remote directory listing."""

    name: str
    path: str
    is_dir: bool = False
    size: int = 0
    mod_time: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "is_dir": self.is_dir,
            "size": self.size,
            "mod_time": self.mod_time,
        }


# 🔼⚙️🔚
