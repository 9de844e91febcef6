#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Discovery of repositories and files under the remote working directory."""

from __future__ import annotations

from provide.foundation.logger import get_logger

from remotegit.engines.git.parsers import parse_file_listing, parse_project_listing
from remotegit.paths import normalize_remote_path
from remotegit.protocols import FileInfo, Project
from remotegit.ssh.commands import chain, shell_command
from remotegit.ssh.executor import CommandExecutor

log = get_logger(__name__)

PROJECT_SEARCH_DEPTH = 2


def find_projects_command(working_dir: str) -> str:
    return shell_command(
        "find", working_dir, "-maxdepth", str(PROJECT_SEARCH_DEPTH), "-name", ".git", "-type", "d"
    )


def list_files_command(path: str) -> str:
    return chain(
        shell_command("find", path, "-maxdepth", "1", "-type", "f", "-exec", "ls", "-la", "{}", ";"),
        shell_command("find", path, "-maxdepth", "1", "-type", "d", "-exec", "ls", "-ld", "{}", ";"),
    )


class ProjectDiscovery:
    """Lists projects and files; results are recomputed on every call, never cached.

    Both methods raise CommandExecutionError when the remote listing fails
    and NotConnectedError when there is no session."""

    def __init__(self, executor: CommandExecutor, working_dir: str) -> None:
        self._executor = executor
        self._working_dir = normalize_remote_path(working_dir)
        self._log = log.bind(working_dir=self._working_dir)

    def list_projects(self) -> list[Project]:
        command = find_projects_command(self._working_dir)
        self._log.info("Searching for Git repositories", command=command)
        result = self._executor.execute(command)
        if not result.success:
            self._log.error("Git repository search failed", error=result.error)
        result.raise_for_status()

        projects = parse_project_listing(result.output)
        self._log.info("Projects found", count=len(projects))
        return projects

    def list_files(self, path: str | None = None) -> list[FileInfo]:
        target = normalize_remote_path(path) if path else self._working_dir
        result = self._executor.execute(list_files_command(target))
        if not result.success:
            self._log.error("File listing failed", path=target, error=result.error)
        result.raise_for_status()

        files = parse_file_listing(result.output, target)
        self._log.debug("Files listed", path=target, count=len(files))
        return files


# 🔼⚙️🔚
