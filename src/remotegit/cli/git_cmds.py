#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Repository commands: list projects and files, clone, pull, push, status, remove."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import json
import sys
from typing import TypeVar

import click
from provide.foundation.logger import get_logger
from rich.console import Console
from rich.table import Table
from structlog.typing import FilteringBoundLogger as StructLogger

from remotegit.config import ConfigurationError, ConnectionConfig, load_config
from remotegit.engines.git import GitOperationOrchestrator
from remotegit.errors import CommandExecutionError, RemoteGitError
from remotegit.protocols import OperationResult

log: StructLogger = get_logger(__name__)

T = TypeVar("T")

# (success header, failure label) per operation, as shown to the operator.
OPERATION_MESSAGES = {
    "clone": ("✅ Clone completed successfully!", "❌ Clone error"),
    "pull": ("✅ Pull completed successfully!", "❌ Pull error"),
    "push": ("✅ Push completed successfully!", "❌ Push error"),
    "status": ("📊 Repository Status:", "❌ Status error"),
    "remove": ("✅ Project removed successfully!", "❌ Remove error"),
}


def _load_configured(ctx: click.Context) -> ConnectionConfig:
    config_path = ctx.obj["config_path"]
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)
    if not config.is_configured:
        click.echo(f"❌ Not configured: run 'remotegit config init' to create {config_path}", err=True)
        sys.exit(1)
    return config


def _run_with_orchestrator(
    config: ConnectionConfig, action: Callable[[GitOperationOrchestrator], Awaitable[T]]
) -> T:
    async def _run() -> T:
        orchestrator = GitOperationOrchestrator.from_config(config)
        try:
            return await action(orchestrator)
        finally:
            await orchestrator.close()

    return asyncio.run(_run())


def render_operation_result(result: OperationResult) -> None:
    """Echo an operation transcript the way the operator expects to read it."""
    success_header, failure_label = OPERATION_MESSAGES[result.operation]
    if result.credential_update_failed:
        click.echo(f"⚠️  Remote URL was not updated with the GitHub token: {result.credential_update.error}", err=True)

    if result.success:
        click.echo(f"{success_header}\n{result.output}")
        return
    click.echo(f"{failure_label}: {result.error}\n{result.output}", err=True)
    sys.exit(1)


def _operation_command(ctx: click.Context, action: Callable[[GitOperationOrchestrator], Awaitable[OperationResult]]):
    config = _load_configured(ctx)
    result = _run_with_orchestrator(config, action)
    render_operation_result(result)


@click.command(name="projects")
@click.option("--json", "as_json", is_flag=True, help="Print {'projects': [...], 'error': ...} JSON.")
@click.pass_context
def projects(ctx: click.Context, as_json: bool):
    """List Git repositories up to two levels below the working directory."""
    config = _load_configured(ctx)
    try:
        found = _run_with_orchestrator(config, lambda o: o.list_projects())
    except RemoteGitError as e:
        message = _listing_error("Failed to get project list", e)
        if as_json:
            click.echo(json.dumps({"projects": [], "error": message}))
        else:
            click.echo(f"❌ {message}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"projects": [p.to_dict() for p in found], "error": None}, indent=2))
        return

    table = Table(title=f"Projects in {config.working_dir}")
    table.add_column("Name", style="bold")
    table.add_column("Path")
    for project in found:
        table.add_row(project.name, project.path)
    Console().print(table)


@click.command(name="files")
@click.argument("path", required=False)
@click.option("--json", "as_json", is_flag=True, help="Print the listing as JSON.")
@click.pass_context
def files(ctx: click.Context, path: str | None, as_json: bool):
    """List files and directories in PATH (default: the working directory)."""
    config = _load_configured(ctx)
    try:
        entries = _run_with_orchestrator(config, lambda o: o.list_files(path))
    except RemoteGitError as e:
        message = _listing_error("Failed to list files", e)
        if as_json:
            click.echo(json.dumps({"files": [], "error": message}))
        else:
            click.echo(f"❌ {message}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"files": [f.to_dict() for f in entries], "error": None}, indent=2))
        return

    table = Table(title=path or config.working_dir)
    table.add_column("Type")
    table.add_column("Name", style="bold")
    table.add_column("Size", justify="right")
    table.add_column("Modified")
    for entry in entries:
        table.add_row("dir" if entry.is_dir else "file", entry.name, str(entry.size), entry.mod_time)
    Console().print(table)


def _listing_error(prefix: str, error: RemoteGitError) -> str:
    if isinstance(error, CommandExecutionError) and error.output.strip():
        return f"{prefix}: {error}\n{error.output.strip()}"
    return f"{prefix}: {error}"


@click.command(name="clone")
@click.argument("repo_url")
@click.option("-b", "--branch", default=None, help="Branch to check out instead of the default branch.")
@click.pass_context
def clone(ctx: click.Context, repo_url: str, branch: str | None):
    """Clone REPO_URL into the remote working directory."""
    _operation_command(ctx, lambda o: o.clone(repo_url, branch))


@click.command(name="pull")
@click.argument("repo_path")
@click.pass_context
def pull(ctx: click.Context, repo_path: str):
    """Run 'git pull' in REPO_PATH."""
    _operation_command(ctx, lambda o: o.pull(repo_path))


@click.command(name="push")
@click.argument("repo_path")
@click.option("-m", "--message", required=True, help="Commit message.")
@click.pass_context
def push(ctx: click.Context, repo_path: str, message: str):
    """Stage all changes in REPO_PATH, commit them with MESSAGE and push.

    Stops at the first failing step; completed steps are not undone."""
    _operation_command(ctx, lambda o: o.push(repo_path, message))


@click.command(name="status")
@click.argument("repo_path")
@click.pass_context
def status(ctx: click.Context, repo_path: str):
    """Show 'git status' for REPO_PATH."""
    _operation_command(ctx, lambda o: o.status(repo_path))


@click.command(name="remove")
@click.argument("repo_path")
@click.confirmation_option(prompt="Delete this project directory on the remote host?")
@click.pass_context
def remove(ctx: click.Context, repo_path: str):
    """Delete REPO_PATH on the remote host (rm -rf)."""
    _operation_command(ctx, lambda o: o.remove(repo_path))


# 🔼⚙️🔚
