#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Configuration and connection-test commands for remotegit."""

from __future__ import annotations

import json
from pathlib import Path
import sys

import click
from provide.foundation.logger import get_logger
from structlog.typing import FilteringBoundLogger as StructLogger

from remotegit.config import (
    AuthMethod,
    ConfigurationError,
    ConnectionConfig,
    HostKeyPolicy,
    load_config,
    save_config,
)
from remotegit.errors import SSHConnectionError
from remotegit.ssh import ConnectionManager, probe_connection

log: StructLogger = get_logger(__name__)

SECRET_KEYS = ("ssh_password", "ssh_key_passphrase", "github_token")


def masked_config_dict(config: ConnectionConfig) -> dict:
    """The on-disk layout with secrets replaced by a presence marker."""
    data = config.to_dict()
    for key in SECRET_KEYS:
        if data.get(key):
            data[key] = "********"
    return data


def _config_path(ctx: click.Context) -> Path:
    return ctx.obj["config_path"]


@click.group(name="config")
def config_cli():
    """Show or write the connection configuration."""


@config_cli.command(name="show")
@click.option("--show-secrets", is_flag=True, help="Print passwords and tokens instead of masking them.")
@click.pass_context
def show_config(ctx: click.Context, show_secrets: bool):
    """Load, validate, and display the configuration."""
    config_path = _config_path(ctx)
    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    data = config.to_dict() if show_secrets else masked_config_dict(config)
    click.echo(json.dumps(data, indent=2))
    if not config.is_configured:
        click.echo(f"⚠️  Not configured yet - run 'remotegit config init' to write {config_path}", err=True)
    elif not config.has_token:
        click.echo("⚠️  GitHub token missing - private HTTPS clones and pushes will prompt or fail", err=True)


@config_cli.command(name="init")
@click.option("--host", required=True, help="SSH host name or address.")
@click.option("--port", type=click.IntRange(1, 65535), default=22, show_default=True)
@click.option("--user", default="root", show_default=True)
@click.option(
    "--auth-method",
    type=click.Choice([m.value for m in AuthMethod]),
    default=AuthMethod.PASSWORD.value,
    show_default=True,
)
@click.option("--password", envvar="REMOTEGIT_SSH_PASSWORD", help="SSH password (env var REMOTEGIT_SSH_PASSWORD).")
@click.option("--key-path", type=click.Path(dir_okay=False), help="Private key file for key authentication.")
@click.option("--key-passphrase", envvar="REMOTEGIT_KEY_PASSPHRASE", help="Passphrase for an encrypted key.")
@click.option("--working-dir", default="/root/projects", show_default=True, help="Remote directory holding projects.")
@click.option("--github-token", envvar="REMOTEGIT_GITHUB_TOKEN", help="GitHub token (env var REMOTEGIT_GITHUB_TOKEN).")
@click.option(
    "--host-key-policy",
    type=click.Choice([p.value for p in HostKeyPolicy]),
    default=HostKeyPolicy.STRICT.value,
    show_default=True,
    help="How to verify the server's host key. 'insecure' disables verification.",
)
@click.option("--known-hosts", "known_hosts_path", type=click.Path(dir_okay=False), help="Extra known_hosts file.")
@click.option("--timeout", "connect_timeout", type=float, default=10.0, show_default=True, help="Connect timeout in seconds.")
@click.pass_context
def init_config(ctx: click.Context, **options):
    """Write a new configuration file and mark it as configured."""
    config_path = _config_path(ctx)
    try:
        config = ConnectionConfig(**options, is_configured=True)
        config.validate_credentials()
        save_config(config, config_path)
    except (ConfigurationError, ValueError) as e:
        click.echo(f"❌ Configuration not saved: {e}", err=True)
        sys.exit(1)

    if config.host_key_policy is HostKeyPolicy.INSECURE:
        click.echo("⚠️  Host key verification disabled - connections can be intercepted", err=True)
    click.echo(f"✅ Configuration saved successfully to {config_path}")


@click.command(name="test-connection")
@click.pass_context
def test_connection(ctx: click.Context):
    """Connect with the saved configuration and run 'hostname && pwd'."""
    try:
        config = load_config(_config_path(ctx))
        config.validate_credentials()
    except ConfigurationError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    try:
        result = probe_connection(ConnectionManager(config))
    except SSHConnectionError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    if not result.success:
        click.echo(f"❌ Command execution error: {result.error}\n{result.output}", err=True)
        sys.exit(1)
    click.echo(f"✅ {result.output.strip()}")


# 🔼⚙️🔚
