#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Main CLI entry point for remotegit."""

from __future__ import annotations

from pathlib import Path

import click
from provide.foundation.cli.decorators import logging_options
from provide.foundation.logger import get_logger
from structlog.typing import FilteringBoundLogger as StructLogger

from remotegit import __version__
from remotegit.cli.config_cmds import config_cli, test_connection
from remotegit.cli.git_cmds import clone, files, projects, pull, push, remove, status
from remotegit.config import DEFAULT_CONFIG_FILENAME

log: StructLogger = get_logger(__name__)


def _configure_logging(log_level: str | None, log_file: Path | str | None, log_format: str | None) -> None:
    """Apply the global logging options through Foundation's telemetry hub."""
    from attrs import evolve
    from provide.foundation import TelemetryConfig, get_hub

    base_config = TelemetryConfig.from_env()
    logging_config = evolve(
        base_config.logging,
        default_level=(log_level or base_config.logging.default_level).upper(),
        console_formatter="json" if log_format == "json" else base_config.logging.console_formatter,
        log_file=Path(log_file) if log_file else base_config.logging.log_file,
    )
    get_hub().initialize_foundation(evolve(base_config, service_name="remotegit", logging=logging_config))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="remotegit")
@click.option(
    "-c",
    "--config-path",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=Path(DEFAULT_CONFIG_FILENAME),
    show_default=True,
    envvar="REMOTEGIT_CONFIG",
    help="Path to the remotegit JSON configuration file (env var REMOTEGIT_CONFIG).",
    show_envvar=True,
)
@logging_options
@click.pass_context
def cli(ctx: click.Context, config_path: Path, **kwargs) -> None:
    """remotegit - clone, pull, push and inspect Git repositories on a remote host over SSH."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    if any(kwargs.get(option) for option in ("log_level", "log_file", "log_format")):
        _configure_logging(kwargs.get("log_level"), kwargs.get("log_file"), kwargs.get("log_format"))
    log.debug("CLI initialized", config_path=str(config_path))


cli.add_command(config_cli)
cli.add_command(test_connection)
cli.add_command(projects)
cli.add_command(files)
cli.add_command(clone)
cli.add_command(pull)
cli.add_command(push)
cli.add_command(status)
cli.add_command(remove)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()

# 🔼⚙️🔚
