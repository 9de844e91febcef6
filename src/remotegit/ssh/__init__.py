#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""SSH session management and remote command execution."""

from .commands import chain, either, in_directory, shell_command
from .connection import ConnectionManager
from .executor import CommandExecutor, probe_connection

__all__ = [
    "CommandExecutor",
    "ConnectionManager",
    "chain",
    "either",
    "in_directory",
    "probe_connection",
    "shell_command",
]

# 🔼⚙️🔚
