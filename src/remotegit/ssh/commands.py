#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Build remote shell command lines from argument lists.

Every argument is passed through ``shlex.quote`` so that paths, URLs, branch
names and commit messages coming from users cannot break out of their
argument position on the remote shell."""

from __future__ import annotations

from collections.abc import Sequence
import shlex


def shell_command(*args: str) -> str:
    """Quote and join a single command's arguments."""
    return shlex.join(args)


def chain(*commands: str) -> str:
    """Join already-built commands with ``&&``."""
    return " && ".join(commands)


def either(command: str, fallback: str) -> str:
    """Run ``fallback`` when ``command`` fails (``||``)."""
    return f"{command} || {fallback}"


def in_directory(directory: str, args: Sequence[str]) -> str:
    """``cd <directory> && <args...>`` with both parts quoted."""
    return chain(shell_command("cd", directory), shell_command(*args))


# 🔼⚙️🔚
