#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Path helpers for remote (POSIX) paths."""

from __future__ import annotations

import posixpath

FOREIGN_SEPARATOR = "\\"
REMOTE_SEPARATOR = "/"


def normalize_remote_path(path: str) -> str:
    """Convert Windows-style separators to POSIX form.

    Only separators are rewritten; the path is otherwise left untouched so the
    operation is idempotent (``f(f(p)) == f(p)``)."""
    return path.replace(FOREIGN_SEPARATOR, REMOTE_SEPARATOR)


def remote_parent(path: str) -> str:
    """Return the parent directory of a remote path, tolerating trailing slashes."""
    normalized = normalize_remote_path(path)
    stripped = normalized.rstrip(REMOTE_SEPARATOR) or REMOTE_SEPARATOR
    return posixpath.dirname(stripped) or "."


def remote_basename(path: str) -> str:
    """Return the final segment of a remote path ('' for the root)."""
    normalized = normalize_remote_path(path)
    return posixpath.basename(normalized.rstrip(REMOTE_SEPARATOR))


def remote_join(base: str, name: str) -> str:
    return posixpath.join(normalize_remote_path(base), name)


# 🔼⚙️🔚
