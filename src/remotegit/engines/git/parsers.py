#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Parsers turning raw ``find``/``ls`` output into Project and FileInfo records."""

from __future__ import annotations

from provide.foundation.logger import get_logger

from remotegit.paths import normalize_remote_path, remote_basename, remote_join, remote_parent
from remotegit.protocols import FileInfo, Project

log = get_logger(__name__)

# --- Constants for `ls -l` style listings ---
LISTING_MIN_FIELDS = 9
LISTING_SIZE_FIELD = 4
LISTING_MTIME_FIELDS = slice(5, 8)
LISTING_NAME_FIELD = 8
DIRECTORY_MARKER = "d"
SYMLINK_MARKER = "l"
SYMLINK_ARROW = " -> "
SELF_ENTRIES = frozenset({".", ".."})


def parse_project_listing(output: str) -> list[Project]:
    """Derive projects from ``.git`` directory paths, one per line.

    The project is the parent of each ``.git`` match. Hidden or degenerate
    names (empty, or starting with '.') are skipped. Input order is kept."""
    projects: list[Project] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue

        project_path = remote_parent(line)
        project_name = remote_basename(project_path)
        if not project_name or project_name.startswith("."):
            log.debug("Skipping hidden or unnamed project", git_dir=line)
            continue

        projects.append(Project(name=project_name, path=project_path))
        log.debug("Project found", name=project_name, path=project_path)
    return projects


def _is_listing_of_base(listed: str, base_path: str) -> bool:
    base = normalize_remote_path(base_path).rstrip("/") or "/"
    entry = normalize_remote_path(listed).rstrip("/") or "/"
    return entry == base


def parse_file_listing(output: str, base_path: str) -> list[FileInfo]:
    """Parse ``ls -l`` lines for entries of ``base_path``.

    Lines with fewer than nine fields are dropped. Names may contain spaces;
    ``ls`` on a full path prints the path, so only its final segment is kept.
    The listed directory itself and ``.``/``..`` are skipped."""
    files: list[FileInfo] = []
    for line in output.splitlines():
        if not line.strip():
            continue

        parts = line.split(None, LISTING_NAME_FIELD)
        if len(parts) < LISTING_MIN_FIELDS:
            log.debug("Dropping malformed listing line", line=line)
            continue

        listed = parts[LISTING_NAME_FIELD].rstrip()
        if line.startswith(SYMLINK_MARKER) and SYMLINK_ARROW in listed:
            listed = listed.split(SYMLINK_ARROW, 1)[0]

        if listed in SELF_ENTRIES or _is_listing_of_base(listed, base_path):
            continue

        name = remote_basename(listed) or listed
        if name in SELF_ENTRIES:
            continue

        try:
            size = int(parts[LISTING_SIZE_FIELD])
        except ValueError:
            size = 0

        files.append(
            FileInfo(
                name=name,
                path=remote_join(base_path, name),
                is_dir=line.startswith(DIRECTORY_MARKER),
                size=size,
                mod_time=" ".join(parts[LISTING_MTIME_FIELDS]),
            )
        )
    return files


# 🔼⚙️🔚
