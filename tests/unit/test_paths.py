#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for remote path normalization."""

import pytest

from remotegit.paths import normalize_remote_path, remote_basename, remote_join, remote_parent


class TestNormalizeRemotePath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("C:\\Users\\dev\\proj", "C:/Users/dev/proj"),
            ("/srv/projects\\widget", "/srv/projects/widget"),
            ("/srv/projects/widget", "/srv/projects/widget"),
            ("", ""),
        ],
    )
    def test_converts_backslashes(self, raw: str, expected: str) -> None:
        assert normalize_remote_path(raw) == expected

    @pytest.mark.parametrize("path", ["/srv/projects/widget", "a\\b\\c", "\\\\share\\x", "/"])
    def test_idempotent(self, path: str) -> None:
        once = normalize_remote_path(path)
        assert normalize_remote_path(once) == once


class TestRemotePathHelpers:
    def test_parent_of_git_dir(self) -> None:
        assert remote_parent("/srv/projects/widget/.git") == "/srv/projects/widget"

    def test_parent_tolerates_trailing_slash(self) -> None:
        assert remote_parent("/srv/projects/widget/.git/") == "/srv/projects/widget"

    def test_parent_of_bare_name(self) -> None:
        assert remote_parent(".git") == "."

    def test_basename(self) -> None:
        assert remote_basename("/srv/projects/widget") == "widget"
        assert remote_basename("/srv/projects/widget/") == "widget"
        assert remote_basename("/") == ""

    def test_join_normalizes_base(self) -> None:
        assert remote_join("\\srv\\projects", "widget") == "/srv/projects/widget"


# 🔼⚙️🔚
