#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""GitHub token injection for HTTPS remote URLs."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

GITHUB_HOST = "github.com"


def inject_token(repo_url: str, token: str | None) -> str:
    """Embed ``token`` as the userinfo of an ``https://github.com/...`` URL.

    https://github.com/acme/widget.git -> https://<token>@github.com/acme/widget.git

    Any other scheme or host, an empty token, or a URL that already carries
    userinfo is returned unchanged, so repeated injection is a no-op."""
    if not token:
        return repo_url

    parts = urlsplit(repo_url)
    if parts.scheme != "https" or parts.hostname != GITHUB_HOST:
        return repo_url
    if "@" in parts.netloc:
        return repo_url

    return urlunsplit(parts._replace(netloc=f"{token}@{parts.netloc}"))


def strip_userinfo(repo_url: str) -> str:
    """Drop any credentials from a URL, for display."""
    parts = urlsplit(repo_url)
    if "@" not in parts.netloc:
        return repo_url
    return urlunsplit(parts._replace(netloc=parts.netloc.rsplit("@", 1)[1]))


# 🔼⚙️🔚
