#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Configuration module for remotegit.

Re-exports the connection configuration model and its persistence helpers."""

from __future__ import annotations

from remotegit.config.models import (
    DEFAULT_CONFIG_FILENAME,
    AuthMethod,
    ConnectionConfig,
    HostKeyPolicy,
    default_config,
    load_config,
    save_config,
)
from remotegit.errors import ConfigurationError

__all__ = [
    "DEFAULT_CONFIG_FILENAME",
    "AuthMethod",
    "ConfigurationError",
    "ConnectionConfig",
    "HostKeyPolicy",
    "default_config",
    "load_config",
    "save_config",
]

# 🔼⚙️🔚
