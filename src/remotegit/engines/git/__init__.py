#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Git engine: repository workflows over a remote shell."""

from .credentials import inject_token
from .discovery import ProjectDiscovery
from .operations import GitOperationOrchestrator
from .parsers import parse_file_listing, parse_project_listing

__all__ = [
    "GitOperationOrchestrator",
    "ProjectDiscovery",
    "inject_token",
    "parse_file_listing",
    "parse_project_listing",
]

# 🔼⚙️🔚
