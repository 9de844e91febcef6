#
# SPDX-FileCopyrightText: Copyright (c) provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Test helper modules for remotegit.

This package contains a scripted fake of the remote shell so that Git
workflows can be tested without an SSH server."""

from __future__ import annotations

# 🔼⚙️🔚
