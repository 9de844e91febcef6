#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Remotegit Engines Package.

This package contains the engines that turn remote shell access into
repository workflows."""

# 🔼⚙️🔚
