#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Drive Git workflows on a remote host over a single SSH session."""

from provide.foundation.utils.versioning import get_version

__version__ = get_version("remotegit", caller_file=__file__)

__all__ = [
    "__version__",
]

# 🔼⚙️🔚
