# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class domain package.

Scoped class listing and single-class reads.
"""

from src.domains.class_.service import ClassService

__all__ = [
    "ClassService",
]
