# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School domain package.

This package provides scoped school reads:
- School listing by access scope
- Per-school overview counts
"""

from src.domains.school.service import (
    SchoolNotFoundError,
    SchoolService,
    SchoolServiceError,
)

__all__ = [
    "SchoolService",
    "SchoolServiceError",
    "SchoolNotFoundError",
]
