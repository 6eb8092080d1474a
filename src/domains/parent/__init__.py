# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent domain package.

Cross-school content search for parents whose children attend more than one
school.
"""

from src.domains.parent.service import (
    MIN_QUERY_LENGTH,
    ParentService,
    ParentServiceError,
    SearchQueryTooShortError,
)

__all__ = [
    "MIN_QUERY_LENGTH",
    "ParentService",
    "ParentServiceError",
    "SearchQueryTooShortError",
]
