# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Multi-school resolution for parents.

A parent has no school of its own. Its tenant set is the distinct schools of
every linked child, through any parent link, primary or not.
"""

import logging

from src.domains.access.repository import AccessRepository

logger = logging.getLogger(__name__)


class RequestScopedSchoolCache:
    """Memo of parent school sets for the lifetime of one request.

    A new instance is created per request. It must never be shared between
    requests because links can change out-of-band.
    """

    def __init__(self) -> None:
        self._entries: dict[str, frozenset[str]] = {}

    def get(self, parent_id: str) -> frozenset[str] | None:
        return self._entries.get(parent_id)

    def put(self, parent_id: str, school_ids: frozenset[str]) -> None:
        self._entries[parent_id] = school_ids

    def __len__(self) -> int:
        return len(self._entries)


class MultiSchoolResolver:
    """Computes the set of schools reachable through a parent's children.

    Attributes:
        repository: Source of parent-child-school rows.
        cache: Optional per-request memo.
    """

    def __init__(
        self,
        repository: AccessRepository,
        cache: RequestScopedSchoolCache | None = None,
    ) -> None:
        self.repository = repository
        self.cache = cache

    async def resolve(self, parent_id: str) -> frozenset[str]:
        """Return the parent's schools, deduplicated. Empty if no children."""
        if self.cache is not None:
            cached = self.cache.get(parent_id)
            if cached is not None:
                return cached

        school_ids = frozenset(await self.repository.get_parent_school_ids(parent_id))
        logger.debug("Parent schools resolved: parent=%s count=%d", parent_id, len(school_ids))

        if self.cache is not None:
            self.cache.put(parent_id, school_ids)
        return school_ids
