# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for PostgreSQL connections.

This package provides:
- ``Database``: injected async engine handle with connect/dispose lifecycle
- ``SqlAccessRepository``: read-only lookups for the access domain
- ``apply_scope``: compiles access predicates into ``WHERE`` clauses

Example:
    from src.infrastructure.database import Database

    database = Database(settings.database)
    await database.connect()
    async with database.session() as session:
        result = await session.execute(select(School))
"""

from src.infrastructure.database.access_repository import SqlAccessRepository
from src.infrastructure.database.connection import Database, DatabaseError
from src.infrastructure.database.scoping import (
    UnsupportedScopeError,
    apply_scope,
    compile_predicate,
)

__all__ = [
    "Database",
    "DatabaseError",
    "SqlAccessRepository",
    "UnsupportedScopeError",
    "apply_scope",
    "compile_predicate",
]
