# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database connection management using SQLAlchemy async.

A single PostgreSQL database holds every school. The ``Database`` handle owns
the engine and sessionmaker; it is constructed explicitly, connected in the
application lifespan and passed to whoever needs a session. There is no
module-level engine.

Uses SQLAlchemy 2.0 async API with asyncpg driver.

Example:
    from src.infrastructure.database.connection import Database

    database = Database(settings.database)
    await database.connect()

    async with database.session() as session:
        result = await session.execute(select(School))
        schools = result.scalars().all()

    await database.dispose()
"""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

if TYPE_CHECKING:
    from src.core.config.settings import DatabaseSettings

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """Base exception for database operations.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or database error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class Database:
    """Injected data-access handle with an explicit lifecycle.

    Attributes:
        settings: Database settings used to build the engine.
    """

    def __init__(self, settings: "DatabaseSettings", url: Optional[str] = None) -> None:
        """Initialize the handle without opening any connection.

        Args:
            settings: Database settings (pool sizes, echo flag, URL parts).
            url: Optional URL overriding ``settings.url`` (used by tests).
        """
        self.settings = settings
        self._url = url or settings.url
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        """Create the engine and connection pool.

        Raises:
            DatabaseError: If engine creation fails.
        """
        if self._engine is not None:
            return

        try:
            self._engine = create_async_engine(
                self._url,
                pool_size=self.settings.pool_size,
                max_overflow=self.settings.max_overflow,
                pool_timeout=self.settings.pool_timeout,
                pool_pre_ping=True,
                pool_recycle=1800,
                echo=self.settings.echo,
            )
            self._sessionmaker = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to initialize database connection", e) from e

        logger.info("Database engine created: host=%s", self.settings.host)

    async def dispose(self) -> None:
        """Close every pooled connection. Safe to call twice."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None
            logger.info("Database engine disposed")

    @property
    def engine(self) -> AsyncEngine:
        """The async engine.

        Raises:
            DatabaseError: If ``connect()`` has not been called.
        """
        if self._engine is None:
            raise DatabaseError("Database not connected. Call connect() first.")
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session that is committed on success and rolled back on error.

        Yields:
            AsyncSession for database operations.

        Raises:
            DatabaseError: If the handle is not connected or a database
                operation fails.
        """
        if self._sessionmaker is None:
            raise DatabaseError("Database not connected. Call connect() first.")

        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError("Database operation failed", e) from e
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Run ``SELECT 1`` and report whether the database answered."""
        if self._engine is None:
            return False

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False
