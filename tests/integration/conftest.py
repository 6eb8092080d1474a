# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fixtures for API tests.

The application is built with ``create_app`` and its data dependencies are
overridden: access decisions run against the in-memory ``school_graph``
and the database session is a mock. Tokens are signed with the
application's own JWT settings so ``AuthMiddleware`` accepts them.
"""

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.dependencies import get_access_service, get_auth_service, get_db
from src.core.config import get_settings
from src.domains.access.service import AccessService
from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AuthService


@pytest.fixture
def app_jwt() -> JWTManager:
    """JWT manager sharing the application's signing settings."""
    return JWTManager(get_settings().jwt)


@pytest.fixture
def mock_session() -> AsyncMock:
    """Session handed to route-level services."""
    session = AsyncMock()
    session.execute = AsyncMock()
    return session


@pytest.fixture
def app(school_graph, app_jwt: JWTManager, mock_session: AsyncMock) -> FastAPI:
    """Application with access and database dependencies overridden."""
    application = create_app()

    database = MagicMock()
    database.check_connection = AsyncMock(return_value=True)
    application.state.database = database

    async def override_db():
        yield mock_session

    async def override_access() -> AccessService:
        return AccessService(school_graph, app_jwt)

    async def override_auth() -> AuthService:
        return AuthService(mock_session, app_jwt, school_graph, PasswordHasher(rounds=4))

    application.dependency_overrides[get_db] = override_db
    application.dependency_overrides[get_access_service] = override_access
    application.dependency_overrides[get_auth_service] = override_auth
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_header(app_jwt: JWTManager) -> Callable[..., dict[str, str]]:
    """Build an ``Authorization`` header for a subject and role."""

    def build(subject_id: str, role: str, school_id: str | None = None) -> dict[str, str]:
        token = app_jwt.create_access_token(
            subject_id, role, school_id=school_id, tenant_id=school_id
        )
        return {"Authorization": f"Bearer {token}"}

    return build
