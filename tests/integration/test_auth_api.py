# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API tests for login and token refresh."""

from unittest.mock import MagicMock

import pytest

from src.domains.auth.password import PasswordHasher


@pytest.fixture
def stored_user(mock_session) -> MagicMock:
    """A principal account returned by every user lookup."""
    user = MagicMock()
    user.id = "PRI-B"
    user.email = "principal@birch.test"
    user.password_hash = PasswordHasher(rounds=4).hash("correct-horse")
    user.role = "PRINCIPAL"
    user.is_active = True

    result = MagicMock()
    result.scalar_one_or_none.return_value = user
    mock_session.execute.return_value = result
    return user


class TestLogin:
    def test_login_issues_tokens(self, client, stored_user, app_jwt) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "Principal@Birch.test", "password": "correct-horse"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "Bearer"
        payload = app_jwt.decode_token(body["access_token"], expected_type="access")
        assert payload.role == "PRINCIPAL"
        assert payload.school_id == "B"

    def test_wrong_password(self, client, stored_user) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "principal@birch.test", "password": "wrong"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_disabled_account(self, client, stored_user) -> None:
        stored_user.is_active = False

        response = client.post(
            "/api/v1/auth/login",
            json={"email": "principal@birch.test", "password": "correct-horse"},
        )

        assert response.status_code == 403

    def test_issued_token_works_on_protected_route(self, client, stored_user) -> None:
        login = client.post(
            "/api/v1/auth/login",
            json={"email": "principal@birch.test", "password": "correct-horse"},
        )
        token = login.json()["access_token"]

        response = client.get("/api/v1/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["school_id"] == "B"


class TestRefresh:
    def test_refresh(self, client, stored_user, app_jwt) -> None:
        tokens = app_jwt.create_token_pair("PRI-B", "PRINCIPAL", school_id="B")

        response = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens.refresh_token})

        assert response.status_code == 200

    def test_access_token_cannot_refresh(self, client, stored_user, app_jwt) -> None:
        tokens = app_jwt.create_token_pair("PRI-B", "PRINCIPAL", school_id="B")

        response = client.post("/api/v1/auth/refresh", json={"refresh_token": tokens.access_token})

        assert response.status_code == 401
