# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for JWT token utilities.

Tests the JWTManager class and token operations.
"""

import time
from datetime import timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from jose import jwt
from pydantic import SecretStr

from src.domains.auth.jwt import (
    InvalidTokenError,
    JWTManager,
    TokenExpiredError,
    TokenPair,
    TokenPayload,
)


class TestJWTManager:
    """Tests for JWTManager class."""

    def test_create_token_pair_returns_valid_tokens(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that create_token_pair returns valid token pair."""
        result = jwt_manager.create_token_pair(
            user_id=str(uuid4()),
            role="SCHOOL_ADMIN",
            school_id=str(uuid4()),
        )

        assert isinstance(result, TokenPair)
        assert result.access_token is not None
        assert result.refresh_token is not None
        assert result.token_type == "Bearer"
        assert result.expires_in == 30 * 60  # 30 minutes in seconds
        assert result.refresh_expires_in == 7 * 24 * 60 * 60  # 7 days in seconds

    def test_decode_access_token_returns_payload(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that decode_token returns correct payload for access token."""
        user_id = str(uuid4())
        school_id = str(uuid4())

        token = jwt_manager.create_access_token(
            user_id=user_id,
            role="TEACHER",
            school_id=school_id,
            tenant_id=school_id,
        )

        payload = jwt_manager.decode_token(token, expected_type="access")

        assert isinstance(payload, TokenPayload)
        assert payload.sub == user_id
        assert payload.type == "access"
        assert payload.role == "TEACHER"
        assert payload.school_id == school_id
        assert payload.tenant_id == school_id

    def test_refresh_token_carries_no_role(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that the refresh token only identifies the user."""
        user_id = str(uuid4())

        tokens = jwt_manager.create_token_pair(user_id=user_id, role="PARENT")
        payload = jwt_manager.decode_token(tokens.refresh_token, expected_type="refresh")

        assert payload.sub == user_id
        assert payload.type == "refresh"
        assert payload.role is None

    def test_decode_token_with_wrong_type_raises_error(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that decode_token raises error when type doesn't match."""
        token = jwt_manager.create_access_token(user_id=str(uuid4()), role="PARENT")

        with pytest.raises(InvalidTokenError, match="Expected refresh token"):
            jwt_manager.decode_token(token, expected_type="refresh")

    def test_decode_expired_token_raises_error(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that decode_token raises error for expired token."""
        token = jwt_manager.create_access_token(
            user_id=str(uuid4()),
            role="TEACHER",
            expires_delta=timedelta(seconds=-10),
        )

        with pytest.raises(TokenExpiredError, match="Token has expired"):
            jwt_manager.decode_token(token)

    def test_decode_invalid_token_raises_error(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that decode_token raises error for invalid token."""
        with pytest.raises(InvalidTokenError):
            jwt_manager.decode_token("invalid.token.here")

    def test_decode_token_with_wrong_secret_raises_error(
        self,
        jwt_manager: JWTManager,
        jwt_settings: MagicMock,
    ) -> None:
        """Test that decode fails when secret doesn't match."""
        token = jwt_manager.create_access_token(user_id=str(uuid4()), role="TEACHER")

        jwt_settings.secret_key = SecretStr("different-secret-key")
        other_manager = JWTManager(jwt_settings)

        with pytest.raises(InvalidTokenError):
            other_manager.decode_token(token)

    def test_decode_token_missing_subject_raises_error(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that a signed token without ``sub`` is rejected."""
        now = int(time.time())
        token = jwt.encode(
            {"type": "access", "role": "TEACHER", "exp": now + 60, "iat": now, "jti": "x"},
            "test-secret-key-for-jwt-testing",
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="missing or malformed claims"):
            jwt_manager.decode_token(token)

    def test_token_pair_contains_jti(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that tokens contain unique JTI claims."""
        user_id = str(uuid4())

        tokens1 = jwt_manager.create_token_pair(user_id=user_id, role="PARENT")
        tokens2 = jwt_manager.create_token_pair(user_id=user_id, role="PARENT")

        payload1 = jwt_manager.decode_token(tokens1.access_token)
        payload2 = jwt_manager.decode_token(tokens2.access_token)

        assert payload1.jti != payload2.jti

    def test_token_payload_timestamps(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that tokens have correct iat and exp timestamps."""
        before = int(time.time())

        token = jwt_manager.create_access_token(user_id=str(uuid4()), role="TEACHER")

        after = int(time.time())
        payload = jwt_manager.decode_token(token)

        assert before <= payload.iat <= after
        expected_exp = payload.iat + 30 * 60
        assert abs(payload.exp - expected_exp) <= 1

    def test_uuid_conversion(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that UUID objects are properly converted to strings."""
        user_id = uuid4()
        school_id = uuid4()

        token = jwt_manager.create_access_token(
            user_id=user_id,
            role="PRINCIPAL",
            school_id=school_id,
        )

        payload = jwt_manager.decode_token(token)

        assert payload.sub == str(user_id)
        assert payload.school_id == str(school_id)

    def test_optional_fields_can_be_none(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that parent and super admin tokens carry no school claims."""
        token = jwt_manager.create_access_token(user_id=str(uuid4()), role="PARENT")
        payload = jwt_manager.decode_token(token)

        assert payload.school_id is None
        assert payload.tenant_id is None
