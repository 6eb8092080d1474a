# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for bearer credential verification."""

from datetime import timedelta

import pytest

from src.domains.access.credentials import Claims, CredentialVerifier
from src.domains.access.errors import AccessErrorKind
from src.domains.access.roles import Role
from src.domains.auth.jwt import JWTManager


@pytest.fixture
def verifier(jwt_manager: JWTManager) -> CredentialVerifier:
    return CredentialVerifier(jwt_manager)


class TestCredentialVerifier:
    """Tests for CredentialVerifier."""

    def test_valid_token_yields_claims(
        self, verifier: CredentialVerifier, jwt_manager: JWTManager
    ) -> None:
        token = jwt_manager.create_access_token("T1", "TEACHER", school_id="A", tenant_id="A")

        outcome = verifier.verify(token)

        assert outcome.allowed is True
        assert outcome.value == Claims(subject_id="T1", role=Role.TEACHER, school_id="A", tenant_id="A")

    @pytest.mark.parametrize("credential", [None, ""])
    def test_missing_credential(self, verifier: CredentialVerifier, credential: str | None) -> None:
        outcome = verifier.verify(credential)

        assert outcome.error is AccessErrorKind.UNAUTHENTICATED
        assert outcome.reason == "missing credential"

    def test_expired_token(self, verifier: CredentialVerifier, jwt_manager: JWTManager) -> None:
        token = jwt_manager.create_access_token(
            "T1", "TEACHER", expires_delta=timedelta(minutes=-1)
        )

        outcome = verifier.verify(token)

        assert outcome.error is AccessErrorKind.UNAUTHENTICATED
        assert outcome.reason == "credential expired"

    def test_garbage_token(self, verifier: CredentialVerifier) -> None:
        outcome = verifier.verify("not-a-jwt")

        assert outcome.error is AccessErrorKind.UNAUTHENTICATED

    def test_refresh_token_is_not_a_credential(
        self, verifier: CredentialVerifier, jwt_manager: JWTManager
    ) -> None:
        tokens = jwt_manager.create_token_pair("P1", "PARENT")

        outcome = verifier.verify(tokens.refresh_token)

        assert outcome.error is AccessErrorKind.UNAUTHENTICATED

    def test_unknown_role_claim(self, verifier: CredentialVerifier, jwt_manager: JWTManager) -> None:
        token = jwt_manager.create_access_token("X1", "STUDENT")

        outcome = verifier.verify(token)

        assert outcome.error is AccessErrorKind.UNAUTHENTICATED
        assert "STUDENT" in outcome.reason
