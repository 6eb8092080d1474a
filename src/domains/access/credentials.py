# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bearer credential verification.

Wraps ``JWTManager`` so that every failure becomes an ``UNAUTHENTICATED``
outcome. The ``school_id`` and ``tenant_id`` claims are kept for logging
only; tenancy is always re-derived from the backing profile.
"""

import logging
from dataclasses import dataclass

from src.domains.access.errors import AccessErrorKind, AccessOutcome
from src.domains.access.roles import Role
from src.domains.auth.jwt import JWTError, JWTManager, TokenExpiredError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Claims:
    """Verified claim set.

    Attributes:
        subject_id: User id from ``sub``.
        role: Role from the ``role`` claim.
        school_id: Advisory school claim, never trusted for scoping.
        tenant_id: Advisory tenant claim, never trusted for scoping.
    """

    subject_id: str
    role: Role
    school_id: str | None = None
    tenant_id: str | None = None


class CredentialVerifier:
    """Turns a raw bearer token into verified claims.

    Attributes:
        jwt_manager: Manager holding the signing secret and algorithm.
    """

    def __init__(self, jwt_manager: JWTManager) -> None:
        self.jwt_manager = jwt_manager

    def verify(self, credential: str | None) -> AccessOutcome[Claims]:
        """Verify signature, expiry and token type, then extract claims.

        Args:
            credential: Raw token without the ``Bearer`` prefix.

        Returns:
            Claims on success, ``UNAUTHENTICATED`` otherwise.
        """
        if not credential:
            return AccessOutcome.fail(AccessErrorKind.UNAUTHENTICATED, "missing credential")

        try:
            payload = self.jwt_manager.decode_token(credential, expected_type="access")
        except TokenExpiredError:
            return AccessOutcome.fail(AccessErrorKind.UNAUTHENTICATED, "credential expired")
        except JWTError as e:
            return AccessOutcome.fail(AccessErrorKind.UNAUTHENTICATED, str(e))

        role = Role.parse(payload.role)
        if role is None:
            return AccessOutcome.fail(
                AccessErrorKind.UNAUTHENTICATED,
                f"unknown role claim: {payload.role}",
            )

        return AccessOutcome.ok(
            Claims(
                subject_id=payload.sub,
                role=role,
                school_id=payload.school_id,
                tenant_id=payload.tenant_id,
            )
        )
