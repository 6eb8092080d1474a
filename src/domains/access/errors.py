# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Access error taxonomy and the outcome type returned by the access core.

Inside the core, denials are ordinary values (``AccessOutcome``). Only the
HTTP seam turns a failed outcome into ``AccessDeniedError``.

Example:
    >>> outcome = AccessOutcome.fail(AccessErrorKind.FORBIDDEN, "role")
    >>> outcome.allowed
    False
    >>> outcome.unwrap()
    Traceback (most recent call last):
        ...
    AccessDeniedError: forbidden: role
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class AccessErrorKind(str, Enum):
    """Why a request was refused.

    ``NOT_FOUND`` covers both an absent resource and one outside the
    caller's scope, so a refusal never reveals that an id exists in another
    school.
    """

    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    IDENTITY_INCOMPLETE = "identity_incomplete"
    NOT_FOUND = "not_found"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    AccessErrorKind.UNAUTHENTICATED: 401,
    AccessErrorKind.FORBIDDEN: 403,
    AccessErrorKind.IDENTITY_INCOMPLETE: 403,
    AccessErrorKind.NOT_FOUND: 404,
}

_PUBLIC_MESSAGES = {
    AccessErrorKind.UNAUTHENTICATED: "Authentication required",
    AccessErrorKind.FORBIDDEN: "Insufficient permissions",
    AccessErrorKind.IDENTITY_INCOMPLETE: "Insufficient permissions",
    AccessErrorKind.NOT_FOUND: "Resource not found",
}


class AccessDeniedError(Exception):
    """Raised at the HTTP seam when an access outcome is a denial.

    Attributes:
        kind: The error kind, which decides the status code.
        reason: Internal reason, logged but never sent to the client.
    """

    def __init__(self, kind: AccessErrorKind, reason: str | None = None) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind.value}: {reason}" if reason else kind.value)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    @property
    def public_message(self) -> str:
        """Message safe to return to the client."""
        return _PUBLIC_MESSAGES[self.kind]


@dataclass(frozen=True)
class AccessOutcome(Generic[T]):
    """Either a value or an access error kind with a reason.

    Attributes:
        value: The successful result, None on failure.
        error: The failure kind, None on success.
        reason: Internal reason for the failure.
    """

    value: T | None = None
    error: AccessErrorKind | None = None
    reason: str | None = None

    @classmethod
    def ok(cls, value: T) -> "AccessOutcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: AccessErrorKind, reason: str | None = None) -> "AccessOutcome[T]":
        return cls(error=error, reason=reason)

    @property
    def allowed(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise ``AccessDeniedError``.

        Raises:
            AccessDeniedError: If the outcome is a failure.
        """
        if self.error is not None:
            raise AccessDeniedError(self.error, self.reason)
        return self.value  # type: ignore[return-value]
