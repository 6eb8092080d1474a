# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Password hashing utilities using bcrypt.

Example:
    >>> hasher = PasswordHasher()
    >>> hashed = hasher.hash("my_password")
    >>> hasher.verify("my_password", hashed)
    True
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)


class PasswordHasher:
    """bcrypt password hashing.

    Attributes:
        _rounds: Number of bcrypt rounds for hashing.
    """

    def __init__(self, rounds: int = 12) -> None:
        """Initialize the password hasher.

        Args:
            rounds: bcrypt cost factor. Tests use 4 to stay fast.
        """
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, password: str) -> str:
        """Hash a password.

        Raises:
            ValueError: If password is empty.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a stored hash.

        A malformed hash is treated as a mismatch and logged.
        """
        if not password or not password_hash:
            return False

        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError as e:
            logger.warning("Password verification failed: %s", str(e))
            return False

    def burn(self, password: str) -> None:
        """Spend the cost of one verification without a real hash.

        Called for unknown accounts so a failed login takes the same time
        whether or not the email exists.
        """
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(b"unused", bcrypt.gensalt(rounds=self._rounds))
        bcrypt.checkpw((password or "x").encode("utf-8"), self._dummy_hash)
