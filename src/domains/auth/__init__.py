# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain services.

This module provides credential issuance and validation:
- JWT token creation and validation
- Password hashing with bcrypt
- Login and token refresh

Exports:
    PasswordHasher: Secure password hashing using bcrypt.
    JWTManager: JWT token creation and validation.
    AuthService: Login and refresh service.
"""

from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AuthService

__all__ = [
    "PasswordHasher",
    "JWTManager",
    "AuthService",
]
