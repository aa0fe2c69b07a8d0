"""Warden Auth - credential and session primitives.

This package holds the pieces of authentication that know nothing about
users, profiles or storage:
- Password hashing (bcrypt)
- Session token creation and verification (JWT, HS256)
- Single-use token values for email verification and password reset

Architecture:
    warden_auth/
    ├── services/           # Pure logic (hashing, JWT, token values)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from warden_auth import JWTService, PasswordHashingService
"""

from warden_auth.exceptions import AuthError, InvalidTokenError
from warden_auth.schemas import TokenPayload
from warden_auth.services import JWTService, PasswordHashingService, TokenGenerator

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    "TokenGenerator",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
]
