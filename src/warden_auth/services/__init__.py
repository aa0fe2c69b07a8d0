"""Authentication services.

Provides password hashing, session tokens and single-use token values.
"""

from warden_auth.services.jwt_service import JWTService
from warden_auth.services.password_service import PasswordHashingService
from warden_auth.services.token_generator import TokenGenerator

__all__ = [
    "PasswordHashingService",
    "JWTService",
    "TokenGenerator",
]
