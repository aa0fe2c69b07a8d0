"""Single-use token domain."""

from warden_identity.domain.token.token_type import TokenType
from warden_identity.domain.token.user_token import UserToken

__all__ = [
    "TokenType",
    "UserToken",
]
