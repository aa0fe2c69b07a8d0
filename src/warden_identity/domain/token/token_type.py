"""Token type value object."""

from enum import Enum


class TokenType(str, Enum):
    """What a single-use token may be redeemed for."""

    VERIFY_EMAIL = "VERIFY_EMAIL"
    PASSWORD_RESET = "PASSWORD_RESET"
