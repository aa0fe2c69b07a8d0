"""Authentication primitive exceptions.

These exceptions are raised by the warden_auth package and should be
caught and handled by the application layer (AuthEngine).
"""


class AuthError(Exception):
    """Base exception for all authentication primitive errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a session token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)
