"""Identity application layer: the auth engine and its result types."""

from warden_identity.application.config import EngineConfig
from warden_identity.application.results import (
    SignInResult,
    SignUpResult,
    TokenVerification,
    UserAccount,
    VerifyEmailResult,
)
from warden_identity.application.services import AuthEngine

__all__ = [
    "AuthEngine",
    "EngineConfig",
    "SignInResult",
    "SignUpResult",
    "TokenVerification",
    "UserAccount",
    "VerifyEmailResult",
]
