"""Application services for identity."""

from warden_identity.application.services.auth_engine import AuthEngine

__all__ = ["AuthEngine"]
