"""User profile entity (verification and onboarding state)."""

from dataclasses import dataclass, replace
from uuid import UUID


@dataclass(frozen=True)
class Profile:
    """Per-user account state, created alongside the user.

    Attributes
    ----------
    user_id
        Owning user (1:1)
    email_verified
        Set once a VERIFY_EMAIL token has been redeemed
    onboarding_complete
        Set once the user has picked a username
    username
        Unique, lower-cased handle chosen during onboarding
    """

    user_id: UUID
    email_verified: bool = False
    onboarding_complete: bool = False
    username: str | None = None

    def mark_email_verified(self) -> "Profile":
        return replace(self, email_verified=True)

    def complete_onboarding(self, username: str) -> "Profile":
        return replace(self, username=username, onboarding_complete=True)
