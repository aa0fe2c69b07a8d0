"""User domain."""

from warden_identity.domain.user.profile import Profile
from warden_identity.domain.user.user import User

__all__ = [
    "Profile",
    "User",
]
