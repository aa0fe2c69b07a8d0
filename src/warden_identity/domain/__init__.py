"""Identity domain: users, profiles and single-use tokens."""

from warden_identity.domain.time import ensure_tz_aware, utc_now
from warden_identity.domain.token import TokenType, UserToken
from warden_identity.domain.user import Profile, User

__all__ = [
    "Profile",
    "TokenType",
    "User",
    "UserToken",
    "ensure_tz_aware",
    "utc_now",
]
