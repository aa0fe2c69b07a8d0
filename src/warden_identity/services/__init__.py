"""Identity domain services."""

from warden_identity.services.rate_limiter import RateLimitDecision, RateLimiter

__all__ = [
    "RateLimitDecision",
    "RateLimiter",
]
