"""Session token service.

Issues and verifies the signed, stateless session tokens handed out on
sign-in.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from warden_auth.exceptions import InvalidTokenError
from warden_auth.schemas import TokenPayload


class JWTService:
    """Service for session token creation and verification.

    Session tokens are HS256-signed JWTs carrying the user id (``sub``),
    the email at issuance, and the ``iat``/``exp`` timestamps. They are not
    stored anywhere, so validity is purely a matter of signature and expiry.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_session_token(user_id, "user@example.com")
    >>> payload = service.verify_token(token)
    >>> print(payload.user_id)
    """

    DEFAULT_EXPIRES_IN = timedelta(days=30)
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        expires_in: timedelta = DEFAULT_EXPIRES_IN,
    ):
        """Initialize the session token service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        expires_in
            Lifetime of issued tokens (default 30 days)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expires_in = expires_in

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def create_session_token(
        self,
        user_id: UUID,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed session token.

        Parameters
        ----------
        user_id
            The user's unique identifier
        email
            The user's email address
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + (expires_delta or self._expires_in),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a session token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp"]},
            )

            return TokenPayload(
                user_id=UUID(payload["sub"]),
                email=payload.get("email", ""),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                iat=datetime.fromtimestamp(
                    payload.get("iat", payload["exp"]),
                    tz=timezone.utc,
                ),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
