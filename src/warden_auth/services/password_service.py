"""bcrypt password hashing.

Strength rules are not enforced here; they belong to input validation.
bcrypt only reads the first 72 bytes of its input, and bcrypt 5 rejects
anything longer, so longer passwords are reduced to a SHA-256 digest first.
"""

import base64
import hashlib

import bcrypt

BCRYPT_MAX_BYTES = 72


class PasswordHashingService:
    """Hash and check passwords with a configurable bcrypt work factor.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("Abc12345!")
    >>> service.verify("Abc12345!", hashed)
    True
    >>> service.verify("wrong_password", hashed)
    False
    """

    DEFAULT_ROUNDS = 10

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Return the bcrypt hash of ``password`` under a fresh salt."""
        hashed = bcrypt.hashpw(_to_bcrypt_input(password), bcrypt.gensalt(rounds=self._rounds))
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash.

        Parameters
        ----------
        password
            The plaintext password to check
        password_hash
            The stored bcrypt hash

        Returns
        -------
        True on a match. False on a mismatch or a malformed hash.
        """
        try:
            return bcrypt.checkpw(_to_bcrypt_input(password), password_hash.encode("utf-8"))
        except ValueError:
            return False


def _to_bcrypt_input(password: str) -> bytes:
    raw = password.encode("utf-8")
    if len(raw) <= BCRYPT_MAX_BYTES:
        return raw
    # 44 base64 characters, no NUL bytes
    return base64.b64encode(hashlib.sha256(raw).digest())
