"""Generator for single-use verification and reset token values."""

from uuid import uuid4


class TokenGenerator:
    """Produce unguessable token values (random UUID v4, 122 bits of entropy).

    The same format serves every token type; the type tag stored next to the
    value decides what a token may be used for.
    """

    def new_token(self) -> str:
        return str(uuid4())
