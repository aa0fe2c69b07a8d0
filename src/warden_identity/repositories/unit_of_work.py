"""Transaction boundary for multi-step store mutations."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """All-or-nothing scope for repository writes.

    Usage::

        async with uow.transaction():
            await users.save(user)
            await credentials.save(user.id, password_hash)

    Leaving the block normally commits. Leaving it with an exception rolls
    back every write made inside it and re-raises.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction scope."""
