"""Transaction boundary contract shared by the services."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.repositories.user import UserRepository


class UnitOfWork(ABC):
    """
    One database transaction per use case.

    ``users`` is bound to the transaction's session. Leaving the block
    normally commits (read-write) or just releases (read-only); leaving it
    with an exception rolls back.
    """

    users: UserRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
