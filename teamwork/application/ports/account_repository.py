"""Account lookup port.

The account store is an external collaborator: the core only resolves
accounts by id or email. Registration and credentials live elsewhere.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol
from uuid import UUID

from teamwork.domain.models.account import Account


class AccountRepositoryProtocol(Protocol):
    """Protocol for resolving accounts."""

    @abstractmethod
    async def get(self, account_id: UUID) -> Account | None:
        """Get an account by id, or None if absent."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Account | None:
        """Get an account by email (case-insensitive), or None if absent."""
        ...

    @abstractmethod
    async def get_many(self, account_ids: list[UUID]) -> dict[UUID, Account]:
        """Get several accounts at once; missing ids are omitted."""
        ...

    @abstractmethod
    async def save(self, account: Account) -> None:
        """Insert or replace an account.

        Raises:
            ValueError: If the email is already used by another account.
        """
        ...
