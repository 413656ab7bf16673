"""In-memory stub for AccountRepositoryProtocol.

Simulates the account store including the unique email constraint
(case-insensitive).
"""

from __future__ import annotations

from uuid import UUID

from teamwork.domain.models.account import Account, normalize_email


class AccountRepositoryStub:
    """In-memory implementation of AccountRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._accounts: dict[UUID, Account] = {}
        # Key: normalized email, Value: account id
        self._by_email: dict[str, UUID] = {}

    async def get(self, account_id: UUID) -> Account | None:
        return self._accounts.get(account_id)

    async def get_by_email(self, email: str) -> Account | None:
        account_id = self._by_email.get(normalize_email(email))
        return self._accounts.get(account_id) if account_id else None

    async def get_many(self, account_ids: list[UUID]) -> dict[UUID, Account]:
        return {a: self._accounts[a] for a in account_ids if a in self._accounts}

    async def save(self, account: Account) -> None:
        """Insert or replace an account.

        Raises:
            ValueError: Email already registered to a different account.
        """
        owner = self._by_email.get(account.normalized_email)
        if owner is not None and owner != account.id:
            raise ValueError(f"Email {account.email} is already registered")
        previous = self._accounts.get(account.id)
        if previous is not None:
            self._by_email.pop(previous.normalized_email, None)
        self._accounts[account.id] = account
        self._by_email[account.normalized_email] = account.id

    # Test helper methods

    def add(self, account: Account) -> Account:
        """Synchronously register an account. Returns it for chaining."""
        self._accounts[account.id] = account
        self._by_email[account.normalized_email] = account.id
        return account

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._accounts.clear()
        self._by_email.clear()
