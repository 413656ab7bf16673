"""In-memory stub for MembershipRepositoryProtocol.

Simulates the membership table including:
- Unique constraint on (workspace_id, account_id)
- Join-order listing per workspace
- Reverse lookup per account, derived from the same rows
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from teamwork.domain.errors import AlreadyMemberError, NotMemberError
from teamwork.domain.models.workspace import Membership, WorkspaceRole


class MembershipRepositoryStub:
    """In-memory implementation of MembershipRepositoryProtocol.

    Rows are kept in a dict keyed by (workspace_id, account_id); dict
    insertion order is the join order. A role update replaces the row
    in place, so order is preserved.
    """

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._rows: dict[tuple[UUID, UUID], Membership] = {}
        self._lock = asyncio.Lock()

    async def add(self, membership: Membership) -> None:
        """Insert a membership, enforcing the unique key.

        Raises:
            AlreadyMemberError: The pair already exists.
        """
        async with self._lock:
            if membership.key in self._rows:
                raise AlreadyMemberError(membership.workspace_id, membership.account_id)
            self._rows[membership.key] = membership

    async def get(self, workspace_id: UUID, account_id: UUID) -> Membership | None:
        return self._rows.get((workspace_id, account_id))

    async def update_role(
        self, workspace_id: UUID, account_id: UUID, role: WorkspaceRole
    ) -> Membership:
        async with self._lock:
            current = self._rows.get((workspace_id, account_id))
            if current is None:
                raise NotMemberError(workspace_id, account_id)
            updated = current.with_role(role)
            self._rows[updated.key] = updated
            return updated

    async def remove(self, workspace_id: UUID, account_id: UUID) -> Membership:
        async with self._lock:
            removed = self._rows.pop((workspace_id, account_id), None)
            if removed is None:
                raise NotMemberError(workspace_id, account_id)
            return removed

    async def list_for_workspace(self, workspace_id: UUID) -> list[Membership]:
        return [m for m in self._rows.values() if m.workspace_id == workspace_id]

    async def list_for_account(self, account_id: UUID) -> list[Membership]:
        return [m for m in self._rows.values() if m.account_id == account_id]

    async def remove_all_for_workspace(self, workspace_id: UUID) -> list[Membership]:
        async with self._lock:
            removed = [m for m in self._rows.values() if m.workspace_id == workspace_id]
            for membership in removed:
                del self._rows[membership.key]
            return removed

    # Test helper methods

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._rows.clear()

    def count_for_workspace(self, workspace_id: UUID) -> int:
        return sum(1 for m in self._rows.values() if m.workspace_id == workspace_id)
