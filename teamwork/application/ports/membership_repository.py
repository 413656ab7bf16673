"""Membership repository port.

The membership row is the single source of truth for who belongs to a
workspace. Both directions (workspace -> members, account ->
workspaces) are queries over the same rows, so there is no second
write that could diverge from the first.

Constraints:
- Unique key (workspace_id, account_id), enforced by ``add``
- ``list_for_workspace`` returns members in join order
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol
from uuid import UUID

from teamwork.domain.models.workspace import Membership, WorkspaceRole


class MembershipRepositoryProtocol(Protocol):
    """Protocol for membership persistence."""

    @abstractmethod
    async def add(self, membership: Membership) -> None:
        """Insert a membership.

        Raises:
            AlreadyMemberError: The (workspace, account) pair exists.
        """
        ...

    @abstractmethod
    async def get(self, workspace_id: UUID, account_id: UUID) -> Membership | None:
        """Get a membership, or None if the account is not a member."""
        ...

    @abstractmethod
    async def update_role(
        self, workspace_id: UUID, account_id: UUID, role: WorkspaceRole
    ) -> Membership:
        """Change the role of an existing membership.

        Raises:
            NotMemberError: No membership for the pair.
        """
        ...

    @abstractmethod
    async def remove(self, workspace_id: UUID, account_id: UUID) -> Membership:
        """Delete a membership and return it.

        Raises:
            NotMemberError: No membership for the pair.
        """
        ...

    @abstractmethod
    async def list_for_workspace(self, workspace_id: UUID) -> list[Membership]:
        """List memberships of a workspace in join order."""
        ...

    @abstractmethod
    async def list_for_account(self, account_id: UUID) -> list[Membership]:
        """List memberships held by an account."""
        ...

    @abstractmethod
    async def remove_all_for_workspace(self, workspace_id: UUID) -> list[Membership]:
        """Delete every membership of a workspace and return them."""
        ...
