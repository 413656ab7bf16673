"""Workspace and membership domain models.

Invariants:
- A workspace has exactly one membership with role OWNER, and it
  references ``owner_account_id``
- Memberships are unique per (workspace_id, account_id)
- Memberships of a workspace are ordered by join order
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


class WorkspaceRole(Enum):
    """Role an account holds inside a workspace.

    Roles:
        OWNER: Creator of the workspace; exactly one per workspace
        ADMIN: May manage tasks and members
        MEMBER: May view, comment, report issues and submit open tasks
    """

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"

    def is_admin_or_owner(self) -> bool:
        """Check whether this role grants management rights."""
        return self in (WorkspaceRole.OWNER, WorkspaceRole.ADMIN)


# Roles an invitation may propose; ownership is never handed out by invite.
INVITABLE_ROLES: frozenset[WorkspaceRole] = frozenset(
    {WorkspaceRole.ADMIN, WorkspaceRole.MEMBER}
)


class WorkspaceStatus(Enum):
    """Lifecycle status of a workspace."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    COMPLETED = "completed"


@dataclass(frozen=True, eq=True)
class Membership:
    """The (workspace, account, role) relationship granting access.

    Attributes:
        workspace_id: Workspace joined.
        account_id: Account that joined.
        role: Role held in the workspace.
        joined_at: When the membership was created (UTC). Defines member order.
    """

    workspace_id: UUID
    account_id: UUID
    role: WorkspaceRole
    joined_at: datetime = field(default_factory=_utc_now)

    @property
    def key(self) -> tuple[UUID, UUID]:
        """Unique key of the membership."""
        return (self.workspace_id, self.account_id)

    def with_role(self, role: WorkspaceRole) -> Membership:
        """Return a copy holding ``role``; join order is preserved."""
        return replace(self, role=role)


@dataclass(frozen=True, eq=True)
class Workspace:
    """A shared project container.

    Members and tasks are not stored on the workspace; they are
    resolved through the membership and task repositories.

    Attributes:
        id: Unique workspace identifier.
        owner_account_id: Account holding the single owner membership.
        name: Display name.
        short_description: One-line summary.
        description: Long description.
        status: Lifecycle status.
        target_date: Optional completion target.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
    """

    id: UUID
    owner_account_id: UUID
    name: str
    short_description: str = ""
    description: str = ""
    status: WorkspaceStatus = field(default=WorkspaceStatus.ACTIVE)
    target_date: datetime | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        """Validate workspace fields."""
        if not self.name.strip():
            raise ValueError("Workspace name must not be blank")

    def with_changes(self, **changes: object) -> Workspace:
        """Return a copy with ``changes`` applied and ``updated_at`` bumped.

        ``id``, ``owner_account_id`` and ``created_at`` are immutable.
        """
        for locked in ("id", "owner_account_id", "created_at"):
            if locked in changes:
                raise ValueError(f"Workspace.{locked} cannot be changed")
        return replace(self, **changes, updated_at=_utc_now())  # type: ignore[arg-type]
