"""Membership ledger: workspace membership, roles and the owner invariant.

Invariants:
- Exactly one OWNER membership per workspace, referencing
  ``Workspace.owner_account_id``. It cannot be removed, demoted, or
  duplicated; ownership transfer is not offered.
- Memberships are unique per (workspace, account); the repository
  enforces the key.
- The account -> workspaces direction is a query over memberships, so
  adding or removing a member is a single row write.

Concurrency:
    Mutations for one workspace run under a per-workspace asyncio lock,
    so add-after-remove and double-join races are serialized.

Assignment Policy:
    Removing a member prunes that account from ``assigned_to`` of every
    task in the workspace, keeping ``assigned_to ⊆ members`` true after
    removals as well.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from structlog import get_logger

from teamwork.application.dtos import (
    MembershipResult,
    MemberView,
    WorkspaceDetails,
    WorkspaceResult,
    WorkspaceSummary,
)
from teamwork.application.ports.account_repository import AccountRepositoryProtocol
from teamwork.application.ports.membership_repository import (
    MembershipRepositoryProtocol,
)
from teamwork.application.ports.task_repository import TaskRepositoryProtocol
from teamwork.application.ports.workspace_repository import WorkspaceRepositoryProtocol
from teamwork.application.services.access_gate import AccessGate
from teamwork.application.services.task_cascade import TaskCascade
from teamwork.application.services.workspace_locks import WorkspaceLocks
from teamwork.domain.errors import (
    AccountNotFoundError,
    CannotChangeOwnerRoleError,
    CannotRemoveOwnerError,
    InvalidInputError,
    NotMemberError,
    WorkspaceDeleteError,
    WorkspaceNotFoundError,
    require_text,
)
from teamwork.domain.events import (
    DomainEvent,
    ProjectRemovedEvent,
    ProjectUpdateEvent,
)
from teamwork.domain.models.task import TaskStatus
from teamwork.domain.models.workspace import (
    Membership,
    Workspace,
    WorkspaceRole,
    WorkspaceStatus,
)
from teamwork.domain.primitives import AtomicOperationContext

logger = get_logger(__name__)

# Workspace fields the owner may change through update_workspace
UPDATABLE_WORKSPACE_FIELDS: tuple[str, ...] = (
    "name",
    "short_description",
    "description",
    "status",
    "target_date",
)


class MembershipLedgerService:
    """Owns workspace membership and roles.

    Example:
        >>> ledger = MembershipLedgerService(
        ...     workspaces=workspaces,
        ...     memberships=memberships,
        ...     accounts=accounts,
        ...     tasks=tasks,
        ...     gate=gate,
        ...     cascade=cascade,
        ... )
        >>> result = await ledger.create_workspace(owner_id, name="Apollo")
        >>> await ledger.add_member(result.workspace.id, member_id)
    """

    def __init__(
        self,
        workspaces: WorkspaceRepositoryProtocol,
        memberships: MembershipRepositoryProtocol,
        accounts: AccountRepositoryProtocol,
        tasks: TaskRepositoryProtocol,
        gate: AccessGate,
        cascade: TaskCascade,
        locks: WorkspaceLocks | None = None,
    ) -> None:
        """Initialize the membership ledger.

        Args:
            workspaces: Workspace persistence.
            memberships: Membership persistence (unique key enforced).
            accounts: Account lookup.
            tasks: Task persistence, for assignee pruning and workspace deletion.
            gate: Access gate used to authorize every mutation.
            cascade: Task cascade used when a workspace is deleted.
            locks: Per-workspace locks shared with the task lifecycle.
                  A private registry is created if not provided.
        """
        self._workspaces = workspaces
        self._memberships = memberships
        self._accounts = accounts
        self._tasks = tasks
        self._gate = gate
        self._cascade = cascade
        self._locks = locks or WorkspaceLocks()

    def _lock_for(self, workspace_id: UUID) -> asyncio.Lock:
        return self._locks.for_workspace(workspace_id)

    async def _require_account(self, account_id: UUID) -> None:
        if await self._accounts.get(account_id) is None:
            raise AccountNotFoundError(account_id)

    # Workspace lifecycle

    async def create_workspace(
        self,
        actor_id: UUID,
        name: str,
        short_description: str = "",
        description: str = "",
        target_date: datetime | None = None,
    ) -> WorkspaceResult:
        """Create a workspace owned by ``actor_id``.

        The owner membership is written right after the workspace row.
        If it cannot be written the workspace row is removed again.

        Raises:
            AccountNotFoundError: Actor does not exist.
            InvalidInputError: Name is blank.
        """
        name = require_text("name", name)
        await self._require_account(actor_id)

        workspace = Workspace(
            id=uuid4(),
            owner_account_id=actor_id,
            name=name,
            short_description=short_description,
            description=description,
            target_date=target_date,
        )
        async with AtomicOperationContext("workspace_create") as ctx:
            await self._workspaces.save(workspace)
            ctx.add_rollback(lambda: self._workspaces.delete(workspace.id))
            await self._memberships.add(
                Membership(
                    workspace_id=workspace.id,
                    account_id=actor_id,
                    role=WorkspaceRole.OWNER,
                )
            )

        logger.info(
            "workspace_created",
            workspace_id=str(workspace.id),
            owner_account_id=str(actor_id),
        )
        return WorkspaceResult(workspace=workspace)

    async def update_workspace(
        self,
        actor_id: UUID,
        workspace_id: UUID,
        **changes: Any,
    ) -> WorkspaceResult:
        """Change workspace details. Owner only.

        Only keys in UPDATABLE_WORKSPACE_FIELDS are accepted; keys whose
        value is None are ignored. Emits ProjectUpdate naming the
        changed fields when anything actually changed.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
            ForbiddenError: Actor is not the owner.
            InvalidInputError: Unknown field or blank name.
        """
        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_owner("update workspace")

        unknown = set(changes) - set(UPDATABLE_WORKSPACE_FIELDS)
        if unknown:
            field = sorted(unknown)[0]
            raise InvalidInputError(field, f"Workspace field {field} cannot be updated")
        provided = {k: v for k, v in changes.items() if v is not None}
        if "name" in provided:
            provided["name"] = require_text("name", provided["name"])
        if "status" in provided and not isinstance(provided["status"], WorkspaceStatus):
            raise InvalidInputError("status", "status must be a WorkspaceStatus")

        current = context.workspace
        changed = [k for k, v in provided.items() if getattr(current, k) != v]
        if not changed:
            return WorkspaceResult(workspace=current)

        updated = current.with_changes(**{k: provided[k] for k in changed})
        await self._workspaces.save(updated)

        logger.info(
            "workspace_updated",
            workspace_id=str(workspace_id),
            changed_fields=changed,
        )
        event = ProjectUpdateEvent(
            actor_id=actor_id,
            workspace_id=updated.id,
            workspace_name=updated.name,
            update_type=", ".join(field.replace("_", " ") for field in changed),
        )
        return WorkspaceResult(workspace=updated, events=[event])

    async def delete_workspace(self, actor_id: UUID, workspace_id: UUID) -> WorkspaceResult:
        """Delete a workspace with all tasks, their children and memberships.

        Owner only. All-or-nothing: any failure restores what was removed
        and surfaces as a single WorkspaceDeleteError.
        Every former member except the actor receives ProjectRemoved.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
            ForbiddenError: Actor is not the owner.
            WorkspaceDeleteError: A step failed and was rolled back.
        """
        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_owner("delete workspace")
        workspace = context.workspace

        async with self._lock_for(workspace_id):
            try:
                async with AtomicOperationContext("workspace_delete") as ctx:
                    for task in await self._tasks.list_for_workspace(workspace_id):
                        await self._cascade.delete(task, ctx)
                    members = await self._memberships.remove_all_for_workspace(workspace_id)
                    ctx.add_rollback(lambda: self._restore_memberships(members))
                    await self._workspaces.delete(workspace_id)
            except Exception as exc:
                logger.error(
                    "workspace_delete_failed",
                    workspace_id=str(workspace_id),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise WorkspaceDeleteError(workspace_id, str(exc)) from exc
        self._locks.discard(workspace_id)

        logger.info(
            "workspace_deleted",
            workspace_id=str(workspace_id),
            member_count=len(members),
        )
        events: list[DomainEvent] = [
            ProjectRemovedEvent(
                actor_id=actor_id,
                workspace_id=workspace.id,
                workspace_name=workspace.name,
                removed_account_id=m.account_id,
            )
            for m in members
            if m.account_id != actor_id
        ]
        return WorkspaceResult(workspace=workspace, events=events)

    async def _restore_memberships(self, members: list[Membership]) -> None:
        for membership in members:
            await self._memberships.add(membership)

    # Membership mutations

    async def add_member(
        self,
        workspace_id: UUID,
        account_id: UUID,
        role: WorkspaceRole = WorkspaceRole.MEMBER,
    ) -> MembershipResult:
        """Add ``account_id`` to a workspace.

        Authorization belongs to the caller: invitation acceptance is
        the path that reaches this operation, after the recipient check.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
            AccountNotFoundError: Account does not exist.
            InvalidInputError: ``role`` is OWNER.
            AlreadyMemberError: The pair already exists.
        """
        if role is WorkspaceRole.OWNER:
            raise InvalidInputError("role", "A workspace has exactly one owner")
        if await self._workspaces.get(workspace_id) is None:
            raise WorkspaceNotFoundError(workspace_id)
        await self._require_account(account_id)

        membership = Membership(workspace_id=workspace_id, account_id=account_id, role=role)
        async with self._lock_for(workspace_id):
            await self._memberships.add(membership)

        logger.info(
            "member_added",
            workspace_id=str(workspace_id),
            account_id=str(account_id),
            role=role.value,
        )
        return MembershipResult(membership=membership)

    async def remove_member(
        self,
        actor_id: UUID,
        workspace_id: UUID,
        account_id: UUID,
    ) -> MembershipResult:
        """Remove ``account_id`` from a workspace. Admin or owner only.

        Emits ProjectRemoved for the removed account and prunes it from
        task assignee lists.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
            ForbiddenError: Actor is not an admin or the owner.
            NotMemberError: Account is not a member.
            CannotRemoveOwnerError: Account is the owner.
        """
        context = await self._gate.via_workspace(actor_id, workspace_id)
        if actor_id != account_id:
            context.require_admin_or_owner("remove member")
        return await self._remove(context.workspace, actor_id, account_id)

    async def leave_workspace(self, actor_id: UUID, workspace_id: UUID) -> MembershipResult:
        """Remove the actor's own membership.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
            NotMemberError: Actor is not a member.
            CannotRemoveOwnerError: Actor owns the workspace.
        """
        context = await self._gate.via_workspace(actor_id, workspace_id)
        return await self._remove(context.workspace, actor_id, actor_id)

    async def _remove(
        self,
        workspace: Workspace,
        actor_id: UUID,
        account_id: UUID,
    ) -> MembershipResult:
        log = logger.bind(
            workspace_id=str(workspace.id),
            account_id=str(account_id),
            actor_id=str(actor_id),
        )
        async with self._lock_for(workspace.id):
            existing = await self._memberships.get(workspace.id, account_id)
            if existing is None:
                raise NotMemberError(workspace.id, account_id)
            if existing.role is WorkspaceRole.OWNER:
                log.warning("owner_removal_refused")
                raise CannotRemoveOwnerError(workspace.id, account_id)

            async with AtomicOperationContext("member_remove") as ctx:
                removed = await self._memberships.remove(workspace.id, account_id)
                ctx.add_rollback(lambda: self._memberships.add(removed))
                pruned = await self._prune_assignee(workspace.id, account_id, ctx)

        log.info("member_removed", pruned_tasks=len(pruned))
        event = ProjectRemovedEvent(
            actor_id=actor_id,
            workspace_id=workspace.id,
            workspace_name=workspace.name,
            removed_account_id=account_id,
        )
        return MembershipResult(membership=removed, pruned_task_ids=pruned, events=[event])

    async def _prune_assignee(
        self,
        workspace_id: UUID,
        account_id: UUID,
        ctx: AtomicOperationContext,
    ) -> list[UUID]:
        pruned: list[UUID] = []
        for task in await self._tasks.list_for_workspace(workspace_id):
            if task.is_assigned_to(account_id):
                await self._tasks.save(task.without_assignee(account_id))
                ctx.add_rollback(lambda original=task: self._tasks.save(original))
                pruned.append(task.id)
        return pruned

    async def update_role(
        self,
        actor_id: UUID,
        workspace_id: UUID,
        account_id: UUID,
        role: WorkspaceRole,
    ) -> MembershipResult:
        """Change a member's role. Owner only.

        No write happens when the role is unchanged.

        Raises:
            WorkspaceNotFoundError: Workspace does not exist.
            ForbiddenError: Actor is not the owner.
            NotMemberError: Account is not a member.
            CannotChangeOwnerRoleError: Granting OWNER or changing the owner's role.
        """
        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_owner("update member role")

        async with self._lock_for(workspace_id):
            existing = await self._memberships.get(workspace_id, account_id)
            if existing is None:
                raise NotMemberError(workspace_id, account_id)
            if existing.role is role:
                return MembershipResult(membership=existing, changed=False)
            if role is WorkspaceRole.OWNER or existing.role is WorkspaceRole.OWNER:
                raise CannotChangeOwnerRoleError(workspace_id, account_id)
            updated = await self._memberships.update_role(workspace_id, account_id, role)

        logger.info(
            "member_role_updated",
            workspace_id=str(workspace_id),
            account_id=str(account_id),
            old_role=existing.role.value,
            new_role=role.value,
        )
        return MembershipResult(membership=updated)

    # Reads

    async def get_members(self, actor_id: UUID, workspace_id: UUID) -> list[MemberView]:
        """List members with roles in join order. Members only."""
        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_member("view members")

        memberships = await self._memberships.list_for_workspace(workspace_id)
        accounts = await self._accounts.get_many([m.account_id for m in memberships])
        return [
            MemberView(
                account_id=m.account_id,
                display_name=accounts[m.account_id].display_name,
                email=accounts[m.account_id].email,
                role=m.role,
                joined_at=m.joined_at,
            )
            for m in memberships
            if m.account_id in accounts
        ]

    async def get_role(self, actor_id: UUID, workspace_id: UUID) -> WorkspaceRole:
        """The actor's own role. Members only."""
        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_member("view role")
        assert context.role is not None
        return context.role

    async def list_workspaces(self, actor_id: UUID) -> list[WorkspaceSummary]:
        """Workspaces the actor belongs to, derived from memberships."""
        memberships = await self._memberships.list_for_account(actor_id)
        roles = {m.workspace_id: m.role for m in memberships}
        workspaces = await self._workspaces.get_many(list(roles))
        return [WorkspaceSummary(workspace=w, role=roles[w.id]) for w in workspaces]

    async def get_workspace_details(
        self, actor_id: UUID, workspace_id: UUID
    ) -> WorkspaceDetails:
        """Workspace with the actor's role, member count and task counts."""
        context = await self._gate.via_workspace(actor_id, workspace_id)
        context.require_member("view workspace")
        assert context.role is not None

        members = await self._memberships.list_for_workspace(workspace_id)
        counts = {status: 0 for status in TaskStatus}
        for task in await self._tasks.list_for_workspace(workspace_id):
            counts[task.status] += 1
        return WorkspaceDetails(
            workspace=context.workspace,
            role=context.role,
            member_count=len(members),
            task_counts=counts,
        )
