"""Conflict domain errors (invariant violations).

HTTP Status for every error in this module: 409 Conflict.

Invariants guarded here:
- A (workspace, account) pair has at most one membership
- A workspace always keeps exactly one owner membership
- An invitation is terminal once accepted or declined
- A task or workspace cascade delete is all-or-nothing
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from teamwork.domain.exceptions import TeamworkError


class ConflictError(TeamworkError):
    """Base error for invariant violations."""

    status_code = 409
    problem_type = "conflict"
    title = "Conflict"


class AlreadyMemberError(ConflictError):
    """Raised when adding a membership that already exists.

    Attributes:
        workspace_id: The workspace joined.
        account_id: The account that is already a member.
    """

    problem_type = "membership:already-member"
    title = "Already A Member"

    def __init__(self, workspace_id: UUID, account_id: UUID) -> None:
        self.workspace_id = workspace_id
        self.account_id = account_id
        super().__init__(
            f"Account {account_id} is already a member of workspace {workspace_id}"
        )

    def problem_extensions(self) -> dict[str, Any]:
        return {"workspace_id": self.workspace_id, "account_id": self.account_id}


class CannotRemoveOwnerError(ConflictError):
    """Raised when removing (or leaving as) the workspace owner."""

    problem_type = "membership:cannot-remove-owner"
    title = "Cannot Remove Owner"

    def __init__(self, workspace_id: UUID, owner_account_id: UUID) -> None:
        self.workspace_id = workspace_id
        self.owner_account_id = owner_account_id
        super().__init__(
            f"Owner {owner_account_id} cannot be removed from workspace {workspace_id}"
        )

    def problem_extensions(self) -> dict[str, Any]:
        return {
            "workspace_id": self.workspace_id,
            "owner_account_id": self.owner_account_id,
        }


class CannotChangeOwnerRoleError(ConflictError):
    """Raised when a role update would create or drop an owner.

    Ownership transfer is not an exposed operation, so the owner role
    can neither be granted nor taken away through role updates.
    """

    problem_type = "membership:cannot-change-owner-role"
    title = "Cannot Change Owner Role"

    def __init__(self, workspace_id: UUID, account_id: UUID) -> None:
        self.workspace_id = workspace_id
        self.account_id = account_id
        super().__init__(
            f"Owner role of workspace {workspace_id} cannot be granted to or "
            f"taken from account {account_id}"
        )

    def problem_extensions(self) -> dict[str, Any]:
        return {"workspace_id": self.workspace_id, "account_id": self.account_id}


class AlreadyDecidedError(ConflictError):
    """Raised when accepting or declining an invitation that is not pending.

    Attributes:
        invitation_id: The invitation acted upon.
        status: The terminal status it already holds.
    """

    problem_type = "invitation:already-decided"
    title = "Invitation Already Decided"

    def __init__(self, invitation_id: UUID, status: str) -> None:
        self.invitation_id = invitation_id
        self.status = status
        super().__init__(f"Invitation {invitation_id} was already {status}")

    def problem_extensions(self) -> dict[str, Any]:
        return {"invitation_id": self.invitation_id, "invitation_status": self.status}


class InvitationPendingError(ConflictError):
    """Raised when the recipient already holds a pending invitation to the workspace."""

    problem_type = "invitation:already-pending"
    title = "Invitation Already Pending"

    def __init__(self, workspace_id: UUID, invitation_id: UUID) -> None:
        self.workspace_id = workspace_id
        self.invitation_id = invitation_id
        super().__init__(
            f"Invitation {invitation_id} to workspace {workspace_id} is still pending"
        )

    def problem_extensions(self) -> dict[str, Any]:
        return {"workspace_id": self.workspace_id, "invitation_id": self.invitation_id}


class AlreadyAssignedError(ConflictError):
    """Raised when assigning an account that is already an assignee."""

    problem_type = "task:already-assigned"
    title = "Already Assigned"

    def __init__(self, task_id: UUID, account_id: UUID) -> None:
        self.task_id = task_id
        self.account_id = account_id
        super().__init__(f"Account {account_id} is already assigned to task {task_id}")

    def problem_extensions(self) -> dict[str, Any]:
        return {"task_id": self.task_id, "account_id": self.account_id}


class NotAssignedError(ConflictError):
    """Raised when unassigning an account that is not an assignee."""

    problem_type = "task:not-assigned"
    title = "Not Assigned"

    def __init__(self, task_id: UUID, account_id: UUID) -> None:
        self.task_id = task_id
        self.account_id = account_id
        super().__init__(f"Account {account_id} is not assigned to task {task_id}")

    def problem_extensions(self) -> dict[str, Any]:
        return {"task_id": self.task_id, "account_id": self.account_id}


class ConcurrentModificationError(ConflictError):
    """Raised when a compare-and-set write loses a race.

    Attributes:
        entity_id: The row whose expected state no longer held.
        expected: The state the writer expected to find.
        actual: The state that was found instead.
    """

    problem_type = "concurrent-modification"
    title = "Concurrent Modification"

    def __init__(self, entity_id: UUID, expected: str, actual: str) -> None:
        self.entity_id = entity_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Entity {entity_id} expected state {expected} but found {actual}"
        )

    def problem_extensions(self) -> dict[str, Any]:
        return {
            "entity_id": self.entity_id,
            "expected": self.expected,
            "actual": self.actual,
        }


class InvalidStateTransitionError(ConflictError):
    """Raised when a transition policy rejects a status change."""

    problem_type = "invalid-state-transition"
    title = "Invalid State Transition"

    def __init__(self, entity_id: UUID, from_status: str, to_status: str) -> None:
        self.entity_id = entity_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Transition {from_status} -> {to_status} is not allowed for {entity_id}"
        )

    def problem_extensions(self) -> dict[str, Any]:
        return {
            "entity_id": self.entity_id,
            "from_status": self.from_status,
            "to_status": self.to_status,
        }


class CascadeDeleteError(ConflictError):
    """Raised when a task cascade delete fails partway and was rolled back.

    Attributes:
        task_id: The task that was being deleted.
        cause: Text of the underlying failure.
    """

    problem_type = "task:cascade-delete-failed"
    title = "Cascade Delete Failed"

    def __init__(self, task_id: UUID, cause: str) -> None:
        self.task_id = task_id
        self.cause = cause
        super().__init__(f"Deleting task {task_id} failed and was rolled back: {cause}")

    def problem_extensions(self) -> dict[str, Any]:
        return {"task_id": self.task_id}


class WorkspaceDeleteError(ConflictError):
    """Raised when a workspace delete fails partway and was rolled back."""

    problem_type = "workspace:cascade-delete-failed"
    title = "Cascade Delete Failed"

    def __init__(self, workspace_id: UUID, cause: str) -> None:
        self.workspace_id = workspace_id
        self.cause = cause
        super().__init__(
            f"Deleting workspace {workspace_id} failed and was rolled back: {cause}"
        )

    def problem_extensions(self) -> dict[str, Any]:
        return {"workspace_id": self.workspace_id}
