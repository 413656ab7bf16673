"""Unit tests for TeamWork domain models."""

from uuid import uuid4

import pytest

from teamwork.domain.models.account import Account, normalize_email
from teamwork.domain.models.issue import (
    IssueStatus,
    PermissiveIssueTransitionPolicy,
    StrictIssueTransitionPolicy,
)
from teamwork.domain.models.mail import InvitationMessage, InvitationStatus, MailType
from teamwork.domain.models.task import Task, TaskStatus, ordered_unique
from teamwork.domain.models.workspace import WorkspaceRole


class TestAccount:
    """Tests for Account validation."""

    def test_rejects_email_without_at(self) -> None:
        with pytest.raises(ValueError, match="Invalid email"):
            Account(id=uuid4(), email="not-an-email", display_name="X")

    def test_normalized_email_is_case_insensitive(self) -> None:
        account = Account(id=uuid4(), email=" Mia@Example.COM ", display_name="Mia")
        assert account.normalized_email == "mia@example.com"
        assert normalize_email("MIA@example.com") == account.normalized_email


class TestWorkspaceRole:
    def test_admin_and_owner_manage(self) -> None:
        assert WorkspaceRole.OWNER.is_admin_or_owner()
        assert WorkspaceRole.ADMIN.is_admin_or_owner()
        assert not WorkspaceRole.MEMBER.is_admin_or_owner()


class TestTask:
    """Tests for Task assignee handling."""

    def test_assignees_are_an_ordered_set(self) -> None:
        a, b = uuid4(), uuid4()
        task = Task(id=uuid4(), workspace_id=uuid4(), title="T", assigned_to=(a, b, a))
        assert task.assigned_to == (a, b)

    def test_ordered_unique_keeps_first_occurrence(self) -> None:
        a, b, c = uuid4(), uuid4(), uuid4()
        assert ordered_unique([c, a, c, b, a]) == (c, a, b)

    def test_without_assignee_prunes_only_that_account(self) -> None:
        a, b = uuid4(), uuid4()
        task = Task(id=uuid4(), workspace_id=uuid4(), title="T", assigned_to=(a, b))
        pruned = task.without_assignee(a)
        assert pruned.assigned_to == (b,)
        assert pruned.updated_at >= task.updated_at

    def test_unassigned_task(self) -> None:
        task = Task(id=uuid4(), workspace_id=uuid4(), title="T")
        assert task.is_unassigned
        assert task.status is TaskStatus.TODO


class TestInvitationMessage:
    """Tests for InvitationMessage construction rules."""

    def _invite(self, **overrides: object) -> InvitationMessage:
        fields: dict[str, object] = {
            "id": uuid4(),
            "sender_account_id": uuid4(),
            "recipient_account_id": uuid4(),
            "subject": "Invitation",
            "body": "Join us",
            "workspace_id": uuid4(),
        }
        fields.update(overrides)
        return InvitationMessage(**fields)  # type: ignore[arg-type]

    def test_defaults_to_pending_invite(self) -> None:
        invite = self._invite()
        assert invite.mail_type is MailType.INVITE
        assert invite.invitation_status is InvitationStatus.PENDING
        assert invite.proposed_role is WorkspaceRole.MEMBER
        assert not invite.read

    def test_requires_workspace(self) -> None:
        with pytest.raises(ValueError, match="workspace_id"):
            self._invite(workspace_id=None)

    def test_owner_role_cannot_be_proposed(self) -> None:
        with pytest.raises(ValueError, match="owner"):
            self._invite(proposed_role=WorkspaceRole.OWNER)

    def test_decision_marks_read_and_stamps_sent_at(self) -> None:
        decided = self._invite().with_decision(InvitationStatus.ACCEPTED)
        assert decided.invitation_status is InvitationStatus.ACCEPTED
        assert decided.read
        assert decided.sent_at is not None


class TestIssueTransitionPolicies:
    """Tests for permissive and strict issue policies."""

    @pytest.mark.parametrize("target", list(IssueStatus))
    def test_permissive_allows_everything(self, target: IssueStatus) -> None:
        assert PermissiveIssueTransitionPolicy.allows(IssueStatus.CLOSED, target)

    def test_strict_follows_linear_path(self) -> None:
        policy = StrictIssueTransitionPolicy
        assert policy.allows(IssueStatus.OPEN, IssueStatus.IN_PROGRESS)
        assert policy.allows(IssueStatus.IN_PROGRESS, IssueStatus.RESOLVED)
        assert policy.allows(IssueStatus.RESOLVED, IssueStatus.CLOSED)

    def test_strict_forbids_skipping_and_reopening(self) -> None:
        policy = StrictIssueTransitionPolicy
        assert not policy.allows(IssueStatus.OPEN, IssueStatus.RESOLVED)
        assert not policy.allows(IssueStatus.CLOSED, IssueStatus.OPEN)

    def test_same_status_is_always_allowed(self) -> None:
        assert StrictIssueTransitionPolicy.allows(IssueStatus.CLOSED, IssueStatus.CLOSED)
