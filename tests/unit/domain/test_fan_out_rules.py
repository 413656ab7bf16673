"""Unit tests for the notification fan-out rules."""

from datetime import datetime, timezone
from uuid import UUID, uuid4

import pytest

from teamwork.domain.events import (
    CommentAddedEvent,
    DeadlineApproachingEvent,
    DomainEvent,
    IssueCreatedEvent,
    IssueResolvedEvent,
    ProjectUpdateEvent,
    TaskAssignedEvent,
    TaskCompletedEvent,
    TaskStatusChangedEvent,
)
from teamwork.domain.models.notification import NotificationType
from teamwork.domain.models.task import TaskStatus
from teamwork.domain.models.workspace import WorkspaceRole
from teamwork.domain.services.fan_out_rules import (
    FanOutContext,
    plan_notifications,
    resolve_recipients,
)

WORKSPACE_ID = uuid4()
TASK_ID = uuid4()


@pytest.fixture
def accounts() -> dict[str, UUID]:
    """Owner C, admin B, members A and D."""
    return {"A": uuid4(), "B": uuid4(), "C": uuid4(), "D": uuid4()}


@pytest.fixture
def context(accounts: dict[str, UUID]) -> FanOutContext:
    return FanOutContext(
        members={
            accounts["C"]: WorkspaceRole.OWNER,
            accounts["B"]: WorkspaceRole.ADMIN,
            accounts["A"]: WorkspaceRole.MEMBER,
            accounts["D"]: WorkspaceRole.MEMBER,
        }
    )


def _task_fields(actor: UUID | None) -> dict[str, object]:
    return {
        "actor_id": actor,
        "workspace_id": WORKSPACE_ID,
        "workspace_name": "Apollo",
        "task_id": TASK_ID,
        "task_title": "Ship it",
    }


def _recipients(event: DomainEvent, context: FanOutContext) -> set[UUID]:
    return {d.recipient_account_id for d in plan_notifications(event, context)}


class TestResolveRecipients:
    def test_deduplicates_in_order_and_drops_actor(self) -> None:
        a, b, actor = uuid4(), uuid4(), uuid4()
        assert resolve_recipients([b, actor, a, b], actor) == [b, a]


class TestTaskRules:
    """Recipient sets for task events."""

    def test_completed_by_admin_assignee_notifies_owner_only(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = TaskCompletedEvent(
            **_task_fields(accounts["B"]),
            assignees=(accounts["A"], accounts["B"]),
        )
        assert _recipients(event, context) == {accounts["C"]}

    def test_assigned_notifies_new_assignee(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = TaskAssignedEvent(**_task_fields(accounts["C"]), assignee_id=accounts["A"])
        drafts = plan_notifications(event, context)
        assert [d.recipient_account_id for d in drafts] == [accounts["A"]]
        assert drafts[0].notification_type is NotificationType.TASK_ASSIGNED
        assert drafts[0].references.task_id == TASK_ID
        assert drafts[0].action_url == f"/app/tasks/{TASK_ID}"

    def test_self_assignment_produces_nothing(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = TaskAssignedEvent(**_task_fields(accounts["B"]), assignee_id=accounts["B"])
        assert plan_notifications(event, context) == []

    def test_status_changed_notifies_assignees_except_actor(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = TaskStatusChangedEvent(
            **_task_fields(accounts["A"]),
            old_status=TaskStatus.TODO,
            new_status=TaskStatus.IN_PROGRESS,
            assignees=(accounts["A"], accounts["D"]),
        )
        assert _recipients(event, context) == {accounts["D"]}


class TestCollaborationRules:
    """Recipient sets for comments, issues and workspace events."""

    def test_comment_notifies_assignees_and_owner_once(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = CommentAddedEvent(
            **_task_fields(accounts["A"]),
            comment_id=uuid4(),
            assignees=(accounts["A"], accounts["C"], accounts["D"]),
        )
        drafts = plan_notifications(event, context)
        assert sorted(d.recipient_account_id for d in drafts) == sorted(
            [accounts["C"], accounts["D"]]
        )

    def test_issue_created_notifies_owner_and_admins(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = IssueCreatedEvent(**_task_fields(accounts["A"]), issue_id=uuid4())
        assert _recipients(event, context) == {accounts["B"], accounts["C"]}

    def test_issue_resolved_notifies_issue_owner(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = IssueResolvedEvent(
            **_task_fields(accounts["B"]),
            issue_id=uuid4(),
            issue_owner_id=accounts["A"],
        )
        assert _recipients(event, context) == {accounts["A"]}

    def test_project_update_notifies_all_other_members(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = ProjectUpdateEvent(
            actor_id=accounts["C"],
            workspace_id=WORKSPACE_ID,
            workspace_name="Apollo",
            update_type="name",
        )
        assert _recipients(event, context) == {
            accounts["A"],
            accounts["B"],
            accounts["D"],
        }

    def test_deadline_is_system_triggered(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = DeadlineApproachingEvent(
            **_task_fields(None),
            due_date=datetime.now(timezone.utc),
            assignees=(accounts["A"], accounts["D"]),
        )
        drafts = plan_notifications(event, context)
        assert {d.recipient_account_id for d in drafts} == {accounts["A"], accounts["D"]}
        assert all(d.created_by_account_id is None for d in drafts)


def test_unknown_event_type_is_rejected(context: FanOutContext) -> None:
    with pytest.raises(ValueError, match="No fan-out rule"):
        plan_notifications(DomainEvent(actor_id=None), context)


class TestLogPayloads:
    """Events and drafts flatten to JSON-safe dicts for structured logs."""

    def test_event_payload_is_json_safe(self, accounts: dict[str, UUID]) -> None:
        due = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
        event = DeadlineApproachingEvent(
            **_task_fields(None),
            due_date=due,
            assignees=(accounts["A"], accounts["D"]),
        )

        payload = event.to_dict()

        assert payload["event_type"] == DeadlineApproachingEvent.event_type
        assert payload["workspace_id"] == str(WORKSPACE_ID)
        assert payload["due_date"] == due.isoformat()
        assert payload["assignees"] == [str(accounts["A"]), str(accounts["D"])]
        assert payload["actor_id"] is None

    def test_draft_payload_names_recipient_and_type(
        self, accounts: dict[str, UUID], context: FanOutContext
    ) -> None:
        event = TaskAssignedEvent(**_task_fields(accounts["C"]), assignee_id=accounts["A"])
        [draft] = plan_notifications(event, context)

        payload = draft.to_dict()

        assert payload["recipient_account_id"] == str(accounts["A"])
        assert payload["notification_type"] == NotificationType.TASK_ASSIGNED.value
        assert payload["title"] == draft.title
