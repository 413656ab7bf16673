"""Adapters converting domain models and result DTOs to API responses."""

from teamwork.api.models.mail import (
    MailResponse,
    NotificationPageResponse,
    NotificationResponse,
)
from teamwork.api.models.task import (
    CommentResponse,
    IssueResponse,
    SubmissionResponse,
    TaskDeletionResponse,
    TaskResponse,
)
from teamwork.api.models.workspace import (
    InvitationDecisionResponse,
    InvitationResponse,
    MemberResponse,
    MembershipResponse,
    WorkspaceDetailsResponse,
    WorkspaceResponse,
    WorkspaceSummaryResponse,
)
from teamwork.application.dtos import (
    InvitationResult,
    MembershipResult,
    MemberView,
    NotificationPage,
    TaskDeletionResult,
    WorkspaceDetails,
    WorkspaceSummary,
)
from teamwork.domain.models.comment import Comment
from teamwork.domain.models.issue import Issue
from teamwork.domain.models.mail import InvitationMessage, Mail
from teamwork.domain.models.notification import Notification
from teamwork.domain.models.task import Task
from teamwork.domain.models.workspace import Membership, Workspace


class WorkspaceAdapter:
    """Converts workspaces and memberships to API responses."""

    @staticmethod
    def to_response(workspace: Workspace) -> WorkspaceResponse:
        return WorkspaceResponse(
            id=workspace.id,
            owner_account_id=workspace.owner_account_id,
            name=workspace.name,
            short_description=workspace.short_description,
            description=workspace.description,
            status=workspace.status,
            target_date=workspace.target_date,
            created_at=workspace.created_at,
            updated_at=workspace.updated_at,
        )

    @staticmethod
    def summary(summary: WorkspaceSummary) -> WorkspaceSummaryResponse:
        return WorkspaceSummaryResponse(
            workspace=WorkspaceAdapter.to_response(summary.workspace),
            role=summary.role,
        )

    @staticmethod
    def details(details: WorkspaceDetails) -> WorkspaceDetailsResponse:
        return WorkspaceDetailsResponse(
            workspace=WorkspaceAdapter.to_response(details.workspace),
            role=details.role,
            member_count=details.member_count,
            task_counts=details.task_counts,
        )

    @staticmethod
    def member(view: MemberView) -> MemberResponse:
        return MemberResponse(
            account_id=view.account_id,
            display_name=view.display_name,
            email=view.email,
            role=view.role,
            joined_at=view.joined_at,
        )

    @staticmethod
    def membership(
        membership: Membership, result: MembershipResult | None = None
    ) -> MembershipResponse:
        return MembershipResponse(
            workspace_id=membership.workspace_id,
            account_id=membership.account_id,
            role=membership.role,
            changed=result.changed if result else True,
            pruned_task_ids=list(result.pruned_task_ids) if result else [],
        )

    @staticmethod
    def invitation(invitation: InvitationMessage) -> InvitationResponse:
        assert invitation.workspace_id is not None
        return InvitationResponse(
            id=invitation.id,
            workspace_id=invitation.workspace_id,
            sender_account_id=invitation.sender_account_id,
            recipient_account_id=invitation.recipient_account_id,
            subject=invitation.subject,
            body=invitation.body,
            proposed_role=invitation.proposed_role,
            invitation_status=invitation.invitation_status,
            read=invitation.read,
            sent_at=invitation.sent_at,
            created_at=invitation.created_at,
        )

    @staticmethod
    def decision(result: InvitationResult) -> InvitationDecisionResponse:
        return InvitationDecisionResponse(
            invitation=WorkspaceAdapter.invitation(result.invitation),
            membership=(
                WorkspaceAdapter.membership(result.membership)
                if result.membership
                else None
            ),
        )


class TaskAdapter:
    """Converts tasks, comments and issues to API responses."""

    @staticmethod
    def to_response(task: Task) -> TaskResponse:
        submission = None
        if task.submission is not None:
            submission = SubmissionResponse(
                by_account_id=task.submission.by_account_id,
                kind=task.submission.kind,
                message=task.submission.message,
                attachments=list(task.submission.attachments),
            )
        return TaskResponse(
            id=task.id,
            workspace_id=task.workspace_id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            assigned_to=list(task.assigned_to),
            tags=list(task.tags),
            due_date=task.due_date,
            submission=submission,
            created_by=task.created_by,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

    @staticmethod
    def deletion(result: TaskDeletionResult) -> TaskDeletionResponse:
        return TaskDeletionResponse(
            task_id=result.task_id,
            issues_deleted=result.issues_deleted,
            comments_deleted=result.comments_deleted,
        )

    @staticmethod
    def comment(comment: Comment) -> CommentResponse:
        return CommentResponse(
            id=comment.id,
            task_id=comment.task_id,
            author_account_id=comment.author_account_id,
            content=comment.content,
            attachments=list(comment.attachments),
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )

    @staticmethod
    def issue(issue: Issue) -> IssueResponse:
        return IssueResponse(
            id=issue.id,
            task_id=issue.task_id,
            owner_account_id=issue.owner_account_id,
            title=issue.title,
            description=issue.description,
            status=issue.status,
            last_status_changed_by=issue.last_status_changed_by,
            created_at=issue.created_at,
            updated_at=issue.updated_at,
        )


class InboxAdapter:
    """Converts mail and notifications to API responses."""

    @staticmethod
    def mail(mail: Mail) -> MailResponse:
        return MailResponse(
            id=mail.id,
            sender_account_id=mail.sender_account_id,
            recipient_account_id=mail.recipient_account_id,
            subject=mail.subject,
            body=mail.body,
            mail_type=mail.mail_type,
            workspace_id=mail.workspace_id,
            read=mail.read,
            sent_at=mail.sent_at,
            error_message=mail.error_message,
            created_at=mail.created_at,
        )

    @staticmethod
    def notification(notification: Notification) -> NotificationResponse:
        return NotificationResponse(
            id=notification.id,
            recipient_account_id=notification.recipient_account_id,
            notification_type=notification.notification_type,
            title=notification.title,
            description=notification.description,
            references=notification.references.to_dict(),
            action_url=notification.action_url,
            created_by_account_id=notification.created_by_account_id,
            read=notification.read,
            created_at=notification.created_at,
        )

    @staticmethod
    def page(page: NotificationPage) -> NotificationPageResponse:
        return NotificationPageResponse(
            notifications=[InboxAdapter.notification(n) for n in page.notifications],
            total=page.total,
            unread_count=page.unread_count,
            limit=page.limit,
            offset=page.offset,
        )
