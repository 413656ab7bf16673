"""Mailbox and notification request/response models."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from teamwork.api.models.common import DateTimeWithZ
from teamwork.domain.models.mail import MailType
from teamwork.domain.models.notification import NotificationType


class SendMailRequest(BaseModel):
    recipient_email: EmailStr
    subject: str = Field(..., min_length=1, max_length=300)
    body: str = Field(..., min_length=1)


class UpdateMailRequest(BaseModel):
    subject: str | None = Field(default=None, min_length=1, max_length=300)
    body: str | None = Field(default=None, min_length=1)


class MarkReadRequest(BaseModel):
    read: bool = True


class MailResponse(BaseModel):
    id: UUID
    sender_account_id: UUID
    recipient_account_id: UUID
    subject: str
    body: str
    mail_type: MailType
    workspace_id: UUID | None = None
    read: bool
    sent_at: DateTimeWithZ | None = None
    error_message: str | None = None
    created_at: DateTimeWithZ


class NotificationResponse(BaseModel):
    id: UUID
    recipient_account_id: UUID
    notification_type: NotificationType
    title: str
    description: str
    references: dict[str, Any]
    action_url: str
    created_by_account_id: UUID | None = None
    read: bool
    created_at: DateTimeWithZ


class NotificationPageResponse(BaseModel):
    """One page of the caller's notifications, newest first."""

    notifications: list[NotificationResponse]
    total: int = Field(..., ge=0)
    unread_count: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)
    offset: int = Field(..., ge=0)


class UnreadCountResponse(BaseModel):
    unread_count: int = Field(..., ge=0)


class MarkAllReadResponse(BaseModel):
    marked: int = Field(..., ge=0)
