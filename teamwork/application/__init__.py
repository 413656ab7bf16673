"""
Application layer - Use cases and orchestration for TeamWork.

This layer contains:
- Application services (membership, tasks, issues, comments,
  invitations, mail, notifications, deadline sweep)
- Port definitions (abstract interfaces for persistence and delivery)
- Result DTOs carrying emitted domain events

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, api
"""

from teamwork.application.ports import (
    AccountRepositoryProtocol,
    MailDispatcherProtocol,
    NotificationRepositoryProtocol,
)

__all__: list[str] = [
    "AccountRepositoryProtocol",
    "MailDispatcherProtocol",
    "NotificationRepositoryProtocol",
]
