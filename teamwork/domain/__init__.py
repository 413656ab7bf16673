"""
Domain layer - Pure business logic for TeamWork.

This layer contains:
- Domain models (Account, Workspace, Membership, Task, Issue, Comment,
  Mail, InvitationMessage, Notification)
- Domain events (task, comment, issue, workspace and deadline events)
- Domain services (notification fan-out rules)
- Primitives (atomic operation context)
- Domain exceptions

IMPORT RULES:
- CAN import from: stdlib, structlog
- CANNOT import from: application, infrastructure, api
"""

from teamwork.domain.exceptions import TeamworkError

__all__: list[str] = ["TeamworkError"]
