"""FastAPI dependencies for the TeamWork API."""

from teamwork.api.dependencies.identity import get_actor_id
from teamwork.api.dependencies.services import (
    get_comment_thread,
    get_fan_out,
    get_inbox,
    get_invitations,
    get_issue_lifecycle,
    get_ledger,
    get_mailbox,
    get_task_lifecycle,
)

__all__: list[str] = [
    "get_actor_id",
    "get_comment_thread",
    "get_fan_out",
    "get_inbox",
    "get_invitations",
    "get_issue_lifecycle",
    "get_ledger",
    "get_mailbox",
    "get_task_lifecycle",
]
