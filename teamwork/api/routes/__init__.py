"""
API routes for TeamWork.

Routes are organized by domain concern.

Available routers:
- health, metrics: Operational endpoints
- workspaces: Workspace lifecycle, members, invitations and mail sending
- tasks: Task lifecycle, comment threads and issue creation
- comments, issues: Edits addressed by comment or issue id
- invitations: Accept/decline by the recipient
- mail, notifications: The caller's mailbox and notification inbox
"""

from teamwork.api.routes.comments import router as comments_router
from teamwork.api.routes.health import router as health_router
from teamwork.api.routes.invitations import router as invitations_router
from teamwork.api.routes.issues import router as issues_router
from teamwork.api.routes.mail import router as mail_router
from teamwork.api.routes.metrics import router as metrics_router
from teamwork.api.routes.notifications import router as notifications_router
from teamwork.api.routes.tasks import router as tasks_router
from teamwork.api.routes.tasks import workspace_router as workspace_tasks_router
from teamwork.api.routes.workspaces import router as workspaces_router

__all__: list[str] = [
    "comments_router",
    "health_router",
    "invitations_router",
    "issues_router",
    "mail_router",
    "metrics_router",
    "notifications_router",
    "tasks_router",
    "workspace_tasks_router",
    "workspaces_router",
]
