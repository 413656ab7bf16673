"""Base payloads for TeamWork domain events.

Lifecycle operations return the events they emitted instead of firing
side effects themselves. The notification dispatcher consumes them.

Events carry everything recipient resolution needs (names, assignees,
owners) so that planning notifications is a pure function of the event
and a membership snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID

# Schema version for TeamWork event payloads
EVENT_SCHEMA_VERSION: str = "1.0.0"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def _serialize(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return [_serialize(item) for item in value]
    return value


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Common fields of every domain event.

    Attributes:
        actor_id: Account that triggered the event; None when system-triggered.
        occurred_at: When the event was emitted (UTC).
    """

    event_type: ClassVar[str] = "teamwork.event"

    actor_id: UUID | None
    occurred_at: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event for logging and transport."""
        payload: dict[str, Any] = {
            "event_type": self.event_type,
            "schema_version": EVENT_SCHEMA_VERSION,
        }
        for f in fields(self):
            payload[f.name] = _serialize(getattr(self, f.name))
        return payload


@dataclass(frozen=True, kw_only=True)
class WorkspaceEvent(DomainEvent):
    """An event scoped to a workspace."""

    workspace_id: UUID
    workspace_name: str


@dataclass(frozen=True, kw_only=True)
class TaskScopedEvent(WorkspaceEvent):
    """An event scoped to a task inside a workspace."""

    task_id: UUID
    task_title: str
