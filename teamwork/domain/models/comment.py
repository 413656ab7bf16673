"""Comment domain model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from uuid import UUID


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Comment:
    """An append-only note on a task.

    Attributes:
        id: Unique comment identifier.
        task_id: Parent task.
        author_account_id: Account that wrote the comment.
        content: Comment text.
        attachments: Opaque attachment references.
        created_at: Creation timestamp (UTC).
        updated_at: Last edit timestamp (UTC).
    """

    id: UUID
    task_id: UUID
    author_account_id: UUID
    content: str
    attachments: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    def with_content(self, content: str) -> Comment:
        return replace(self, content=content, updated_at=_utc_now())
