"""Per-workspace asyncio locks shared by the ledger and task lifecycle.

Membership changes and assignee validation for the same workspace take
the same lock, so a member cannot be removed between the moment a
task's assignees are checked and the moment the task is saved.
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from uuid import UUID


class WorkspaceLocks:
    """Registry of one asyncio.Lock per workspace id."""

    def __init__(self) -> None:
        self._locks: defaultdict[UUID, asyncio.Lock] = defaultdict(asyncio.Lock)

    def for_workspace(self, workspace_id: UUID) -> asyncio.Lock:
        return self._locks[workspace_id]

    def discard(self, workspace_id: UUID) -> None:
        """Forget the lock of a deleted workspace."""
        self._locks.pop(workspace_id, None)
