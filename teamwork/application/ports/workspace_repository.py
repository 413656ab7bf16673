"""Workspace repository port."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol
from uuid import UUID

from teamwork.domain.models.workspace import Workspace


class WorkspaceRepositoryProtocol(Protocol):
    """Protocol for workspace persistence."""

    @abstractmethod
    async def get(self, workspace_id: UUID) -> Workspace | None:
        """Get a workspace by id, or None if absent."""
        ...

    @abstractmethod
    async def get_many(self, workspace_ids: list[UUID]) -> list[Workspace]:
        """Get several workspaces, preserving the order of ``workspace_ids``."""
        ...

    @abstractmethod
    async def save(self, workspace: Workspace) -> None:
        """Insert or replace a workspace."""
        ...

    @abstractmethod
    async def delete(self, workspace_id: UUID) -> bool:
        """Delete a workspace. Returns True if a row was removed."""
        ...
