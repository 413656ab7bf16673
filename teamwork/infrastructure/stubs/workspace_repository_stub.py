"""In-memory stub for WorkspaceRepositoryProtocol."""

from __future__ import annotations

from uuid import UUID

from teamwork.domain.models.workspace import Workspace


class WorkspaceRepositoryStub:
    """In-memory implementation of WorkspaceRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize empty stub."""
        self._workspaces: dict[UUID, Workspace] = {}

    async def get(self, workspace_id: UUID) -> Workspace | None:
        return self._workspaces.get(workspace_id)

    async def get_many(self, workspace_ids: list[UUID]) -> list[Workspace]:
        return [self._workspaces[w] for w in workspace_ids if w in self._workspaces]

    async def save(self, workspace: Workspace) -> None:
        self._workspaces[workspace.id] = workspace

    async def delete(self, workspace_id: UUID) -> bool:
        return self._workspaces.pop(workspace_id, None) is not None

    # Test helper methods

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._workspaces.clear()

    def count(self) -> int:
        return len(self._workspaces)
