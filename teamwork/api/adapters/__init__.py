"""API adapters for transforming between domain and API models."""

from teamwork.api.adapters.responses import InboxAdapter, TaskAdapter, WorkspaceAdapter

__all__: list[str] = ["InboxAdapter", "TaskAdapter", "WorkspaceAdapter"]
