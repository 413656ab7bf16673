"""
Pytest configuration and shared fixtures for TeamWork tests.

Testing Standards:
- Async tests run in asyncio auto mode (configured in pyproject.toml)
- Every test builds its own ServiceContainer over fresh in-memory stubs
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from dataclasses import dataclass
from uuid import UUID, uuid4

import pytest
from prometheus_client import CollectorRegistry

from teamwork.bootstrap.services import ServiceContainer, build_container
from teamwork.config import TEST_TEAMWORK_CONFIG
from teamwork.domain.models.account import Account
from teamwork.domain.models.workspace import Workspace, WorkspaceRole
from teamwork.infrastructure.monitoring import MetricsCollector


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from teamwork import __version__

    return __version__


def _make_account(name: str) -> Account:
    """Build an account with a predictable email."""
    return Account(id=uuid4(), email=f"{name}@example.com", display_name=name.title())


@dataclass
class Crew:
    """A workspace with one account per role plus an outsider."""

    container: ServiceContainer
    workspace: Workspace
    owner: Account
    admin: Account
    member: Account
    outsider: Account

    @property
    def workspace_id(self) -> UUID:
        return self.workspace.id


@pytest.fixture
def metrics() -> MetricsCollector:
    """Provide a metrics collector on an isolated registry."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def container(metrics: MetricsCollector) -> ServiceContainer:
    """Provide a fully wired container over empty stubs."""
    return build_container(TEST_TEAMWORK_CONFIG, metrics=metrics)


@pytest.fixture
async def crew(container: ServiceContainer) -> Crew:
    """Provide workspace "Apollo" with owner, admin, member and an outsider."""
    owner = container.accounts.add(_make_account("olive"))
    admin = container.accounts.add(_make_account("adam"))
    member = container.accounts.add(_make_account("mia"))
    outsider = container.accounts.add(_make_account("otto"))

    created = await container.ledger.create_workspace(owner.id, name="Apollo")
    workspace = created.workspace
    await container.ledger.add_member(workspace.id, admin.id, WorkspaceRole.ADMIN)
    await container.ledger.add_member(workspace.id, member.id, WorkspaceRole.MEMBER)

    return Crew(
        container=container,
        workspace=workspace,
        owner=owner,
        admin=admin,
        member=member,
        outsider=outsider,
    )


@pytest.fixture
def account_factory(container: ServiceContainer):
    """Provide a factory that registers a new account by name."""

    def _register(name: str) -> Account:
        return container.accounts.add(_make_account(name))

    return _register


@pytest.fixture
def client(container: ServiceContainer):
    """Provide a TestClient over the app, wired to the test container.

    The client is not entered as a context manager, so the lifespan
    (and with it the deadline worker) does not run.
    """
    from fastapi.testclient import TestClient

    from teamwork.api.main import app
    from teamwork.bootstrap.services import reset_container, set_container

    set_container(container)
    yield TestClient(app)
    reset_container()
