"""Fixtures for HTTP route tests.

The team is assembled through the API itself: the owner creates the
workspace and the admin and member join by accepting invitations.
"""

from dataclasses import dataclass
from uuid import UUID

import pytest

from teamwork.domain.models.account import Account


def _headers(account: Account) -> dict[str, str]:
    return {"X-Account-ID": str(account.id)}


@dataclass
class Team:
    workspace_id: UUID
    owner: Account
    admin: Account
    member: Account
    outsider: Account

    def headers(self, account: Account) -> dict[str, str]:
        return _headers(account)


@pytest.fixture
def team(client, account_factory) -> Team:
    owner = account_factory("olive")
    admin = account_factory("adam")
    member = account_factory("mia")
    outsider = account_factory("otto")

    response = client.post("/v1/workspaces", json={"name": "Apollo"}, headers=_headers(owner))
    assert response.status_code == 201
    workspace_id = UUID(response.json()["id"])

    for account, role in ((admin, "admin"), (member, "member")):
        invited = client.post(
            f"/v1/workspaces/{workspace_id}/invitations",
            json={"email": account.email, "role": role},
            headers=_headers(owner),
        )
        assert invited.status_code == 201
        accepted = client.post(
            f"/v1/invitations/{invited.json()['id']}/accept", headers=_headers(account)
        )
        assert accepted.status_code == 200

    return Team(
        workspace_id=workspace_id,
        owner=owner,
        admin=admin,
        member=member,
        outsider=outsider,
    )
