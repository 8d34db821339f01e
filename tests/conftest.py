"""Shared pytest fixtures for the reconciler tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ghsync.clients.github import GitHubTeam, GitHubUser, TeamMembership
from ghsync.provider import Organization

TEST_ORG = "my-org"
TEST_TEAM_ID = 1234
TEST_USER_ID = 583231
TEST_LOGIN = "octocat"


@pytest.fixture
def mock_client():
    """Create a mock GitHub client with every capability the reconcilers use."""
    client = MagicMock()
    client.get_user_by_id = AsyncMock(
        return_value=GitHubUser(id=TEST_USER_ID, login=TEST_LOGIN, etag='W/"user-etag"')
    )
    client.get_user_by_login = AsyncMock(
        return_value=GitHubUser(id=TEST_USER_ID, login=TEST_LOGIN, etag='W/"user-etag"')
    )
    client.get_team_by_slug = AsyncMock(
        return_value=GitHubTeam(id=TEST_TEAM_ID, slug="my-team", name="My Team")
    )
    client.add_or_update_team_membership = AsyncMock(
        return_value=TeamMembership(role="member", state="active")
    )
    client.get_team_membership = AsyncMock(
        return_value=TeamMembership(role="member", state="active", etag='W/"membership-etag"')
    )
    client.remove_team_membership = AsyncMock(return_value=None)
    client.health_check = AsyncMock(return_value=True)
    client.close = AsyncMock()
    return client


@pytest.fixture
def organization(mock_client):
    """Create an organization context around the mock client."""
    return Organization(client=mock_client, name=TEST_ORG)


@pytest.fixture
def individual_account(mock_client):
    """Create a context without an organization."""
    return Organization(client=mock_client, name=None)
