"""Tests for the import-only user resource."""

import pytest

from ghsync.clients.exceptions import (
    NotModifiedError,
    ResourceNotFoundError,
    UnsupportedOperationError,
)
from ghsync.clients.github import GitHubUser
from ghsync.core.state import ResourceData
from ghsync.resources.user import UserResource


@pytest.fixture
def resource(organization):
    return UserResource(organization)


def tracked_user(user_id="583231", etag=None):
    data = ResourceData(resource_type="github_user", id=user_id)
    if etag:
        data.set("etag", etag)
    return data


class TestUnsupportedOperations:

    @pytest.mark.asyncio
    async def test_create_always_fails(self, resource, mock_client):
        data = resource.new_data(username="octocat")

        with pytest.raises(UnsupportedOperationError) as exc_info:
            await resource.create(data)

        assert "must be imported" in str(exc_info.value)
        mock_client.get_user_by_login.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_fails(self, resource):
        with pytest.raises(UnsupportedOperationError):
            await resource.update(tracked_user())

    @pytest.mark.asyncio
    async def test_delete_makes_no_calls(self, resource, mock_client):
        data = tracked_user()

        await resource.delete(data)

        assert mock_client.method_calls == []
        assert data.id == "583231"


class TestImportAndRead:
    """Test importing by login and reading by ID afterwards."""

    @pytest.mark.asyncio
    async def test_import_is_passthrough(self, resource, mock_client):
        data = resource.import_data("octocat")

        result = await resource.import_state(data)

        assert result == [data]
        assert data.id == "octocat"
        assert data.is_newly_imported()
        assert mock_client.method_calls == []

    @pytest.mark.asyncio
    async def test_read_after_import_uses_login_then_id(self, resource, mock_client):
        (data,) = await resource.import_state(resource.import_data("octocat"))

        await resource.read(data)

        mock_client.get_user_by_login.assert_awaited_once_with("octocat", etag=None)
        mock_client.get_user_by_id.assert_not_called()
        assert data.id == "583231"
        assert data.get("username") == "octocat"
        assert data.get("etag") == 'W/"user-etag"'
        assert not data.is_newly_imported()

        await resource.read(data)

        mock_client.get_user_by_id.assert_awaited_once_with(583231, etag='W/"user-etag"')
        assert mock_client.get_user_by_login.await_count == 1

    @pytest.mark.asyncio
    async def test_numeric_login_after_import_is_looked_up_by_login(self, resource, mock_client):
        mock_client.get_user_by_login.return_value = GitHubUser(id=77, login="1234")
        (data,) = await resource.import_state(resource.import_data("1234"))

        await resource.read(data)

        mock_client.get_user_by_login.assert_awaited_once_with("1234", etag=None)
        assert data.id == "77"

    @pytest.mark.asyncio
    async def test_non_numeric_id_without_import_falls_back_to_login(self, resource, mock_client):
        await resource.read(tracked_user(user_id="octocat"))

        mock_client.get_user_by_login.assert_awaited_once()
        mock_client.get_user_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_rename_is_picked_up(self, resource, mock_client):
        mock_client.get_user_by_id.return_value = GitHubUser(id=583231, login="octocat-renamed")
        data = tracked_user()
        data.set("username", "octocat")

        await resource.read(data)

        assert data.get("username") == "octocat-renamed"
        assert data.id == "583231"

    @pytest.mark.asyncio
    async def test_read_not_found_clears_id(self, resource, mock_client):
        mock_client.get_user_by_id.side_effect = ResourceNotFoundError("Resource not found", status_code=404)
        data = tracked_user()

        await resource.read(data)

        assert not data.exists()

    @pytest.mark.asyncio
    async def test_read_not_modified(self, resource, mock_client):
        mock_client.get_user_by_id.side_effect = NotModifiedError()
        data = tracked_user(etag='W/"previous"')
        data.set("username", "octocat")

        await resource.read(data)

        assert data.id == "583231"
        assert data.get("etag") == 'W/"previous"'
        mock_client.get_user_by_id.assert_awaited_once_with(583231, etag='W/"previous"')
