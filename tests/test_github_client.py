"""Tests for the GitHub HTTP client using a mock transport."""

import json

import httpx
import pytest
from pydantic import SecretStr

from ghsync.clients.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ClientError,
    NetworkError,
    NotModifiedError,
    RateLimitError,
    ResourceNotFoundError,
    ServerError,
)
from ghsync.clients.github import GitHubClient

VALID_TOKEN = SecretStr("ghp_" + "a" * 36)


def make_client(handler):
    return GitHubClient(token=VALID_TOKEN, transport=httpx.MockTransport(handler))


class TestClientConstruction:

    def test_rejects_bad_token(self):
        with pytest.raises(ValueError, match="Invalid GitHub token format"):
            GitHubClient(token=SecretStr("not-a-token"))

    def test_rejects_plain_http(self):
        with pytest.raises(ValueError, match="Only HTTPS"):
            GitHubClient(token=VALID_TOKEN, base_url="http://github.example.com/api/v3")

    def test_strips_trailing_slash(self):
        client = GitHubClient(token=VALID_TOKEN, base_url="https://github.example.com/api/v3/")
        assert client.base_url == "https://github.example.com/api/v3"


class TestRequests:
    """Test request paths, headers and response decoding."""

    @pytest.mark.asyncio
    async def test_get_user_by_id(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("Authorization")
            seen["if_none_match"] = request.headers.get("If-None-Match")
            return httpx.Response(200, json={"id": 583231, "login": "octocat"}, headers={"ETag": 'W/"u1"'})

        async with make_client(handler) as client:
            user = await client.get_user_by_id(583231)

        assert seen["path"] == "/user/583231"
        assert seen["auth"] == f"token {VALID_TOKEN.get_secret_value()}"
        assert seen["if_none_match"] is None
        assert user.login == "octocat"
        assert user.etag == 'W/"u1"'

    @pytest.mark.asyncio
    async def test_conditional_request_sends_etag(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["if_none_match"] = request.headers.get("If-None-Match")
            return httpx.Response(304, headers={"ETag": 'W/"u1"'})

        async with make_client(handler) as client:
            with pytest.raises(NotModifiedError) as exc_info:
                await client.get_user_by_login("octocat", etag='W/"u1"')

            assert client.get_stats()["error_count"] == 0

        assert seen["if_none_match"] == 'W/"u1"'
        assert exc_info.value.etag == 'W/"u1"'

    @pytest.mark.asyncio
    async def test_get_team_by_slug(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/orgs/my-org/teams/my-team"
            return httpx.Response(200, json={"id": 1234, "slug": "my-team", "name": "My Team"})

        async with make_client(handler) as client:
            team = await client.get_team_by_slug("my-org", "my-team")

        assert team.id == 1234

    @pytest.mark.asyncio
    async def test_add_or_update_team_membership(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"role": "maintainer", "state": "pending"})

        async with make_client(handler) as client:
            membership = await client.add_or_update_team_membership(1234, "octocat", "maintainer")

        assert seen == {
            "method": "PUT",
            "path": "/teams/1234/memberships/octocat",
            "body": {"role": "maintainer"},
        }
        assert membership.state == "pending"

    @pytest.mark.asyncio
    async def test_remove_team_membership(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            return httpx.Response(204)

        async with make_client(handler) as client:
            await client.remove_team_membership(1234, "octocat")

        assert seen == {"method": "DELETE", "path": "/teams/1234/memberships/octocat"}

    @pytest.mark.asyncio
    async def test_health_check(self):
        async with make_client(lambda request: httpx.Response(200, json={})) as client:
            assert await client.health_check() is True

        async with make_client(lambda request: httpx.Response(500)) as client:
            assert await client.health_check() is False


class TestErrorMapping:
    """Test translation of status codes into exceptions."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code,headers,expected", [
        (401, {}, AuthenticationError),
        (403, {}, AuthorizationError),
        (403, {"X-RateLimit-Remaining": "0"}, RateLimitError),
        (429, {"Retry-After": "30"}, RateLimitError),
        (404, {}, ResourceNotFoundError),
        (422, {}, ClientError),
        (502, {}, ServerError),
    ])
    async def test_status_mapping(self, status_code, headers, expected):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, headers=headers, json={"message": "nope"})

        async with make_client(handler) as client:
            with pytest.raises(expected) as exc_info:
                await client.get_team_membership(1234, "octocat")

            assert client.get_stats()["error_count"] == 1

        assert exc_info.value.status_code == status_code

    @pytest.mark.asyncio
    async def test_retry_after_is_parsed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, headers={"Retry-After": "30"})

        async with make_client(handler) as client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.get_user_by_id(1)

        assert exc_info.value.retry_after == 30

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(NetworkError):
                await client.get_user_by_id(1)
