"""GitHub REST API client for user, team and team membership lookups."""

from typing import Any, Dict, Optional

import httpx
import structlog
from pydantic import BaseModel, SecretStr

from ghsync.clients.base import BaseAPIClient
from ghsync.clients.exceptions import APIError
from ghsync.security.validation import validate_api_token, validate_url

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"


class GitHubUser(BaseModel):
    """GitHub user as returned by the users endpoints."""

    id: int
    login: str
    etag: Optional[str] = None


class GitHubTeam(BaseModel):
    """GitHub team as returned by the teams endpoints."""

    id: int
    slug: str
    name: Optional[str] = None


class TeamMembership(BaseModel):
    """Membership of a user in a team."""

    role: str
    state: Optional[str] = None
    etag: Optional[str] = None


class GitHubClient(BaseAPIClient):
    """GitHub API client exposing the capabilities used by the reconcilers."""

    def __init__(
        self,
        token: SecretStr,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: int = 30,
        rate_limit_per_minute: int = 80,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            token: GitHub personal access or app token
            base_url: API base URL (GitHub Enterprise installs use ``https://host/api/v3``)
            timeout_seconds: Request timeout in seconds
            rate_limit_per_minute: Maximum requests per minute
            transport: Optional httpx transport (used by tests)
        """
        if not validate_api_token(token.get_secret_value()):
            raise ValueError("Invalid GitHub token format")

        if not validate_url(base_url, allowed_schemes=["https"]):
            raise ValueError(f"Invalid API URL: {base_url}. Only HTTPS URLs are allowed.")

        self._token = token

        super().__init__(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            rate_limit_per_minute=rate_limit_per_minute,
            transport=transport,
        )

    def _get_auth_headers(self) -> Dict[str, str]:
        """Get GitHub authentication headers."""
        return {
            "Authorization": f"token {self._token.get_secret_value()}",
            "Accept": "application/vnd.github.v3+json",
        }

    async def health_check(self) -> bool:
        """Check if GitHub API is accessible.

        Returns:
            True if API is healthy, False otherwise
        """
        try:
            await self.get("/rate_limit")
            return True
        except APIError as e:
            self._logger.error("GitHub health check failed", error=str(e))
            return False

    # User lookups

    async def get_user_by_id(self, user_id: int, etag: Optional[str] = None) -> GitHubUser:
        """Get a user by numeric ID.

        Args:
            user_id: GitHub user ID
            etag: Optional entity tag from a previous read

        Returns:
            GitHubUser

        Raises:
            ResourceNotFoundError: If user not found
            NotModifiedError: If the user is unchanged since ``etag``
            APIError: If API call fails
        """
        response = await self.get(f"/user/{user_id}", etag=etag)
        return self._build_user(response)

    async def get_user_by_login(self, login: str, etag: Optional[str] = None) -> GitHubUser:
        """Get a user by login.

        Args:
            login: GitHub username
            etag: Optional entity tag from a previous read

        Returns:
            GitHubUser

        Raises:
            ResourceNotFoundError: If user not found
            NotModifiedError: If the user is unchanged since ``etag``
            APIError: If API call fails
        """
        response = await self.get(f"/users/{login}", etag=etag)
        return self._build_user(response)

    def _build_user(self, response: httpx.Response) -> GitHubUser:
        data = self._parse_json(response)
        user = GitHubUser(
            id=data["id"],
            login=data["login"],
            etag=response.headers.get("ETag"),
        )
        self._logger.debug("Retrieved user", user_id=user.id, login=user.login)
        return user

    # Teams

    async def get_team_by_slug(self, org: str, slug: str) -> GitHubTeam:
        """Get a team by its slug within an organization.

        Args:
            org: Organization login
            slug: Team slug

        Returns:
            GitHubTeam

        Raises:
            ResourceNotFoundError: If team not found
            APIError: If API call fails
        """
        response = await self.get(f"/orgs/{org}/teams/{slug}")
        data = self._parse_json(response)
        team = GitHubTeam(id=data["id"], slug=data["slug"], name=data.get("name"))
        self._logger.debug("Retrieved team", org=org, slug=slug, team_id=team.id)
        return team

    # Team memberships

    async def add_or_update_team_membership(
        self,
        team_id: int,
        username: str,
        role: str,
    ) -> TeamMembership:
        """Add a user to a team, or change the role of an existing member.

        Args:
            team_id: Numeric team ID
            username: GitHub username
            role: ``member`` or ``maintainer``

        Returns:
            Resulting TeamMembership
        """
        response = await self.put(
            f"/teams/{team_id}/memberships/{username}",
            json_data={"role": role},
        )
        membership = self._build_membership(response)
        self._logger.info(
            "Set team membership",
            team_id=team_id,
            username=username,
            role=membership.role,
            state=membership.state,
        )
        return membership

    async def get_team_membership(
        self,
        team_id: int,
        username: str,
        etag: Optional[str] = None,
    ) -> TeamMembership:
        """Get a user's membership in a team.

        Args:
            team_id: Numeric team ID
            username: GitHub username
            etag: Optional entity tag from a previous read

        Returns:
            TeamMembership

        Raises:
            ResourceNotFoundError: If the user is not a member
            NotModifiedError: If the membership is unchanged since ``etag``
            APIError: If API call fails
        """
        response = await self.get(f"/teams/{team_id}/memberships/{username}", etag=etag)
        return self._build_membership(response)

    async def remove_team_membership(self, team_id: int, username: str) -> None:
        """Remove a user from a team.

        Args:
            team_id: Numeric team ID
            username: GitHub username
        """
        await self.delete(f"/teams/{team_id}/memberships/{username}")
        self._logger.info("Removed team membership", team_id=team_id, username=username)

    def _build_membership(self, response: httpx.Response) -> TeamMembership:
        data: Dict[str, Any] = self._parse_json(response)
        return TeamMembership(
            role=data["role"],
            state=data.get("state"),
            etag=response.headers.get("ETag"),
        )
