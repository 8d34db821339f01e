"""Organization context shared by every resource reconciler."""

from typing import Optional

import structlog

from ghsync.clients.exceptions import ConfigurationError
from ghsync.clients.github import GitHubClient
from ghsync.config.models import ProviderConfig
from ghsync.core.directory import UserDirectory

logger = structlog.get_logger(__name__)


class Organization:
    """Explicit provider context: organization login, API client and user directory."""

    def __init__(
        self,
        client: GitHubClient,
        name: Optional[str] = None,
        user_directory: Optional[UserDirectory] = None,
    ) -> None:
        """Initialize organization context.

        Args:
            client: GitHub API client
            name: Organization login, or None for an individual account
            user_directory: Shared user directory (created if not given)
        """
        self.client = client
        self.name = name
        self.user_directory = user_directory if user_directory is not None else UserDirectory(client)

    @classmethod
    def from_config(cls, config: ProviderConfig) -> "Organization":
        """Build the organization context from provider configuration."""
        client = GitHubClient(
            token=config.github.token,
            base_url=str(config.github.base_url),
            timeout_seconds=config.github.timeout_seconds,
            rate_limit_per_minute=config.github.rate_limit_per_minute,
        )
        logger.info(
            "Configured GitHub provider",
            organization=config.github.organization,
            base_url=client.base_url,
        )
        return cls(client=client, name=config.github.organization)

    def check_organization(self) -> None:
        """Ensure an organization is configured.

        Raises:
            ConfigurationError: If running against an individual account
        """
        if not self.name:
            raise ConfigurationError(
                "This resource can only be used in the context of an organization, "
                "no organization is configured"
            )

    async def close(self) -> None:
        logger.debug("Closing GitHub client", stats=self.client.get_stats())
        await self.client.close()
