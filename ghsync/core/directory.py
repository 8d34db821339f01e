"""Process-wide cache of GitHub user ID to username lookups."""

from typing import Dict, Optional, Protocol

import structlog

from ghsync.clients.exceptions import APIError

logger = structlog.get_logger(__name__)


class UserLookup(Protocol):
    """Client capability needed to resolve a user by numeric ID."""

    async def get_user_by_id(self, user_id: int, etag: Optional[str] = None):
        ...


class UserDirectory:
    """Lazily populated mapping of user ID to username.

    Entries live for the lifetime of the process and are never evicted or
    invalidated. Lookups are not synchronized: two coroutines missing on the
    same ID may both call the API, and both store the same login.
    """

    def __init__(self, client: UserLookup) -> None:
        """Initialize the directory.

        Args:
            client: Client used to fetch users missing from the cache
        """
        self._client = client
        self._usernames: Dict[int, str] = {}
        self._logger = logger.bind(component="UserDirectory")

    def __len__(self) -> int:
        return len(self._usernames)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._usernames

    async def get_username(self, user_id: int) -> Optional[str]:
        """Resolve a user ID to a username.

        Args:
            user_id: Numeric GitHub user ID

        Returns:
            Username, or None if the user could not be fetched. Failures are
            not cached so a later call retries the lookup.
        """
        username = self._usernames.get(user_id)
        if username is not None:
            return username

        try:
            user = await self._client.get_user_by_id(user_id)
        except APIError as e:
            self._logger.debug("Unable to fetch user", user_id=user_id, error=str(e))
            return None

        self._usernames[user_id] = user.login
        self._logger.debug("Cached username", user_id=user_id, username=user.login)
        return user.login

    def clear(self) -> None:
        """Drop every cached entry."""
        self._usernames.clear()
