"""GitHub user records, which can only be imported and refreshed."""

from typing import List

from ghsync.clients.exceptions import NotModifiedError, ResourceNotFoundError, UnsupportedOperationError
from ghsync.clients.github import GitHubUser
from ghsync.core.state import ResourceData
from ghsync.resources.base import BaseResource
from ghsync.security.validation import parse_base10_int


class UserResource(BaseResource):
    """Tracks an existing GitHub user.

    Users cannot be created or deleted through this resource. An import
    stores the login as the ID; the first read replaces it with the numeric
    user ID, which is stable across renames.
    """

    @property
    def resource_type(self) -> str:
        return "github_user"

    async def create(self, data: ResourceData) -> None:
        raise UnsupportedOperationError(
            "The github_user resource must be imported, it cannot be created.",
            resource_type=self.resource_type,
            resource_id=data.id or None,
        )

    async def update(self, data: ResourceData) -> None:
        raise UnsupportedOperationError(
            "The github_user resource has no updatable attributes.",
            resource_type=self.resource_type,
            resource_id=data.id or None,
        )

    async def read(self, data: ResourceData) -> None:
        etag = data.stored_etag()

        try:
            user = await self._fetch(data, etag)
        except ResourceNotFoundError:
            self._drop_from_state(data, reason="user not found")
            return
        except NotModifiedError:
            self._logger.debug("User not modified", resource_id=data.id)
            return

        data.set_id(str(user.id))
        data.set("etag", user.etag)
        data.set("username", user.login)
        data.mark_read()

    async def _fetch(self, data: ResourceData, etag: str | None) -> GitHubUser:
        # Right after import the ID is still the login the user was imported by
        if not data.is_newly_imported():
            try:
                user_id = parse_base10_int(data.id)
            except ValueError:
                pass
            else:
                self._logger.debug("Reading user", user_id=user_id)
                return await self.client.get_user_by_id(user_id, etag=etag)

        self._logger.debug("Reading user", login=data.id)
        return await self.client.get_user_by_login(data.id, etag=etag)

    async def delete(self, data: ResourceData) -> None:
        # Nothing to remove remotely; dropping the resource only affects local state
        self._logger.debug("Forgetting user", resource_id=data.id)

    async def import_state(self, data: ResourceData) -> List[ResourceData]:
        data.mark_imported()
        return [data]
