"""Team membership reconciliation between declared state and GitHub."""

from typing import Any, Dict, List

from ghsync.clients.exceptions import NotModifiedError, ResourceNotFoundError
from ghsync.config.models import MEMBERSHIP_ROLES
from ghsync.core.identifiers import build_two_part_id, parse_two_part_id
from ghsync.core.resolver import ResolvedIdentity, resolve_team_and_user
from ghsync.core.state import ResourceData
from ghsync.resources.base import BaseResource
from ghsync.security.validation import FieldValidator, parse_base10_int, validate_numeric_id, validate_value


class TeamMembershipResource(BaseResource):
    """Manages the membership of one user in one team.

    The local ID is ``<team_id>:<user_id>``, both numeric.
    """

    @property
    def resource_type(self) -> str:
        return "github_team_membership"

    @property
    def validators(self) -> Dict[str, FieldValidator]:
        return {
            "team_id": validate_numeric_id,
            "user_id": validate_numeric_id,
            "role": validate_value(MEMBERSHIP_ROLES),
        }

    @property
    def defaults(self) -> Dict[str, Any]:
        return {"role": "member"}

    async def _resolve(self, team_id: str, user_id: str) -> ResolvedIdentity:
        return await resolve_team_and_user(team_id, user_id, self.organization.user_directory)

    async def create_or_update(self, data: ResourceData) -> None:
        """Add the user to the team, or change the role of an existing membership.

        GitHub treats adding an existing member as a role update, so the same
        call serves both create and update.
        """
        team_id = data.get("team_id")
        user_id = data.get("user_id")
        role = data.get("role") or "member"

        self._logger.debug("Creating team membership", team_id=team_id, user_id=user_id, role=role)

        identity = await self._resolve(team_id, user_id)

        await self.client.add_or_update_team_membership(identity.team_id, identity.username, role)

        data.set_id(build_two_part_id(team_id, user_id))

        await self.read(data)

    async def create(self, data: ResourceData) -> None:
        await self.create_or_update(data)

    async def update(self, data: ResourceData) -> None:
        await self.create_or_update(data)

    async def read(self, data: ResourceData) -> None:
        """Refresh role, username and ETag from GitHub.

        A membership that no longer exists is dropped from state rather than
        reported as an error.
        """
        team_id, user_id = parse_two_part_id(data.id)
        identity = await self._resolve(team_id, user_id)

        self._logger.debug("Reading team membership", team_id=team_id, user_id=user_id)

        try:
            membership = await self.client.get_team_membership(
                identity.team_id,
                identity.username,
                etag=data.stored_etag(),
            )
        except ResourceNotFoundError:
            self._drop_from_state(data, reason="membership not found")
            return
        except NotModifiedError:
            self._logger.debug("Team membership not modified", resource_id=data.id)
            return

        data.set("etag", membership.etag)
        data.set("team_id", str(identity.team_id))
        data.set("user_id", str(identity.user_id))
        data.set("username", identity.username)
        data.set("role", membership.role)
        data.mark_read()

    async def delete(self, data: ResourceData) -> None:
        """Remove the user from the team; API errors propagate unchanged."""
        team_id, user_id = parse_two_part_id(data.id)
        identity = await self._resolve(team_id, user_id)

        self._logger.debug("Deleting team membership", team_id=team_id, user_id=user_id)
        await self.client.remove_team_membership(identity.team_id, identity.username)

    async def import_state(self, data: ResourceData) -> List[ResourceData]:
        """Canonicalize an import ID of team slug or ID and username or ID.

        ``my-team:octocat``, ``123:octocat`` and ``123:583231`` are all accepted;
        the tracked ID always becomes numeric on both sides.
        """
        self.organization.check_organization()

        team_part, user_part = parse_two_part_id(data.id)

        self._logger.debug("Reading team", team=team_part)
        try:
            team_id = parse_base10_int(team_part)
        except ValueError:
            team = await self.client.get_team_by_slug(self.organization.name, team_part)
            team_id = team.id

        self._logger.debug("Reading user", user=user_part)
        try:
            user_id = parse_base10_int(user_part)
        except ValueError:
            user = await self.client.get_user_by_login(user_part)
            user_id = user.id

        data.set_id(build_two_part_id(str(team_id), str(user_id)))

        return [data]
