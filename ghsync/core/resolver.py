"""Resolution of string team and user IDs into typed identities."""

import structlog
from pydantic import BaseModel

from ghsync.clients.exceptions import UnconvertibleIdError, UserResolutionError
from ghsync.core.directory import UserDirectory
from ghsync.security.validation import parse_base10_int

logger = structlog.get_logger(__name__)


class ResolvedIdentity(BaseModel):
    """Team and user of a membership, with the user's current username."""

    team_id: int
    user_id: int
    username: str


def parse_numeric_id(value: str) -> int:
    """Parse a base-10 ID, raising UnconvertibleIdError on failure."""
    try:
        return parse_base10_int(value)
    except ValueError as e:
        raise UnconvertibleIdError(value, e) from e


async def resolve_team_and_user(
    team_id: str,
    user_id: str,
    directory: UserDirectory,
) -> ResolvedIdentity:
    """Parse team and user IDs and look up the username.

    Args:
        team_id: Numeric team ID as a string
        user_id: Numeric user ID as a string
        directory: User directory used to resolve the username

    Returns:
        ResolvedIdentity

    Raises:
        UnconvertibleIdError: If either ID is not numeric
        UserResolutionError: If the username cannot be resolved
    """
    parsed_team_id = parse_numeric_id(team_id)
    parsed_user_id = parse_numeric_id(user_id)

    username = await directory.get_username(parsed_user_id)
    if username is None:
        logger.debug("Unable to obtain user from cache", user_id=parsed_user_id)
        raise UserResolutionError(parsed_user_id)

    return ResolvedIdentity(team_id=parsed_team_id, user_id=parsed_user_id, username=username)
