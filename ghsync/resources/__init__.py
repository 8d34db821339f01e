"""Resource reconcilers for GitHub teams and users."""

from ghsync.resources.base import BaseResource
from ghsync.resources.team_membership import TeamMembershipResource
from ghsync.resources.user import UserResource

__all__ = [
    "BaseResource",
    "TeamMembershipResource",
    "UserResource",
]
