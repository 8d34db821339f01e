"""Base resource reconciler with the common lifecycle contract."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

import structlog

from ghsync.core.state import ResourceData
from ghsync.provider import Organization
from ghsync.security.validation import FieldValidator

logger = structlog.get_logger(__name__)


class BaseResource(ABC):
    """Abstract base class for GitHub resource reconcilers.

    Each reconciler translates declared attributes in a ResourceData into
    remote API calls and writes the observed remote state back into it.
    """

    def __init__(self, organization: Organization) -> None:
        """Initialize base resource.

        Args:
            organization: Organization context holding the client and user directory
        """
        self.organization = organization
        self.client = organization.client

        self._logger = logger.bind(
            resource_class=self.__class__.__name__,
            resource_type=self.resource_type,
        )

    @property
    @abstractmethod
    def resource_type(self) -> str:
        """Get the resource type name (e.g., 'github_user')."""
        pass

    @property
    def validators(self) -> Dict[str, FieldValidator]:
        """Validators for declared attributes, keyed by attribute name."""
        return {}

    @property
    def defaults(self) -> Dict[str, Any]:
        """Default values for optional declared attributes."""
        return {}

    def new_data(self, **attributes: Any) -> ResourceData:
        """Build a ResourceData for a resource about to be created."""
        values = dict(self.defaults)
        values.update(attributes)
        return ResourceData(resource_type=self.resource_type, attributes=values, new_resource=True)

    def validate(self, data: ResourceData) -> List[ValueError]:
        """Run attribute validators and return every error found."""
        errors: List[ValueError] = []
        for key, validator in self.validators.items():
            _, field_errors = validator(data.get(key), key)
            errors.extend(field_errors)
        return errors

    @abstractmethod
    async def create(self, data: ResourceData) -> None:
        """Create the remote resource described by ``data``."""
        pass

    @abstractmethod
    async def read(self, data: ResourceData) -> None:
        """Refresh ``data`` from the remote resource."""
        pass

    async def update(self, data: ResourceData) -> None:
        """Apply changed declared attributes to the remote resource."""
        await self.create(data)

    @abstractmethod
    async def delete(self, data: ResourceData) -> None:
        """Delete the remote resource."""
        pass

    @abstractmethod
    async def import_state(self, data: ResourceData) -> List[ResourceData]:
        """Turn an externally supplied ID into resource state to track."""
        pass

    def import_data(self, resource_id: str) -> ResourceData:
        """Build a ResourceData holding an ID supplied for import."""
        return ResourceData(resource_type=self.resource_type, id=resource_id)

    def _drop_from_state(self, data: ResourceData, reason: str) -> None:
        """Clear the ID of a resource that disappeared remotely."""
        self._logger.warning(
            f"Removing {self.resource_type} from state because it no longer exists in GitHub",
            resource_id=data.id,
            reason=reason,
        )
        data.clear_id()

