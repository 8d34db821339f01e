"""Local attribute state for a single tracked resource instance."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ResourceData(BaseModel):
    """Declared and observed attributes of one resource.

    The surrounding framework owns this record and serializes operations on it;
    reconcilers only mutate it through ``set``, ``set_id`` and ``clear_id``.
    """

    resource_type: str
    id: str = ""
    attributes: Dict[str, Any] = Field(default_factory=dict)
    new_resource: bool = False
    imported: bool = False

    def get(self, key: str, default: Any = None) -> Any:
        """Get an attribute value."""
        return self.attributes.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set an attribute value."""
        self.attributes[key] = value

    def set_id(self, resource_id: str) -> None:
        """Set the local identifier of the resource."""
        self.id = resource_id

    def clear_id(self) -> None:
        """Mark the resource as gone; the framework re-creates it on next apply."""
        self.id = ""

    def exists(self) -> bool:
        return self.id != ""

    def is_new_resource(self) -> bool:
        """Whether the resource is being created in the current operation."""
        return self.new_resource

    def is_newly_imported(self) -> bool:
        """Whether the resource was imported and has not been read since."""
        return self.imported

    def mark_imported(self) -> None:
        self.imported = True

    def mark_read(self) -> None:
        """Clear the lifecycle flags after a successful read."""
        self.imported = False
        self.new_resource = False

    def stored_etag(self) -> Optional[str]:
        """Entity tag to send with a conditional read, if any.

        New resources never send one so the first read always returns a body.
        """
        if self.new_resource:
            return None
        return self.get("etag") or None
