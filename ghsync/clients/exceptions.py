"""Exception classes for API clients and resource reconciliation."""

from typing import Optional


class APIError(Exception):
    """Base exception for API-related errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code if available
            response_text: Response body text if available
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_text = response_text

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        if self.response_text:
            # Truncate response text for readability
            response_preview = self.response_text[:200]
            if len(self.response_text) > 200:
                response_preview += "..."
            parts.append(f"Response: {response_preview}")
        return " | ".join(parts)


class NotModifiedError(APIError):
    """Raised when a conditional request reports no change (304)."""

    def __init__(self, message: str = "Not modified", etag: Optional[str] = None) -> None:
        super().__init__(message, status_code=304)
        self.etag = etag


class AuthenticationError(APIError):
    """Raised when authentication fails (401)."""
    pass


class AuthorizationError(APIError):
    """Raised when authorization fails (403)."""
    pass


class RateLimitError(APIError):
    """Raised when rate limit is exceeded (429, or 403 with exhausted quota)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> None:
        """Initialize rate limit error.

        Args:
            message: Error message
            status_code: HTTP status code
            response_text: Response body text
            retry_after: Seconds to wait before retrying
        """
        super().__init__(message, status_code, response_text)
        self.retry_after = retry_after


class ClientError(APIError):
    """Raised for 4xx client errors."""
    pass


class ServerError(APIError):
    """Raised for 5xx server errors."""
    pass


class NetworkError(APIError):
    """Raised for network-related errors."""
    pass


class ResourceNotFoundError(ClientError):
    """Raised when a requested resource is not found (404)."""
    pass


class ConfigurationError(Exception):
    """Raised when provider configuration is invalid."""
    pass


class ReconcileError(Exception):
    """Base exception for resource reconciliation errors."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
    ) -> None:
        """Initialize reconcile error.

        Args:
            message: Error message
            resource_type: Type of resource being reconciled
            resource_id: Local identifier of the resource
        """
        super().__init__(message)
        self.message = message
        self.resource_type = resource_type
        self.resource_id = resource_id


class MalformedIdentifierError(ReconcileError):
    """Raised when a composite identifier cannot be split into its parts."""
    pass


class UnconvertibleIdError(ReconcileError):
    """Raised when an identifier expected to be numeric is not."""

    def __init__(self, original_id: str, cause: Exception) -> None:
        super().__init__(
            f"Unexpected ID format ({original_id!r}), expected numerical ID. {cause}",
            resource_id=original_id,
        )
        self.original_id = original_id


class UserResolutionError(ReconcileError):
    """Raised when a user id cannot be resolved to a username."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"Unable to get GitHub user {user_id}", resource_id=str(user_id))
        self.user_id = user_id


class UnsupportedOperationError(ReconcileError):
    """Raised for lifecycle operations a resource type does not support."""
    pass
