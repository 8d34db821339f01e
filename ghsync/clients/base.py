"""Base client with error handling and rate limiting."""

import time
from abc import ABC, abstractmethod
from typing import Any, Dict, NoReturn, Optional

import httpx
import structlog
from asyncio_throttle import Throttler

from ghsync.clients.exceptions import (
    APIError,
    AuthenticationError,
    AuthorizationError,
    ClientError,
    NetworkError,
    NotModifiedError,
    RateLimitError,
    ResourceNotFoundError,
    ServerError,
)

logger = structlog.get_logger(__name__)


class BaseAPIClient(ABC):
    """Abstract base class for API clients with common functionality.

    Failed requests are surfaced immediately as typed exceptions; retrying is
    left to the caller.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: int = 30,
        rate_limit_per_minute: int = 80,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the base API client.

        Args:
            base_url: Base URL for the API
            timeout_seconds: Request timeout in seconds
            rate_limit_per_minute: Maximum requests per minute
            user_agent: Custom user agent string
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.rate_limit_per_minute = rate_limit_per_minute

        headers = {
            "User-Agent": user_agent or self._get_default_user_agent(),
            "Accept": "application/json",
        }

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_seconds),
            headers=headers,
            follow_redirects=True,
            transport=transport,
        )

        self._throttler = Throttler(rate_limit=rate_limit_per_minute, period=60)

        # Request tracking for logging and debugging
        self._request_count = 0
        self._error_count = 0
        self._last_request_time: Optional[float] = None

        self._logger = logger.bind(
            client_type=self.__class__.__name__,
            base_url=self.base_url,
        )

    async def __aenter__(self) -> "BaseAPIClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()

    @abstractmethod
    def _get_auth_headers(self) -> Dict[str, str]:
        """Get authentication headers for requests.

        Returns:
            Dictionary of authentication headers
        """
        pass

    def _get_default_user_agent(self) -> str:
        """Get default user agent string."""
        from ghsync.version import __version__
        return f"github-team-sync/{__version__}"

    async def _make_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        etag: Optional[str] = None,
    ) -> httpx.Response:
        """Make an HTTP request with rate limiting and error handling.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, etc.)
            path: API endpoint path (relative to base URL)
            params: Query parameters
            json_data: JSON request body
            headers: Additional headers
            etag: Entity tag from a previous response, sent as If-None-Match

        Returns:
            HTTP response object

        Raises:
            NotModifiedError: If a conditional request matched the entity tag
            APIError: If the request fails
        """
        async with self._throttler:
            url = f"{self.base_url}/{path.lstrip('/')}"
            request_headers = self._get_auth_headers()
            if headers:
                request_headers.update(headers)
            if etag:
                request_headers["If-None-Match"] = etag

            self._request_count += 1
            self._last_request_time = time.time()

            request_id = f"req_{self._request_count}"

            self._logger.debug(
                "Making API request",
                request_id=request_id,
                method=method,
                url=url,
                params=params,
                conditional=etag is not None,
            )

            try:
                response = await self._client.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json_data,
                    headers=request_headers,
                )
            except httpx.RequestError as e:
                self._error_count += 1
                self._logger.error(
                    "Network error during API request",
                    request_id=request_id,
                    error=str(e),
                )
                raise NetworkError(f"Network error: {e}") from e

            self._logger.debug(
                "API request completed",
                request_id=request_id,
                status_code=response.status_code,
                response_size=len(response.content),
            )

            if response.is_success:
                return response

            self._raise_for_status(response)

    def _raise_for_status(self, response: httpx.Response) -> NoReturn:
        """Translate a non-success response into the matching exception."""
        status_code = response.status_code

        if status_code == 304:
            raise NotModifiedError(etag=response.headers.get("ETag"))

        self._error_count += 1

        if status_code == 401:
            raise AuthenticationError(
                "Authentication failed",
                status_code=status_code,
                response_text=response.text,
            )
        elif status_code == 429 or (
            status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
        ):
            raise RateLimitError(
                "Rate limit exceeded",
                status_code=status_code,
                response_text=response.text,
                retry_after=self._get_retry_after(response),
            )
        elif status_code == 403:
            raise AuthorizationError(
                "Authorization failed",
                status_code=status_code,
                response_text=response.text,
            )
        elif status_code == 404:
            raise ResourceNotFoundError(
                f"Resource not found: {response.request.url.path}",
                status_code=status_code,
                response_text=response.text,
            )
        elif 400 <= status_code < 500:
            raise ClientError(
                f"Client error: {status_code}",
                status_code=status_code,
                response_text=response.text,
            )
        elif 500 <= status_code < 600:
            raise ServerError(
                f"Server error: {status_code}",
                status_code=status_code,
                response_text=response.text,
            )
        else:
            raise APIError(
                f"Unexpected status code: {status_code}",
                status_code=status_code,
                response_text=response.text,
            )

    def _get_retry_after(self, response: httpx.Response) -> Optional[int]:
        """Extract retry-after value from response headers.

        Args:
            response: HTTP response

        Returns:
            Retry-after value in seconds, or None if not present
        """
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return int(retry_after)
            except ValueError:
                pass
        return None

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        etag: Optional[str] = None,
    ) -> httpx.Response:
        """Make a GET request.

        Args:
            path: API endpoint path
            params: Query parameters
            headers: Additional headers
            etag: Optional entity tag for a conditional request

        Returns:
            HTTP response
        """
        return await self._make_request("GET", path, params=params, headers=headers, etag=etag)

    async def put(
        self,
        path: str,
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make a PUT request.

        Args:
            path: API endpoint path
            json_data: JSON request body
            params: Query parameters
            headers: Additional headers

        Returns:
            HTTP response
        """
        return await self._make_request(
            "PUT", path, params=params, json_data=json_data, headers=headers
        )

    async def delete(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Make a DELETE request.

        Args:
            path: API endpoint path
            params: Query parameters
            headers: Additional headers

        Returns:
            HTTP response
        """
        return await self._make_request("DELETE", path, params=params, headers=headers)

    def _parse_json(self, response: httpx.Response) -> Dict[str, Any]:
        """Decode a JSON response body.

        Raises:
            APIError: If response is not valid JSON
        """
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                f"Failed to parse JSON response: {e}",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

    def get_stats(self) -> Dict[str, Any]:
        """Get client statistics for monitoring.

        Returns:
            Dictionary with client statistics
        """
        return {
            "request_count": self._request_count,
            "error_count": self._error_count,
            "error_rate": self._error_count / max(self._request_count, 1),
            "last_request_time": self._last_request_time,
            "rate_limit_per_minute": self.rate_limit_per_minute,
            "base_url": self.base_url,
        }

    @abstractmethod
    async def health_check(self) -> bool:
        """Perform a basic health check against the API.

        Returns:
            True if the API is healthy, False otherwise
        """
        pass
