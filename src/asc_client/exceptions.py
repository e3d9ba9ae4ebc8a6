"""
Exception classes for asc-client.
"""

from typing import Any, Dict, List, Optional


class AppStoreConnectError(Exception):
    """Base exception class for App Store Connect client errors."""

    pass


class ValidationError(AppStoreConnectError):
    """Raised when a precondition fails before any request is made."""

    pass


class TransportError(AppStoreConnectError):
    """Raised when the HTTP exchange itself fails (connection, timeout)."""

    pass


class APIError(AppStoreConnectError):
    """
    Raised when the API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status code of the reply
        body: Raw reply body as text
        errors: JSON:API error objects parsed from the body, if any
        response: The transport-level response descriptor
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int],
        body: str = "",
        errors: Optional[List[Dict[str, Any]]] = None,
        response: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.errors = errors or []
        self.response = response

    @property
    def detail(self) -> Optional[str]:
        """The ``detail`` of the first error object, when present."""
        if self.errors and isinstance(self.errors[0], dict):
            return self.errors[0].get("detail")
        return None


class AuthenticationError(APIError):
    """Raised when authentication fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(message, status_code, **kwargs)


class PermissionError(APIError):
    """Raised when insufficient permissions for operation."""

    pass


class NotFoundError(APIError):
    """Raised when requested resource is not found."""

    pass


class ConflictError(APIError):
    """Raised when the request conflicts with the resource's current state."""

    pass


class RateLimitError(APIError):
    """Raised when rate limits are exceeded."""

    pass


class ServerError(APIError):
    """Raised when server returns 5xx error."""

    pass


class DecodeError(AppStoreConnectError):
    """Raised when a successful reply cannot be decoded into the expected model."""

    def __init__(self, message: str, body: str = "", response: Any = None):
        super().__init__(message)
        self.body = body
        self.response = response


class UploadError(AppStoreConnectError):
    """Raised when an asset upload operation is rejected."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
