"""
asc-client

A typed Python client binding for the Apple App Store Connect API.
"""

from .client import AppStoreConnectClient, create_client
from .config import ClientConfig
from .envelope import build_request_body, local_id
from .exceptions import (
    APIError,
    AppStoreConnectError,
    AuthenticationError,
    ConflictError,
    DecodeError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    TransportError,
    UploadError,
    ValidationError,
)
from .query import encode_query
from .transport import Rate, Response, Transport

__version__ = "0.1.0"

__all__ = [
    "AppStoreConnectClient",
    "ClientConfig",
    "Transport",
    "Response",
    "Rate",
    "create_client",
    "build_request_body",
    "local_id",
    "encode_query",
    "AppStoreConnectError",
    "APIError",
    "AuthenticationError",
    "ConflictError",
    "DecodeError",
    "NotFoundError",
    "PermissionError",
    "RateLimitError",
    "ServerError",
    "TransportError",
    "UploadError",
    "ValidationError",
]
