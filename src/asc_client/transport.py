"""
HTTP transport for the App Store Connect API.

The transport performs exactly one HTTP exchange per call: it builds the URL,
encodes query options and JSON bodies, attaches the bearer token, maps error
statuses to exceptions and decodes successful replies into typed models.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Type, TypeVar

import requests
from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError
from ratelimit import limits, sleep_and_retry
from requests.structures import CaseInsensitiveDict

from .auth import TokenProvider
from .config import ClientConfig
from .envelope import to_json_value
from .exceptions import (
    APIError,
    AuthenticationError,
    ConflictError,
    DecodeError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    TransportError,
)
from .models import ErrorResponse, UploadOperation
from .query import QueryOptions, encode_query

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

STATUS_ERRORS: Dict[int, Type[APIError]] = {
    401: AuthenticationError,
    403: PermissionError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}


@dataclass(frozen=True)
class Rate:
    """Hourly request quota reported in the ``X-Rate-Limit`` header."""

    limit: int
    remaining: int

    @classmethod
    def parse(cls, header: Optional[str]) -> Optional["Rate"]:
        """Parse ``user-hour-lim:3500;user-hour-rem:3499;``."""
        if not header:
            return None
        values = {}
        for part in header.split(";"):
            key, _, value = part.partition(":")
            if value.strip().isdigit():
                values[key.strip()] = int(value)
        if "user-hour-lim" not in values or "user-hour-rem" not in values:
            return None
        return cls(limit=values["user-hour-lim"], remaining=values["user-hour-rem"])


@dataclass(frozen=True)
class Response:
    """Transport-level description of one HTTP exchange."""

    method: str
    url: str
    status_code: int
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    content: bytes = b""

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def rate(self) -> Optional[Rate]:
        return Rate.parse(self.headers.get("X-Rate-Limit"))

    def json(self) -> Any:
        return json.loads(self.content)


class Transport:
    """
    Shared HTTP transport used by every service of a client.

    Args:
        config: Client configuration (base URL, credentials, timeout)
        token_provider: Source of bearer tokens, defaults to a TokenProvider
    """

    def __init__(
        self, config: ClientConfig, token_provider: Optional[TokenProvider] = None
    ):
        self.config = config
        self.token_provider = token_provider or TokenProvider(config)

        self._send = self._send_raw
        if config.rate_limit_calls:
            self._send = sleep_and_retry(
                limits(calls=config.rate_limit_calls, period=config.rate_limit_period)(
                    self._send_raw
                )
            )

    def url_for(self, path: str, query: Optional[QueryOptions] = None) -> str:
        """Resolve a resource path against the base URL and append the query."""
        if path.startswith(("http://", "https://")):
            url = path
        else:
            url = f"{self.config.base_url.rstrip('/')}/{path.lstrip('/')}"

        query_string = encode_query(query)
        if query_string:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{query_string}"
        return url

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token_provider.token()}",
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self.config.user_agent,
        }

    def _send_raw(self, method: str, url: str, body: Any = None) -> Response:
        headers = self._get_headers()

        logger.info(f"{method} {url}")

        try:
            raw = requests.request(
                method=method,
                url=url,
                headers=headers,
                json=body,
                timeout=self.config.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"{method} {url} timed out after {self.config.timeout}s: {e}")
            raise TransportError(f"Request failed: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"Request failed: {e}") from e

        response = Response(
            method=method,
            url=url,
            status_code=raw.status_code,
            headers=CaseInsensitiveDict(raw.headers or {}),
            content=raw.content or b"",
        )
        logger.info(f"{method} {url} -> {response.status_code}")

        if not response.ok:
            raise self._error_for(response)

        return response

    def _error_for(self, response: Response) -> APIError:
        body = response.text
        try:
            items = ErrorResponse.model_validate_json(response.content or b"{}").errors
        except (ModelValidationError, ValueError):
            # Not a JSON:API error document; only the raw body is kept
            items = []
        errors = [item.model_dump(by_alias=True, exclude_none=True) for item in items]

        detail = ""
        if items:
            detail = items[0].detail or items[0].title or ""
        message = f"API Error {response.status_code}: {detail or body}"
        logger.error(f"{response.method} {response.url}: {message}")

        if response.status_code >= 500:
            error_class = ServerError
        else:
            error_class = STATUS_ERRORS.get(response.status_code, APIError)
        return error_class(
            message,
            status_code=response.status_code,
            body=body,
            errors=errors,
            response=response,
        )

    def _decode(self, response: Response, result_type: Optional[Type[T]]) -> Optional[T]:
        if result_type is None or not response.content.strip():
            return None
        try:
            return result_type.model_validate_json(response.content)
        except (ModelValidationError, ValueError) as e:
            logger.error(
                f"{response.method} {response.url}: cannot decode "
                f"{result_type.__name__}: {e}"
            )
            raise DecodeError(
                f"Failed to decode {result_type.__name__}: {e}",
                body=response.text,
                response=response,
            ) from e

    def request(
        self,
        method: str,
        path: str,
        query: Optional[QueryOptions] = None,
        body: Any = None,
        result_type: Optional[Type[T]] = None,
    ) -> Tuple[Optional[T], Response]:
        """Perform one exchange and decode the reply into ``result_type``."""
        url = self.url_for(path, query)
        payload = to_json_value(body) if body is not None else None
        response = self._send(method, url, payload)
        return self._decode(response, result_type), response

    def get(
        self,
        path: str,
        query: Optional[QueryOptions] = None,
        result_type: Optional[Type[T]] = None,
    ) -> Tuple[Optional[T], Response]:
        return self.request("GET", path, query=query, result_type=result_type)

    def post(
        self, path: str, body: Any, result_type: Optional[Type[T]] = None
    ) -> Tuple[Optional[T], Response]:
        return self.request("POST", path, body=body, result_type=result_type)

    def patch(
        self, path: str, body: Any, result_type: Optional[Type[T]] = None
    ) -> Tuple[Optional[T], Response]:
        return self.request("PATCH", path, body=body, result_type=result_type)

    def delete(self, path: str, body: Any = None) -> Response:
        _, response = self.request("DELETE", path, body=body)
        return response

    def upload(self, operation: UploadOperation, data: bytes) -> Response:
        """
        Send one part of an asset to a signed upload URL.

        The URL carries its own authorization, so no bearer token is sent.
        Any status other than 200 is returned to the caller to judge.
        """
        offset = operation.offset or 0
        length = operation.length if operation.length is not None else len(data) - offset
        chunk = data[offset : offset + length]

        headers = {"Content-Type": "image/png"}
        for header in operation.request_headers or []:
            if header.name:
                headers[header.name] = header.value or ""
        headers["Content-Length"] = str(len(chunk))

        method = operation.method or "PUT"
        logger.info(f"{method} upload of {len(chunk)} bytes at offset {offset}")

        try:
            raw = requests.request(
                method=method,
                url=operation.url,
                headers=headers,
                data=chunk,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Upload to {operation.url} failed: {e}")
            raise TransportError(f"Upload failed: {e}") from e

        return Response(
            method=method,
            url=operation.url or "",
            status_code=raw.status_code,
            headers=CaseInsensitiveDict(raw.headers or {}),
            content=raw.content or b"",
        )


class Service:
    """Base class for resource services sharing one transport."""

    def __init__(self, transport: Transport):
        self._transport = transport
