"""
Core HTTP client for the Cloudflare v4 API.

Handles authentication, request/response, envelope parsing, pagination, and
error handling.
"""

import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Callable
from typing import Any, TypeVar

from cfdns_cli.core.types import Envelope

# Configuration
DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_TIMEOUT = 60
PER_PAGE = 50

T = TypeVar("T")


class CLIError(Exception):
    """Base error class for CLI errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message, "type": type(self).__name__}
        if self.details:
            result["details"] = self.details
        return result


class APIError(CLIError):
    """Failure reported by Cloudflare in the response envelope."""

    def __init__(self, message: str, code: int = 0, details: dict | None = None):
        super().__init__(message, details)
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        if self.code:
            result["code"] = self.code
        return result


class ValidationError(CLIError):
    """Validation error for local input/data issues (not API errors)."""


class EncodingError(CLIError):
    """Request payload could not be serialized to JSON."""


class TransportError(CLIError):
    """Request could not be built or sent, or the response body was cut short."""


class DecodingError(CLIError):
    """Response envelope or result payload did not have the expected shape."""


class NotFoundError(CLIError):
    """A lookup matched nothing."""


class TokenInvalidError(CLIError):
    """The API token is not active."""

    def __init__(self, message: str, status: str = "", details: dict | None = None):
        super().__init__(message, details)
        self.status = status


def decode_result(payload: Any, parser: Callable[[Any], T]) -> T:
    """
    Decode a raw ``result`` payload with ``parser``.

    Any shape mismatch surfacing from the parser becomes a DecodingError.
    """
    try:
        return parser(payload)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodingError(f"Unmarshaling result: {e}") from e


def _error_from_envelope(envelope: Envelope) -> APIError:
    if envelope.errors:
        first = envelope.errors[0]
        return APIError(f"cloudflare error: {first.message} (code {first.code})", code=first.code)
    return APIError("cloudflare request failed")


class APIClient:
    """
    Low-level HTTP client for the Cloudflare v4 API.

    Handles:
    - Authentication via bearer token
    - HTTP methods (GET, POST, PUT, DELETE)
    - Envelope parsing and error surfacing
    - Page-number pagination for list endpoints

    The client keeps no state between calls besides the token and the
    reusable opener.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        opener: urllib.request.OpenerDirector | None = None,
    ):
        """
        Initialize the API client.

        Args:
            token: Cloudflare API token, used as-is in the Authorization header
            base_url: API base URL
            timeout: Request timeout in seconds
            opener: Transport used for every request (a fresh urllib opener by default)

        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.opener = opener or urllib.request.build_opener()

    def _build_url(self, path: str, params: dict[str, Any] | None = None) -> str:
        """Build full URL from path and optional query parameters."""
        url = f"{self.base_url}{path}"
        if params:
            # Filter out None values and URL-encode
            filtered_params = {k: v for k, v in params.items() if v is not None}
            if filtered_params:
                separator = "&" if "?" in path else "?"
                url = f"{url}{separator}{urllib.parse.urlencode(filtered_params)}"
        return url

    def _send(
        self,
        method: str,
        path: str,
        payload: Any = None,
        params: dict[str, Any] | None = None,
    ) -> bytes:
        """
        Send one request and return the raw response body.

        HTTP error statuses still carry an envelope, so their body is
        returned like any other.

        Raises:
            EncodingError: If the payload cannot be serialized
            TransportError: On request construction, network or read failures

        """
        body = None
        if payload is not None:
            try:
                body = json.dumps(payload).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise EncodingError(f"Marshaling request: {e}") from e

        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

        try:
            req = urllib.request.Request(
                self._build_url(path, params),
                data=body,
                headers=headers,
                method=method,
            )
        except ValueError as e:
            raise TransportError(f"Creating request: {e}") from e

        try:
            with self.opener.open(req, timeout=self.timeout) as response:
                return response.read()

        except urllib.error.HTTPError as e:
            try:
                return e.read()
            except (http.client.IncompleteRead, OSError) as read_error:
                raise TransportError(
                    f"Reading response: {read_error!r}", details={"status": e.code}
                ) from read_error

        except http.client.IncompleteRead as e:
            raise TransportError(f"Reading response: {e!r}") from e

        except urllib.error.URLError as e:
            raise TransportError(f"Connection error: {e.reason}") from e

        except TimeoutError as e:
            raise TransportError(f"Request timed out after {self.timeout} seconds") from e

        except (http.client.HTTPException, OSError) as e:
            raise TransportError(f"HTTP request: {e}") from e

    def _parse_envelope(self, raw: bytes) -> Envelope:
        """
        Parse a raw body into an Envelope and surface provider failures.

        Raises:
            DecodingError: If the body is not a JSON envelope
            APIError: If the envelope reports ``success: false``

        """
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodingError(f"Unmarshaling response: {e}") from e

        if not isinstance(data, dict):
            raise DecodingError(f"Unmarshaling response: expected an object, got {type(data).__name__}")

        try:
            envelope = Envelope.from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise DecodingError(f"Unmarshaling response: {e}") from e

        if not envelope.success:
            raise _error_from_envelope(envelope)
        return envelope

    # =========================================================================
    # Request primitives
    # =========================================================================

    def do(
        self,
        method: str,
        path: str,
        payload: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a single request to the API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path relative to the base URL (e.g., /zones)
            payload: Request body, serialized as JSON when not None
            params: Query parameters

        Returns:
            The envelope's raw ``result`` payload (object, list or None)

        Raises:
            EncodingError, TransportError, DecodingError, APIError

        """
        return self._parse_envelope(self._send(method, path, payload, params)).result

    def do_paginated(
        self,
        path: str,
        parser: Callable[[Any], T] | None = None,
    ) -> list[T]:
        """
        Fetch every page of a list endpoint.

        Pages are requested from 1 upwards with a fixed page size until the
        envelope carries no pagination info or the last reported page has
        been read. Items keep the order the server returned them in.

        Args:
            path: API path (without page parameters)
            parser: Optional function to decode each item

        Returns:
            List of all items across all pages (parsed if parser provided)

        """
        items: list[Any] = []
        page = 1

        while True:
            envelope = self._parse_envelope(self._send("GET", path, params={"page": page, "per_page": PER_PAGE}))

            # A null result is an empty page
            page_items = [] if envelope.result is None else envelope.result
            if not isinstance(page_items, list):
                raise DecodingError(
                    f"Unmarshaling result array: expected a list, got {type(page_items).__name__}",
                    details={"page": page},
                )
            items.extend(page_items)

            if envelope.result_info is None or page >= envelope.result_info.total_pages:
                break
            page += 1

        if parser is None:
            return items
        return decode_result(items, lambda raw: [parser(item) for item in raw])
