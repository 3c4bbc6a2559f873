"""
Core types for the Cloudflare v4 API.

These dataclasses mirror the JSON shapes returned by the API: the response
envelope wrapped around every call, and the zone/record/token payloads found
in its ``result`` field.
"""

from dataclasses import dataclass, field
from typing import Any, TypeVar

V = TypeVar("V")


def typed_field(data: dict[str, Any], key: str, kind: type[V], default: V) -> V:
    """
    Read ``data[key]`` as ``kind``, falling back to ``default`` when absent or null.

    Raises:
        TypeError: If the value is present with another JSON type

    """
    value = data.get(key)
    if value is None:
        return default
    # bool is a subclass of int, but true/false is never a number on the wire
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"{key}: expected {kind.__name__}, got {type(value).__name__}")
    return value


# =============================================================================
# Response Envelope
# =============================================================================


@dataclass
class ResponseError:
    """A single entry of the envelope's ``errors`` list."""

    code: int
    message: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResponseError":
        """Create from API response dict."""
        return cls(
            code=typed_field(data, "code", int, 0),
            message=typed_field(data, "message", str, ""),
        )


@dataclass
class ResultInfo:
    """Pagination info attached to list responses."""

    page: int = 1
    per_page: int = 0
    total_pages: int = 0
    count: int = 0
    total_count: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultInfo":
        """Create from API response dict."""
        return cls(
            page=typed_field(data, "page", int, 1),
            per_page=typed_field(data, "per_page", int, 0),
            total_pages=typed_field(data, "total_pages", int, 0),
            count=typed_field(data, "count", int, 0),
            total_count=typed_field(data, "total_count", int, 0),
        )


@dataclass
class Envelope:
    """
    The wrapper around every Cloudflare API response.

    ``result`` is kept as the raw decoded JSON (object, array or None); the
    caller decides which concrete type it decodes into.
    """

    success: bool
    errors: list[ResponseError] = field(default_factory=list)
    result_info: ResultInfo | None = None
    result: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Envelope":
        """Create from the decoded response body."""
        info = data.get("result_info")
        return cls(
            success=typed_field(data, "success", bool, False),
            errors=[ResponseError.from_dict(e) for e in data.get("errors") or []],
            result_info=ResultInfo.from_dict(info) if info else None,
            result=data.get("result"),
        )


# =============================================================================
# Zone Types
# =============================================================================


@dataclass
class Zone:
    """A DNS zone (domain) in the account."""

    id: str
    name: str
    status: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Zone":
        """Create from API response dict."""
        return cls(
            id=typed_field(data, "id", str, ""),
            name=typed_field(data, "name", str, ""),
            status=typed_field(data, "status", str, ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "status": self.status}


# =============================================================================
# DNS Record Types
# =============================================================================


AUTOMATIC_TTL = 1


@dataclass
class DNSRecord:
    """
    A DNS record within a zone.

    ``id`` is assigned by the server and stays empty until the record has
    been created. A ``ttl`` of 1 means "automatic".
    """

    type: str
    name: str
    content: str
    ttl: int = AUTOMATIC_TTL
    proxied: bool = False
    id: str = ""

    @property
    def is_automatic_ttl(self) -> bool:
        return self.ttl == AUTOMATIC_TTL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DNSRecord":
        """Create from API response dict."""
        return cls(
            id=typed_field(data, "id", str, ""),
            type=typed_field(data, "type", str, ""),
            name=typed_field(data, "name", str, ""),
            content=typed_field(data, "content", str, ""),
            ttl=typed_field(data, "ttl", int, AUTOMATIC_TTL),
            proxied=typed_field(data, "proxied", bool, False),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request (id omitted until assigned)."""
        result: dict[str, Any] = {}
        if self.id:
            result["id"] = self.id
        result.update(
            {
                "type": self.type,
                "name": self.name,
                "content": self.content,
                "ttl": self.ttl,
                "proxied": self.proxied,
            }
        )
        return result


# =============================================================================
# Token Types
# =============================================================================


@dataclass
class TokenVerification:
    """Result of the token verification endpoint."""

    id: str
    status: str

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenVerification":
        """Create from API response dict."""
        return cls(
            id=typed_field(data, "id", str, ""),
            status=typed_field(data, "status", str, ""),
        )
