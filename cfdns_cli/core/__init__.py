"""
Core layer - Raw types and HTTP client.

This layer provides:
- Typed dataclasses matching the Cloudflare API payloads
- Low-level HTTP client with auth, envelope parsing and pagination
"""

from cfdns_cli.core.client import (
    APIClient,
    APIError,
    CLIError,
    DecodingError,
    EncodingError,
    NotFoundError,
    TokenInvalidError,
    TransportError,
    ValidationError,
)
from cfdns_cli.core.types import (
    DNSRecord,
    Envelope,
    ResponseError,
    ResultInfo,
    TokenVerification,
    Zone,
)

__all__ = [
    "APIClient",
    "APIError",
    "CLIError",
    "DNSRecord",
    "DecodingError",
    "EncodingError",
    "Envelope",
    "NotFoundError",
    "ResponseError",
    "ResultInfo",
    "TokenInvalidError",
    "TokenVerification",
    "TransportError",
    "ValidationError",
    "Zone",
]
