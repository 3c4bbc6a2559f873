"""
Cloudflare DNS SDK - High-level client with nice ergonomics.

This layer provides a clean, typed interface for zone, record and token
operations. Built on top of the core APIClient.
"""

import builtins
import urllib.request

from cfdns_cli.core.client import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    APIClient,
    NotFoundError,
    TokenInvalidError,
    decode_result,
)
from cfdns_cli.core.types import DNSRecord, TokenVerification, Zone


class CloudflareClient:
    """
    High-level Cloudflare DNS client with typed methods.

    Example:
        client = CloudflareClient(token)

        zone_id = client.zones.get_id("example.com")
        records = client.records.list(zone_id)
        record = client.records.create(
            zone_id,
            DNSRecord(type="A", name="www.example.com", content="1.2.3.4", ttl=600),
        )

    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        opener: urllib.request.OpenerDirector | None = None,
    ):
        """
        Initialize the Cloudflare client.

        Args:
            token: Cloudflare API token
            base_url: API base URL
            timeout: Request timeout in seconds
            opener: Transport override (mostly for tests)

        """
        self._client = APIClient(token, base_url=base_url, timeout=timeout, opener=opener)

        # Sub-clients for different domains
        self.zones = ZoneOperations(self._client)
        self.records = RecordOperations(self._client)
        self.tokens = TokenOperations(self._client)


# =============================================================================
# Zone Operations
# =============================================================================


class ZoneOperations:
    """Operations for looking up zones."""

    def __init__(self, client: APIClient):
        self._client = client

    def list(self) -> builtins.list[Zone]:
        """
        List all zones in the account.

        Returns:
            List of all Zones, in the order the API returned them

        """
        return self._client.do_paginated("/zones", parser=Zone.from_dict)

    def get_id(self, domain: str) -> str:
        """
        Resolve a domain name to its zone ID.

        The first zone returned for the name is taken as the match.

        Args:
            domain: Domain name (e.g. example.com)

        Returns:
            The zone ID

        Raises:
            NotFoundError: If no zone matches the domain

        """
        result = self._client.do("GET", "/zones", params={"name": domain})
        zones = decode_result([] if result is None else result, lambda raw: [Zone.from_dict(z) for z in raw])
        if not zones:
            raise NotFoundError(f"no zone found for domain: {domain}", details={"domain": domain})
        return zones[0].id


# =============================================================================
# DNS Record Operations
# =============================================================================


class RecordOperations:
    """Operations for managing DNS records within a zone."""

    def __init__(self, client: APIClient):
        self._client = client

    @staticmethod
    def _path(zone_id: str, record_id: str | None = None) -> str:
        path = f"/zones/{zone_id}/dns_records"
        if record_id:
            path = f"{path}/{record_id}"
        return path

    @staticmethod
    def _decode(result: object) -> DNSRecord:
        # A null result carries nothing to decode; the caller gets an empty record
        return decode_result({} if result is None else result, DNSRecord.from_dict)

    def list(self, zone_id: str) -> builtins.list[DNSRecord]:
        """
        List all DNS records in a zone.

        Args:
            zone_id: The zone ID

        Returns:
            List of all DNSRecords

        """
        return self._client.do_paginated(self._path(zone_id), parser=DNSRecord.from_dict)

    def create(self, zone_id: str, record: DNSRecord) -> DNSRecord:
        """
        Create a DNS record.

        Args:
            zone_id: The zone ID
            record: Record to create (its id is ignored)

        Returns:
            The created record, including the ID assigned by the server

        """
        result = self._client.do("POST", self._path(zone_id), record.to_dict())
        return self._decode(result)

    def edit(self, zone_id: str, record_id: str, record: DNSRecord) -> DNSRecord:
        """
        Overwrite an existing DNS record.

        Args:
            zone_id: The zone ID
            record_id: ID of the record to replace
            record: New record contents

        Returns:
            The updated record as stored by the server

        """
        result = self._client.do("PUT", self._path(zone_id, record_id), record.to_dict())
        return self._decode(result)

    def delete(self, zone_id: str, record_id: str) -> None:
        """Delete a DNS record."""
        self._client.do("DELETE", self._path(zone_id, record_id))


# =============================================================================
# Token Operations
# =============================================================================


class TokenOperations:
    """Operations on the API token itself."""

    def __init__(self, client: APIClient):
        self._client = client

    def verify(self) -> TokenVerification:
        """
        Verify that the API token is valid and active.

        Returns:
            TokenVerification for the active token

        Raises:
            TokenInvalidError: If the reported status is anything but "active"

        """
        result = self._client.do("GET", "/user/tokens/verify")
        verification = decode_result({} if result is None else result, TokenVerification.from_dict)
        if not verification.is_active:
            raise TokenInvalidError(
                f"token status: {verification.status}",
                status=verification.status,
                details={"id": verification.id} if verification.id else None,
            )
        return verification
