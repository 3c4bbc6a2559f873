"""
cfdns - Three-layer command-line client for Cloudflare DNS.

Layers:
- core: Raw types and HTTP client (envelope, pagination, errors)
- sdk: High-level CloudflareClient with zone/record/token operations
- cli: Command-line interface
"""

from cfdns_cli.sdk import CloudflareClient

__version__ = "0.1.0"
__all__ = ["CloudflareClient"]
