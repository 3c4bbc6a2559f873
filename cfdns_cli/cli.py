"""
cfdns CLI - Command-line interface for Cloudflare DNS.

This layer provides the user-facing commands, using the SDK layer for all
operations. It handles:
- Argument parsing and required-flag checks
- Loading the API token from .env files
- TTY detection for human vs machine output
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from cfdns_cli.core.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, CLIError, ValidationError
from cfdns_cli.core.types import DNSRecord
from cfdns_cli.sdk import CloudflareClient

logger = logging.getLogger(__name__)

DEFAULT_TTL = 600
TOKEN_ENV_VAR = "CLOUDFLARE_API_TOKEN"
BASE_URL_ENV_VAR = "CLOUDFLARE_API_BASE_URL"

# =============================================================================
# Output Helpers
# =============================================================================


def is_tty() -> bool:
    """Check if stdout is a TTY (human) or pipe (machine)."""
    return sys.stdout.isatty()


def json_output(data: Any, pretty: bool = False) -> None:
    """Print JSON output."""
    indent = 2 if pretty or is_tty() else None
    print(json.dumps(data, indent=indent, default=str))


def error_output(error: CLIError) -> None:
    """Print error and exit."""
    json_output(error.to_dict())
    sys.exit(1)


def success_output(data: Any) -> None:
    """Print success output."""
    json_output(data)


def table_output(headers: list[str], rows: list[list[str]]) -> None:
    """Print a column-aligned table for human output."""
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(str(v))) for w, v in zip(widths, row)]

    print("   ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip())
    print("   ".join(("─" * len(h)).ljust(w) for h, w in zip(headers, widths)).rstrip())
    for row in rows:
        print("   ".join(str(v).ljust(w) for v, w in zip(row, widths)).rstrip())


def record_to_output(record: DNSRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "type": record.type,
        "name": record.name,
        "content": record.content,
        "ttl": record.ttl,
        "proxied": record.proxied,
    }


# =============================================================================
# Configuration
# =============================================================================


def configure_logging(verbose: bool = False) -> None:
    """Configure logging to stderr so stdout stays parseable."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def load_environment(home: Path | None = None) -> Path | None:
    """
    Load environment variables from a .env file.

    ``~/.dotfiles/.env`` is preferred; ``.env`` in the working directory is
    the fallback. Variables already set in the environment are kept.

    Returns:
        The file that was loaded, or None if neither exists

    """
    dotfile_path = (home or Path.home()) / ".dotfiles" / ".env"
    env_path = dotfile_path if dotfile_path.is_file() else Path(".env")
    if not env_path.is_file():
        logger.debug("No .env file found")
        return None

    load_dotenv(env_path)
    logger.debug("Environment loaded from %s", env_path)
    return env_path


def create_client(timeout: int = DEFAULT_TIMEOUT) -> CloudflareClient:
    """
    Build the client from the environment.

    Raises:
        ValidationError: If CLOUDFLARE_API_TOKEN is not set

    """
    token = os.environ.get(TOKEN_ENV_VAR, "")
    if not token:
        raise ValidationError(f"{TOKEN_ENV_VAR} must be set in ~/.dotfiles/.env or .env")
    base_url = os.environ.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL
    return CloudflareClient(token, base_url=base_url, timeout=timeout)


def require(args: argparse.Namespace, *names: str) -> None:
    """Check that every named flag was given a non-empty value."""
    if any(not getattr(args, name, None) for name in names):
        flags = [f"--{name.replace('_', '-')}" for name in names]
        joined = ", ".join(flags[:-1]) + f", and {flags[-1]}" if len(flags) > 2 else " and ".join(flags)
        raise ValidationError(f"{joined} {'is' if len(flags) == 1 else 'are'} required")


def record_from_args(args: argparse.Namespace) -> DNSRecord:
    return DNSRecord(
        type=args.type,
        name=args.name,
        content=args.content,
        ttl=args.ttl,
        proxied=args.proxied,
    )


# =============================================================================
# CLI Commands
# =============================================================================


def cmd_ping(client: CloudflareClient, _args: argparse.Namespace) -> None:
    """Verify the API token and connectivity."""
    try:
        verification = client.tokens.verify()
        if is_tty():
            print("✓ Token is valid")
        else:
            success_output({"id": verification.id, "status": verification.status})
    except CLIError as e:
        error_output(e)


def cmd_zone_list(client: CloudflareClient, _args: argparse.Namespace) -> None:
    """List all zones in the account."""
    try:
        zones = client.zones.list()

        if is_tty():
            if not zones:
                print("No zones found")
                return

            table_output(
                ["ID", "NAME", "STATUS"],
                [[z.id, z.name, z.status] for z in zones],
            )
        else:
            success_output({"data": [z.to_dict() for z in zones], "total_count": len(zones)})
    except CLIError as e:
        error_output(e)


def cmd_dns_list(client: CloudflareClient, args: argparse.Namespace) -> None:
    """List all DNS records for a zone."""
    try:
        require(args, "zone")
        zone_id = client.zones.get_id(args.zone)
        records = client.records.list(zone_id)

        if is_tty():
            if not records:
                print(f"No records found for {args.zone}")
                return

            table_output(
                ["ID", "TYPE", "NAME", "CONTENT", "TTL", "PROXIED"],
                [
                    [
                        r.id,
                        r.type,
                        r.name,
                        r.content,
                        "auto" if r.is_automatic_ttl else str(r.ttl),
                        str(r.proxied).lower(),
                    ]
                    for r in records
                ],
            )
        else:
            success_output({"data": [record_to_output(r) for r in records], "total_count": len(records)})
    except CLIError as e:
        error_output(e)


def cmd_dns_create(client: CloudflareClient, args: argparse.Namespace) -> None:
    """Create a DNS record."""
    try:
        require(args, "zone", "name", "type", "content")
        zone_id = client.zones.get_id(args.zone)
        result = client.records.create(zone_id, record_from_args(args))

        if is_tty():
            print(f"✓ Created {result.type} record {result.name} → {result.content} (ID: {result.id})")
        else:
            success_output(record_to_output(result))
    except CLIError as e:
        error_output(e)


def cmd_dns_edit(client: CloudflareClient, args: argparse.Namespace) -> None:
    """Overwrite a DNS record by ID."""
    try:
        require(args, "zone", "id", "name", "type", "content")
        zone_id = client.zones.get_id(args.zone)
        result = client.records.edit(zone_id, args.id, record_from_args(args))

        if is_tty():
            print(f"✓ Updated {result.type} record {result.name} → {result.content} (ID: {result.id})")
        else:
            success_output(record_to_output(result))
    except CLIError as e:
        error_output(e)


def cmd_dns_delete(client: CloudflareClient, args: argparse.Namespace) -> None:
    """Delete a DNS record by ID."""
    try:
        require(args, "zone", "id")
        zone_id = client.zones.get_id(args.zone)
        client.records.delete(zone_id, args.id)

        if is_tty():
            print(f"✓ Deleted record {args.id}")
        else:
            success_output({"success": True, "message": f"Record {args.id} deleted"})
    except CLIError as e:
        error_output(e)


# =============================================================================
# Main CLI
# =============================================================================


def _add_record_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", default="", help="Full record name (e.g. test.example.com)")
    parser.add_argument("--type", default="", help="Record type (A, AAAA, CNAME, TXT, MX, etc.)")
    parser.add_argument("--content", default="", help="Record content (e.g. IP address or target)")
    parser.add_argument("--ttl", type=int, default=DEFAULT_TTL, help="Time to live in seconds (1 = automatic)")
    parser.add_argument("--proxied", action="store_true", help="Enable Cloudflare proxy")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cfdns",
        description="cfdns - Manage Cloudflare DNS zones and records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Output Modes:
  TTY (human):  Aligned tables and short confirmations
  Pipe:         Full JSON

Credentials:
  {TOKEN_ENV_VAR} is read from the environment, ~/.dotfiles/.env or ./.env

Examples:
  cfdns ping
  cfdns zone list
  cfdns dns list --zone example.com
  cfdns dns create --zone example.com --name test.example.com --type A --content 1.2.3.4
  cfdns dns create --zone example.com --name www.example.com --type CNAME --content target.com --proxied
""",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging on stderr")
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ========== Ping ==========
    ping = subparsers.add_parser("ping", help="Verify API token and connectivity")
    ping.set_defaults(func=cmd_ping)

    # ========== Zones ==========
    zone = subparsers.add_parser("zone", help="Manage Cloudflare DNS zones")
    zone.set_defaults(func=lambda _c, _a: zone.print_help())
    zone_sub = zone.add_subparsers(dest="subcommand")

    z_list = zone_sub.add_parser("list", help="List all zones in the account")
    z_list.set_defaults(func=cmd_zone_list)

    # ========== DNS Records ==========
    dns = subparsers.add_parser("dns", help="Manage Cloudflare DNS records")
    dns.set_defaults(func=lambda _c, _a: dns.print_help())
    dns_sub = dns.add_subparsers(dest="subcommand")

    d_list = dns_sub.add_parser("list", help="List all DNS records for a zone")
    d_list.add_argument("--zone", default="", help="Domain name (e.g. example.com)")
    d_list.set_defaults(func=cmd_dns_list)

    d_create = dns_sub.add_parser("create", help="Create a DNS record")
    d_create.add_argument("--zone", default="", help="Domain name (e.g. example.com)")
    _add_record_flags(d_create)
    d_create.set_defaults(func=cmd_dns_create)

    d_edit = dns_sub.add_parser("edit", help="Overwrite a DNS record by ID")
    d_edit.add_argument("--zone", default="", help="Domain name (e.g. example.com)")
    d_edit.add_argument("--id", default="", help="Record ID (from 'dns list')")
    _add_record_flags(d_edit)
    d_edit.set_defaults(func=cmd_dns_edit)

    d_delete = dns_sub.add_parser("delete", help="Delete a DNS record by ID")
    d_delete.add_argument("--zone", default="", help="Domain name (e.g. example.com)")
    d_delete.add_argument("--id", default="", help="Record ID (from 'dns list')")
    d_delete.set_defaults(func=cmd_dns_delete)

    return parser


def main() -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    configure_logging(args.verbose)
    load_environment()

    try:
        client = create_client(timeout=args.timeout)
    except CLIError as e:
        error_output(e)

    logger.debug("Running command %s %s", args.command, getattr(args, "subcommand", None) or "")
    # All subparsers have default funcs that print help
    args.func(client, args)


if __name__ == "__main__":
    main()
