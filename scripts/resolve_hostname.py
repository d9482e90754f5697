#!/usr/bin/env python3
"""Resolve hostnames against the configured tenant directory.

Runs the same resolver the API uses, configured from HELPDESK_* variables,
and prints what each hostname resolves to. Handy when onboarding a custom
domain or debugging "wrong organization" reports.

Usage:
    ./scripts/resolve_hostname.py acme.helpdesk.com support.acme.com
    ./scripts/resolve_hostname.py acme.localhost --backend rest
    ./scripts/resolve_hostname.py --check-subdomain acme
"""

import argparse
import asyncio
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path / "src" / "api"))

from infrastructure.database.dependencies import close_database_connections  # noqa: E402
from infrastructure.logging import configure_logging  # noqa: E402
from infrastructure.settings import get_tenancy_settings  # noqa: E402
from tenancy.application.services import TenantResolver  # noqa: E402
from tenancy.dependencies.resolver import (  # noqa: E402
    build_tenant_directory,
    build_tenant_resolver,
)
from tenancy.domain.exceptions import InvalidHostnameError  # noqa: E402
from tenancy.domain.value_objects import ResolutionOutcome  # noqa: E402
from tenancy.infrastructure import RestTenantDirectory  # noqa: E402

console = Console()

OUTCOME_STYLES = {
    ResolutionOutcome.RESOLVED: "green",
    ResolutionOutcome.NOT_FOUND: "yellow",
    ResolutionOutcome.FAILED: "red",
}


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve hostnames to helpdesk tenants",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s acme.helpdesk.com
  %(prog)s support.acme.com --backend rest
  %(prog)s --check-subdomain acme --check-subdomain www
        """,
    )
    parser.add_argument("hostnames", nargs="*", help="Hostnames to resolve")
    parser.add_argument(
        "--backend",
        choices=["postgres", "rest"],
        default=None,
        help="Directory backend (default: HELPDESK_TENANCY_DIRECTORY_BACKEND)",
    )
    parser.add_argument(
        "--check-subdomain",
        action="append",
        default=[],
        metavar="CANDIDATE",
        help="Check a subdomain for registration (repeatable)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show resolver debug events",
    )
    return parser.parse_args()


async def resolve_all(resolver: TenantResolver, hostnames: list[str]) -> Table:
    table = Table(title="Tenant resolution", box=box.SIMPLE_HEAVY)
    table.add_column("Hostname")
    table.add_column("Outcome")
    table.add_column("Matched by")
    table.add_column("Tenant")
    table.add_column("Note", style="dim")

    for hostname in hostnames:
        try:
            resolution = await resolver.resolve(hostname)
        except InvalidHostnameError as e:
            table.add_row(hostname, "[red]invalid[/red]", "", "", str(e))
            continue

        style = OUTCOME_STYLES[resolution.outcome]
        tenant = resolution.tenant
        if resolution.platform_domain:
            note = "platform domain"
        else:
            note = resolution.error or ""
        table.add_row(
            resolution.hostname,
            f"[{style}]{resolution.outcome.value}[/{style}]",
            resolution.matched_by.value if resolution.matched_by else "",
            f"{tenant.name} ({tenant.id})" if tenant else "",
            note,
        )
    return table


async def check_all(resolver: TenantResolver, candidates: list[str]) -> Table:
    table = Table(title="Subdomain availability", box=box.SIMPLE_HEAVY)
    table.add_column("Candidate")
    table.add_column("Status")

    for candidate in candidates:
        check = await resolver.check_subdomain(candidate)
        style = "green" if check.is_available else "red"
        table.add_row(candidate, f"[{style}]{check.value}[/{style}]")
    return table


async def run(args) -> int:
    settings = get_tenancy_settings()
    if args.backend:
        settings = settings.model_copy(update={"directory_backend": args.backend})

    directory = build_tenant_directory(settings)
    resolver = build_tenant_resolver(settings, directory)
    console.print(
        f"[bold cyan]Backend:[/bold cyan] {settings.directory_backend}  "
        f"[bold cyan]Platform domains:[/bold cyan] {', '.join(settings.platform_domains)}"
    )

    try:
        if args.hostnames:
            console.print(await resolve_all(resolver, args.hostnames))
        if args.check_subdomain:
            console.print(await check_all(resolver, args.check_subdomain))
    finally:
        if isinstance(directory, RestTenantDirectory):
            await directory.aclose()
        else:
            await close_database_connections()
    return 0


def main():
    args = parse_args()
    if not args.hostnames and not args.check_subdomain:
        console.print("[red]Nothing to do: pass hostnames or --check-subdomain[/red]")
        sys.exit(2)

    configure_logging(debug=args.verbose)
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
