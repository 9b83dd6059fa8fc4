"""
IP/CIDR range CLI commands.
"""

import json
from itertools import chain, islice

import click
from rich.console import Console
from rich.table import Table

from cidrexpand.config import get_config
from cidrexpand.ip.core import (
    AddressRangeError,
    RangeExpander,
    describe_network,
    to_binary_string,
    to_ip_address,
)


@click.group()
def ip():
    """IPv4 CIDR range utilities."""
    pass


@ip.command()
@click.argument("cidrs", nargs=-1, required=True)
@click.option("--all", "include_all", is_flag=True,
              help="Include network and broadcast addresses")
@click.option("--skip-invalid", is_flag=True,
              help="Skip malformed CIDRs instead of failing")
@click.option("--limit", type=click.IntRange(min=0), default=None,
              help="Max addresses to print (0 = unlimited)")
@click.option("--json-output", "json_out", is_flag=True, help="Output as JSON")
def expand(
    cidrs: tuple[str, ...],
    include_all: bool,
    skip_invalid: bool,
    limit: int | None,
    json_out: bool,
):
    """Expand CIDR networks into the addresses they contain.

    Examples:
        cidrexpand ip expand 192.168.2.0/30
        cidrexpand ip expand 10.0.0.0/29 10.0.1.0/29 --all
        cidrexpand ip expand 10.0.0.0/30 bogus/24 --skip-invalid
    """
    console = Console()
    config = get_config()

    include_all = include_all or config.include_boundaries
    skip_invalid = skip_invalid or config.skip_invalid
    if limit is None:
        limit = config.output_limit

    expander = RangeExpander(include_boundaries=include_all)

    try:
        networks, skipped = expander.parse_all(cidrs, strict=not skip_invalid)
    except AddressRangeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    total = sum(expander.count(network) for network in networks)
    addresses = chain.from_iterable(expander.iter_network(network) for network in networks)
    if limit > 0:
        addresses = islice(addresses, limit)
    shown = list(addresses)

    if json_out:
        output = {
            "networks": [str(network) for network in networks],
            "include_boundaries": include_all,
            "count": total,
            "truncated": len(shown) < total,
            "addresses": shown,
            "skipped": [{"cidr": r.cidr, "error": str(r.error)} for r in skipped],
        }
        click.echo(json.dumps(output, indent=2))
        return

    for result in skipped:
        console.print(f"[red]Skipped[/red] {result.cidr}: {result.error}")

    for address in shown:
        click.echo(address)

    if len(shown) < total:
        console.print(f"[dim]... and {total - len(shown):,} more[/dim]")


@ip.command()
@click.argument("cidrs", nargs=-1, required=True)
@click.option("--all", "include_all", is_flag=True,
              help="Include network and broadcast addresses")
def count(cidrs: tuple[str, ...], include_all: bool):
    """Count addresses in CIDR networks without expanding them.

    Examples:
        cidrexpand ip count 10.0.0.0/8
        cidrexpand ip count 192.168.0.0/24 192.168.1.0/30 --all
    """
    console = Console()
    include_all = include_all or get_config().include_boundaries

    expander = RangeExpander(include_boundaries=include_all)

    table = Table(title="Address Count", box=None)
    table.add_column("CIDR", style="white")
    table.add_column("Addresses", style="cyan", justify="right")

    total = 0
    for cidr in cidrs:
        try:
            n = expander.count(expander.parse(cidr))
        except AddressRangeError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
        total += n
        table.add_row(cidr, f"{n:,}")

    if len(cidrs) > 1:
        table.add_row("[bold]Total[/bold]", f"[bold]{total:,}[/bold]")

    console.print(table)


@ip.command()
@click.argument("address")
@click.option("--pad", is_flag=True, help="Zero-pad to 32 bits")
def tobin(address: str, pad: bool):
    """Convert a dotted-decimal address to a binary string.

    Examples:
        cidrexpand ip tobin 192.168.2.1
        cidrexpand ip tobin 10.0.0.1 --pad
    """
    console = Console()

    try:
        bits = to_binary_string(address, pad=pad)
    except AddressRangeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    click.echo(bits)


@ip.command()
@click.argument("bits")
def toip(bits: str):
    """Convert a binary string to a dotted-decimal address.

    Examples:
        cidrexpand ip toip 11000000101010000000001000000001
    """
    console = Console()

    try:
        address = to_ip_address(bits)
    except AddressRangeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    click.echo(address)


@ip.command()
@click.argument("cidr")
def info(cidr: str):
    """Show network, broadcast and mask details for a CIDR.

    Examples:
        cidrexpand ip info 192.168.2.0/30
        cidrexpand ip info 10.1.2.3/8
    """
    console = Console()

    try:
        net = describe_network(cidr)
    except AddressRangeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    table = Table(title=f"Network Information: {cidr}", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Network", net.network)
    table.add_row("Broadcast", net.broadcast)
    table.add_row("Netmask", net.netmask)
    table.add_row("Wildcard Mask", net.wildcard_mask)
    table.add_row("Prefix Length", f"/{net.prefix_length}")
    table.add_row("Wildcard Bits", str(net.wildcard_bits))
    table.add_row("Total Addresses", f"{net.num_addresses:,}")
    table.add_row("Usable Hosts", f"{net.num_hosts:,}")

    if net.first_host:
        table.add_row("First Host", net.first_host)
        table.add_row("Last Host", net.last_host)

    if net.has_host_bits:
        table.add_row("", "")
        table.add_row("Note", f"[yellow]{net.address} has host bits set[/yellow]")

    console.print(table)
