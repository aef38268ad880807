"""
rircheck check / resolve - Check RIR registrations of an AS
"""

import json
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from pathlib import Path
from typing import Any, Dict, Optional

from utils.helpers import DEFAULT_CONFIG_PATH, deep_merge, load_config, save_json, yes_no
from utils.error_handler import ConfigurationError, ErrorHandler, RircheckError

console = Console()


def load_run_config(config_file: Path, timeout: Optional[int] = None, retries: Optional[int] = None) -> Dict[str, Any]:
    """Config file values with command line overrides applied"""
    config = load_config(str(config_file))
    overrides: Dict[str, Any] = {"ripestat": {}}
    if timeout is not None:
        if timeout <= 0:
            raise ConfigurationError("--timeout", "must be a positive number of milliseconds")
        overrides["ripestat"]["timeout_ms"] = timeout
    if retries is not None:
        if retries < 0:
            raise ConfigurationError("--retries", "must not be negative")
        overrides["ripestat"]["retries"] = retries
    return deep_merge(config, overrides)


def render_summary(ctx) -> Table:
    """Summary table of a finished check"""
    from core.checker import summarize

    table = Table(title=escape(f"AS{ctx.asn}"))
    table.add_column("asn", style="cyan")
    table.add_column("prefix", style="cyan")
    table.add_column("bgp?")
    table.add_column("whois?")
    table.add_column("roa?")
    table.add_column("#roas", justify="right")
    table.add_column("matching roa")
    table.add_column("max-length", justify="right")
    show_upstreams = bool(ctx.opts.get("upstreams"))
    if show_upstreams:
        table.add_column("upstreams")

    for row in summarize(ctx):
        roa = "[green]yes[/green]" if row["roa"] else "[red]no[/red]"
        cells = [
            escape(str(row["asn"])),
            escape(str(row["prefix"])),
            yes_no(row["bgp"]),
            yes_no(row["whois"]),
            roa,
            str(row["roas"]),
            escape(row["matching_roa"] or "-"),
            "-" if row["max_length"] is None else escape(str(row["max_length"])),
        ]
        if show_upstreams:
            cells.append(escape(", ".join(str(u) for u in row["upstreams"]) or "-"))
        table.add_row(*cells)
    return table


def check_command(
    resource: str = typer.Argument(..., help="AS number (3333, AS3333), IP address or prefix"),
    timeout: Optional[int] = typer.Option(None, "--timeout", "-t", help="Request timeout in milliseconds (default: 2000)"),
    retries: Optional[int] = typer.Option(None, "--retries", "-r", help="Retries on timeout, each doubling the timeout"),
    upstreams: Optional[bool] = typer.Option(None, "--upstreams/--no-upstreams", help="Also show upstream neighbours (bgp-state)"),
    as_json: bool = typer.Option(False, "--json", help="Print the full context as JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the full context as JSON to this file"),
    config_file: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Configuration file path"
    )
):
    """
    Check RIR registration details for an AS

    Shows, for every announced prefix, whether it is in BGP and WHOIS and
    whether a valid ROA covers it.
    """
    from core.api import RirApi
    from core.checker import check, errors

    config: Dict[str, Any] = {}
    try:
        config = load_run_config(config_file, timeout, retries)
        if upstreams is None:
            upstreams = bool((config.get("check", {}) or {}).get("upstreams", False))

        api = RirApi.from_config(config)
        with api.client:
            ctx = check(resource, api, upstreams=upstreams)
    except RircheckError as e:
        result = ErrorHandler(config).handle_error(e, {"resource": resource})
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        suggestion = result["recovery"].get("suggestion")
        if suggestion:
            console.print(f"[yellow]{escape(suggestion)}[/yellow]")
        raise typer.Exit(2)

    if output:
        save_json(ctx.to_dict(), output)
        console.print(f"[green]✓[/green] Context written to [cyan]{escape(str(output))}[/cyan]")

    if as_json:
        console.print_json(json.dumps(ctx.to_dict(), default=str))
    else:
        console.print(render_summary(ctx))

    for failure in errors(ctx):
        message = f"{failure['call_type']} {failure['resource']}: {failure['error']}"
        console.print(f"[yellow]{escape(message)}[/yellow]")


def resolve_command(
    resource: str = typer.Argument(..., help="AS number, IP address or prefix"),
    timeout: Optional[int] = typer.Option(None, "--timeout", "-t", help="Request timeout in milliseconds"),
    retries: Optional[int] = typer.Option(None, "--retries", "-r", help="Retries on timeout"),
    config_file: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Configuration file path")
):
    """Resolve a resource to its AS number"""
    from core.api import RirApi
    from core.resolver import resolve

    config: Dict[str, Any] = {}
    try:
        config = load_run_config(config_file, timeout, retries)
        api = RirApi.from_config(config)
        with api.client:
            asn = resolve(resource, api)
    except RircheckError as e:
        ErrorHandler(config).handle_error(e, {"resource": resource})
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(2)

    console.print(asn)
