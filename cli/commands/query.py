"""
rircheck query - Run a single RIPEstat data call
"""

import json
import typer
from rich.console import Console
from rich.markup import escape
from pathlib import Path
from typing import List, Optional

from utils.helpers import DEFAULT_CONFIG_PATH, parse_params
from utils.error_handler import ConfigurationError, ErrorHandler, RircheckError

console = Console()


def query_command(
    endpoint: str = typer.Argument(..., help="Data call name, e.g. announced-prefixes"),
    params: Optional[List[str]] = typer.Option(None, "--param", "-p", help="Query parameter as key=value (repeatable)"),
    timeout: Optional[int] = typer.Option(None, "--timeout", "-t", help="Request timeout in milliseconds"),
    retries: Optional[int] = typer.Option(None, "--retries", "-r", help="Retries on timeout"),
    methodology: bool = typer.Option(False, "--methodology", help="Print the data call's methodology URL and exit"),
    config_file: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Configuration file path")
):
    """
    Query one data call and print the decoded record

    Example: rircheck query rpki-validation -p resource=3333 -p prefix=193.0.0.0/21
    """
    from cli.commands.check import load_run_config
    from ripestat.client import RipeStatClient
    from ripestat.endpoints import ENDPOINTS, methodology_url

    if methodology:
        console.print(methodology_url(endpoint))
        return

    config = {}
    try:
        try:
            pairs = parse_params(params)
        except ValueError as e:
            raise ConfigurationError("--param", str(e))
        config = load_run_config(config_file, timeout, retries)
    except RircheckError as e:
        ErrorHandler(config).handle_error(e, {"endpoint": endpoint})
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(2)

    if endpoint not in ENDPOINTS:
        console.print(f"[yellow]{escape(endpoint)} has no decoder; expect an error record[/yellow]")

    from core.context import to_plain

    with RipeStatClient(config) as client:
        record = client.query(endpoint, pairs)
    console.print_json(json.dumps(to_plain(record), default=str))
    if "error" in record:
        raise typer.Exit(1)
