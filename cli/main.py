"""
rircheck CLI - Main entry point
Check RIR registrations against the RIPEstat Data API
"""

import typer
from rich.console import Console
from rich.markup import escape
import sys

from cli.commands import init, check, query

VERSION = "0.1.0"

app = typer.Typer(
    name="rircheck",
    help="rircheck - Check your RIR registration details for any ASN",
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

app.command(name="init")(init.init_command)
app.command(name="check")(check.check_command)
app.command(name="resolve")(check.resolve_command)
app.command(name="query")(query.query_command)


@app.callback()
def callback():
    """
    rircheck - Check your RIR registration details for any ASN

    Data comes from the RIPEstat Data API (https://stat.ripe.net/docs/02.data-api/).
    """
    pass


def version_callback(value: bool):
    """Print version and exit"""
    if value:
        console.print(f"[bold green]rircheck[/bold green] v{VERSION}")
        raise typer.Exit()


@app.command()
def version(
    show: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True
    )
):
    """Show rircheck version"""
    console.print(f"rircheck v{VERSION}")


def main():
    """Main entry point"""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
