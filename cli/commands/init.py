"""
rircheck init - Initialize rircheck configuration
"""

import typer
from rich.console import Console
from rich.prompt import Confirm
from pathlib import Path

console = Console()

DEFAULT_CONFIG = """# rircheck configuration
ripestat:
  base_url: "${RIRCHECK_BASE_URL:-https://stat.ripe.net/data}"
  # milliseconds; every retry doubles it
  timeout_ms: 2000
  retries: 0

check:
  upstreams: false

logging:
  level: INFO
  path: ./logs/rircheck.log

output:
  save_path: ./reports
"""


def init_command(
    config_dir: Path = typer.Option(
        Path.home() / ".rircheck",
        "--config-dir",
        "-c",
        help="Configuration directory"
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing configuration"
    )
):
    """
    Initialize rircheck configuration

    Writes a default rircheck.yaml into the configuration directory.
    """
    console.print("[bold cyan]Initializing rircheck...[/bold cyan]\n")

    config_dir.mkdir(parents=True, exist_ok=True)
    config_file = config_dir / "rircheck.yaml"

    if config_file.exists() and not force:
        if not Confirm.ask(f"Config file already exists at {config_file}. Overwrite?"):
            console.print("[yellow]Skipping configuration file[/yellow]")
            return

    write_default_config(config_file)

    console.print(f"\nConfiguration directory: [cyan]{config_dir}[/cyan]")
    console.print("Next steps:")
    console.print(f"  1. Edit {config_file} to customize settings")
    console.print("  2. Run 'rircheck check AS3333'")


def write_default_config(dest: Path):
    """Write the default configuration file"""
    with open(dest, "w") as f:
        f.write(DEFAULT_CONFIG)

    console.print(f"[green]✓[/green] Created configuration file at {dest}")
