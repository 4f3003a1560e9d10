"""Admin commands for initializing configuration."""

import sys

from rich.console import Console

from yoy.config import create_default_config, get_config_path

console = Console()


def init_command(force: bool = False) -> None:
    """Initialize yoy configuration."""
    config_path = get_config_path()

    if not force and config_path.exists():
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'yoy init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Config: {config_path}[/dim]")
