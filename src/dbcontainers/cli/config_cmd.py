"""CLI config subcommands for inspecting dbcontainers configuration."""

from __future__ import annotations

import json

import typer
from rich.console import Console
from rich.syntax import Syntax

config_app = typer.Typer(no_args_is_help=True, rich_markup_mode="rich")
console = Console()


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Display the effective configuration (file + environment), password masked.

    Use the global --config option to inspect a file other than the default.
    """
    from dbcontainers.core.config import CONFIG_FILE, config_to_dict

    target = ctx.obj["config_file"] or CONFIG_FILE
    source = str(target) if target.exists() else "defaults (no config file)"
    content = json.dumps(config_to_dict(ctx.obj["config"]), indent=2)
    console.print(f"[bold]Config: {source}[/bold]\n")
    console.print(Syntax(content, "json", theme="monokai", line_numbers=False))


@config_app.command("path")
def config_path() -> None:
    """Show config directory and file paths."""
    from dbcontainers.core.config import CONFIG_DIR, CONFIG_FILE

    console.print("[bold]dbcontainers paths:[/bold]")
    console.print(f"  Config dir:    {CONFIG_DIR}")
    console.print(f"  Config file:   {CONFIG_FILE}")
