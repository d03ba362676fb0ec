"""Main Typer application entry point for the dbcontainers CLI."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from dbcontainers import __version__
from dbcontainers.cli.config_cmd import config_app
from dbcontainers.core.exceptions import DbContainersError
from dbcontainers.logging import setup_logging

app = typer.Typer(
    name="dbcontainers",
    help="Resolve jdbc:tc: connection URLs into database container definitions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)
console = Console()

app.add_typer(config_app, name="config", help="Configuration management")

_MASK = "***"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"dbcontainers {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
        ctx: typer.Context,
        version: bool = typer.Option(
            False,
            "--version",
            "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            help="Enable verbose (DEBUG) logging.",
        ),
        log_json: bool = typer.Option(
            False,
            "--log-json",
            help="Output logs in JSON format.",
        ),
        config_file: Path | None = typer.Option(
            None, "--config", "-c", help="Custom config file location."
        ),
) -> None:
    """dbcontainers — Database Container URL Resolver."""
    from dbcontainers.core.config import load_config
    from dbcontainers.core.models import LogFormat

    try:
        config = load_config(config_file)
    except DbContainersError as exc:
        typer.echo(typer.style(f"✗ {exc}", fg=typer.colors.RED, bold=True), err=True)
        raise typer.Exit(code=1)

    ctx.obj = {"config": config, "config_file": config_file}
    logging_config = config.logging
    level = "DEBUG" if verbose else logging_config.level
    fmt = LogFormat.JSON if log_json else logging_config.format
    setup_logging(level=level, log_file=logging_config.log_file, log_format=fmt)


# ──────────────────── resolve command ────────────────────


@app.command("resolve")
def resolve(
        ctx: typer.Context,
        url: str = typer.Argument(..., help="Connection URL, e.g. jdbc:tc:postgresql:14://localhost/app"),
        as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
        show_password: bool = typer.Option(
            False, "--show-password", help="Print the password instead of masking it."
        ),
) -> None:
    """Resolve a connection URL into the container it describes (nothing is started)."""
    from dbcontainers.providers import resolve_url

    config = ctx.obj["config"]
    try:
        container = resolve_url(url, defaults=config.defaults)
    except DbContainersError as exc:
        typer.echo(
            typer.style(f"✗ Could not resolve URL: {exc}", fg=typer.colors.RED, bold=True),
            err=True,
        )
        raise typer.Exit(code=1)

    details = container.describe(show_password=show_password)
    environment = {
        key: value if show_password or "PASSWORD" not in key else _MASK
        for key, value in container.environment().items()
    }

    if as_json:
        typer.echo(json.dumps({**details, "environment": environment}, indent=2))
        return

    table = Table(title="Resolved Container", show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    for key, value in details.items():
        table.add_row(key, "-" if value is None else str(value))
    for key, value in environment.items():
        table.add_row(f"env {key}", value)
    console.print(table)


# ──────────────────── providers command ──────────────────


@app.command("providers")
def providers() -> None:
    """List supported database families and their default images."""
    from dbcontainers.providers import available_providers

    table = Table(title="Container Providers")
    table.add_column("Provider", style="bold")
    table.add_column("Image")
    table.add_column("Default tag")

    for provider_cls in available_providers():
        table.add_row(
            provider_cls.__name__,
            str(provider_cls.IMAGE),
            provider_cls.DEFAULT_TAG or "[yellow]unpinned[/yellow]",
        )
    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
