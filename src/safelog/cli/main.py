"""
CLI entry point for safelog.

Commands:
    safelog redact [FILE]   - Redact a JSON document with one of the serializers
    safelog paths           - Show the effective redaction paths
    safelog config          - Manage configuration
    safelog version         - Show version information
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from safelog.config.models import DEFAULT_CONFIG_TEMPLATE, SerializerConfig, get_config_file, load_config
from safelog.exceptions import ConfigError, SafeLogError
from safelog.redaction.paths import coerce_paths

app = typer.Typer(
    name="safelog",
    help="Redacting log serializers - Inspect what safelog would log",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

AUTO_KIND = "auto"


def _load_settings(config_file: Path | None) -> SerializerConfig:
    try:
        return load_config(config_file)
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e


@app.command()
def redact(
    file: Path | None = typer.Argument(None, help="JSON file to redact (default: stdin)"),
    path: list[str] | None = typer.Option(
        None,
        "--path",
        "-p",
        help="Path to redact wherever it occurs, e.g. 'password' or 'user.token' (repeatable)",
    ),
    kind: str = typer.Option(
        "event",
        "--kind",
        "-k",
        help="Serializer to apply: axios_req, axios_res, req, res, event, err, or auto",
    ),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Config file to use"),
    indent: int = typer.Option(2, "--indent", help="JSON indentation"),
) -> None:
    """Redact a JSON document and print the record that would be logged."""
    from safelog.serializers import SERIALIZER_NAMES, default_serializers, serialize_any

    settings = _load_settings(config_file)
    cli_paths = path or []

    if kind != AUTO_KIND and kind not in SERIALIZER_NAMES:
        choices = ", ".join([*SERIALIZER_NAMES, AUTO_KIND])
        err_console.print(f"[red]Error:[/red] Unknown kind '{escape(kind)}'. Choose from: {choices}")
        raise typer.Exit(code=1)

    try:
        text = file.read_text() if file is not None else sys.stdin.read()
        payload = json.loads(text)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] Could not read JSON input: {escape(str(e))}")
        raise typer.Exit(code=1) from e

    try:
        result: Any
        if kind == AUTO_KIND:
            result = serialize_any(payload, [*cli_paths, *settings.redact_paths], settings)
        else:
            result = default_serializers(*cli_paths, config=settings)[kind](payload)
    except SafeLogError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    print(json.dumps(result, indent=indent, default=str))


@app.command()
def paths(
    path: list[str] | None = typer.Option(None, "--path", "-p", help="Extra path (repeatable)"),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Config file to use"),
) -> None:
    """Show the redaction paths serializers would be built with."""
    settings = _load_settings(config_file)
    resolved = coerce_paths([*(path or []), *settings.redact_paths])

    if not resolved:
        console.print("[yellow]No redaction paths configured.[/yellow]")
        return

    table = Table(title="Redaction Paths")
    table.add_column("Path", style="cyan")
    table.add_column("Keys")
    for redaction_path in resolved:
        table.add_row(
            escape(redaction_path.raw), escape(" > ".join(repr(key) for key in redaction_path.keys))
        )

    console.print(table)


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    init: bool = typer.Option(False, "--init", help="Initialize default configuration"),
) -> None:
    """Manage safelog configuration."""
    config_file = get_config_file()

    if show:
        if config_file.exists():
            console.print(config_file.read_text(), markup=False, highlight=False)
        else:
            console.print("[yellow]No configuration file found.[/yellow]")
            console.print(f"Run 'safelog config --init' to create one at {config_file}")
        return

    if init:
        if config_file.exists():
            console.print(f"[yellow]Configuration already exists at {config_file}[/yellow]")
            return
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(DEFAULT_CONFIG_TEMPLATE)
        console.print(f"[green]Created configuration at {config_file}[/green]")
        return

    console.print("Usage: safelog config [--show | --init]")


@app.command()
def version() -> None:
    """Show version information."""
    from safelog import __version__

    console.print(f"safelog v{__version__}")


if __name__ == "__main__":
    app()
