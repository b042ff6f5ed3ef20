"""graphctl CLI entry point (Typer)."""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from cli import doctor, service
from core.config import AppSettings

app = typer.Typer(
    no_args_is_help=True,
    help="Command-line companion for a managed GraphQL graph registry.",
)
app.add_typer(service.app, name="service")
app.add_typer(doctor.app, name="doctor")


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich; stdout is kept for command output."""

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; only show it in verbose mode.
    logging.getLogger("httpx").setLevel(logging.DEBUG if level == "DEBUG" else logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    if verbose:
        configure_logging("DEBUG")
        return
    try:
        level = AppSettings().log_level
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    configure_logging(level)


def run() -> None:
    app()
