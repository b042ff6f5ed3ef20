"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_endpoint(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    try:
        async with build_async_client(settings, transport=transport) as client:
            response = await client.post(settings.endpoint, json={"query": "{ __typename }"})
    except httpx.HTTPError as exc:
        return False, str(exc)
    return response.status_code < 500, f"HTTP {response.status_code}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="graphctl doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    if settings.graph_id:
        table.add_row("Graph id", "OK", f"{settings.graph_id}@{settings.graph_variant}")
    else:
        table.add_row("Graph id", "MISSING", "Pass --graph or set GRAPHCTL_GRAPH_ID")
    if settings.api_key:
        table.add_row("API key", "OK", "Sent as x-api-key")
    else:
        table.add_row("API key", "MISSING", "Run `graphctl doctor setup` or set GRAPHCTL_API_KEY")
    table.add_row("Frontend", "OK", settings.frontend_url)

    ok_endpoint, detail_endpoint = asyncio.run(_check_endpoint(settings))
    table.add_row("Endpoint", "OK" if ok_endpoint else "FAIL", f"{settings.endpoint} ({detail_endpoint})")

    _console.print(table)


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    graph_id = typer.prompt("Graph id", default=settings.graph_id or "", show_default=True).strip()
    variant = typer.prompt("Default variant", default=settings.graph_variant, show_default=True).strip()
    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()

    if not graph_id:
        raise typer.BadParameter("graph id is required")

    env_path = write_user_env_vars(
        {
            "GRAPHCTL_GRAPH_ID": graph_id,
            "GRAPHCTL_GRAPH_VARIANT": variant or None,
            "GRAPHCTL_API_KEY": api_key or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
