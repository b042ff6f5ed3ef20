"""`service` commands: inspect the member services of a federated graph."""

from __future__ import annotations

import asyncio
import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from adapters.graph_manager import GraphManagerClient
from cli.ui_components import ServiceListView
from core.config import AppSettings
from core.domain.models import GraphReference
from core.errors import GraphctlError
from core.interfaces.graph_source import ImplementingServicesSource
from core.services.fetch import FetchController, FetchState
from core.services.service_list import resolve_graph_reference, resolve_reference_time

app = typer.Typer(no_args_is_help=True, help="Inspect the services of a managed federated graph.")

logger = logging.getLogger(__name__)


async def list_services(
    *,
    settings: AppSettings,
    ref: GraphReference,
    source: ImplementingServicesSource,
    console: Console,
) -> FetchState:
    """Fetch the implementing services of `ref` and render them on `console`."""

    view = ServiceListView(
        console,
        graph_name=ref.id,
        frontend_url=settings.frontend_url,
        reference_time=resolve_reference_time(deterministic=settings.deterministic_time),
    )
    controller = FetchController(source)
    controller.subscribe(view)
    return await controller.fetch(ref)


@app.command(name="list")
def list_command(
    graph: str | None = typer.Option(
        None, "--graph", "-g", help="Graph id (overrides GRAPHCTL_GRAPH_ID)."
    ),
    variant: str | None = typer.Option(
        None, "--variant", "--tag", "-t", help="Variant to inspect (overrides GRAPHCTL_GRAPH_VARIANT)."
    ),
    key: str | None = typer.Option(None, "--key", help="API key for the graph manager."),
    endpoint: str | None = typer.Option(None, "--endpoint", help="GraphQL endpoint URL."),
    frontend: str | None = typer.Option(None, "--frontend", help="Graph manager UI base URL."),
) -> None:
    """List the services that implement a managed federated graph."""

    console = Console()
    err_console = Console(stderr=True)

    overrides = {"api_key": key, "endpoint": endpoint, "frontend_url": frontend}
    try:
        settings = AppSettings(**{name: value for name, value in overrides.items() if value is not None})
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        ref = resolve_graph_reference(settings, graph_id=graph, variant=variant)
        asyncio.run(
            list_services(
                settings=settings,
                ref=ref,
                source=GraphManagerClient(settings),
                console=console,
            )
        )
    except GraphctlError as exc:
        logger.debug("service list aborted", exc_info=True)
        err_console.print(Text.assemble(("Error: ", "red"), str(exc)), soft_wrap=True)
        raise typer.Exit(code=1) from exc
