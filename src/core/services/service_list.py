"""Classification and formatting for `service list`.

This module holds the deterministic part of the command: deciding what a
result means (federated or not, empty or not), turning service records into
table rows, and choosing the footer message. Nothing here does I/O, which
keeps it trivially testable and independent from the Rich view.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Sequence

from core.config import AppSettings
from core.domain.models import (
    Classification,
    DisplayRow,
    FederatedImplementingServices,
    Footer,
    GraphReference,
    NonFederatedImplementingService,
    ServiceRecord,
)
from core.errors import PreconditionError
from core.services.relative_time import humanize_relative, to_local

# Reference instant (UTC midnight) used when deterministic time is enabled.
PINNED_REFERENCE_TIME = datetime(2019, 6, 13, tzinfo=timezone.utc)

NOT_FEDERATED_MESSAGE = "This graph is not federated. There are no services composing the graph."
NO_SERVICES_MESSAGE = "There are no services on this federated graph."


def resolve_reference_time(*, deterministic: bool, now: datetime | None = None) -> datetime:
    if deterministic:
        return PINNED_REFERENCE_TIME
    return now or datetime.now()


def classify(
    result: FederatedImplementingServices | NonFederatedImplementingService | None,
) -> Classification | None:
    """Return the verdict for `result`, or None when there is nothing to classify."""

    if result is None:
        return None
    if isinstance(result, NonFederatedImplementingService):
        return Classification(federated=False, services=())
    if isinstance(result, FederatedImplementingServices):
        return Classification(federated=True, services=tuple(result.services))
    raise TypeError(f"Unknown implementing services result: {type(result).__name__}")


def format_last_updated(updated_at: datetime, reference_time: datetime) -> str:
    """``D MMMM YYYY (relative)`` in the local time zone, e.g. ``10 June 2019 (3 days ago)``."""

    local = to_local(updated_at)
    return f"{local.day} {local:%B} {local.year} ({humanize_relative(updated_at, reference_time)})"


def _is_complete(row: DisplayRow | None) -> bool:
    if row is None:
        return False
    return all(cell is not None for cell in row.cells())


def format_services(
    services: Iterable[ServiceRecord],
    reference_time: datetime,
) -> list[DisplayRow]:
    """Map records into display rows sorted by name (case-insensitive, stable)."""

    rows = [
        DisplayRow(
            name=service.name,
            url=service.url or "",
            last_updated_display=format_last_updated(service.updated_at, reference_time),
        )
        for service in services
    ]
    rows = [row for row in rows if _is_complete(row)]
    return sorted(rows, key=lambda row: row.name.upper())


def build_service_list_url(frontend_url: str, graph_name: str) -> str:
    return f"{frontend_url.rstrip('/')}/graph/{graph_name}/service-list"


def compose_footer(
    classification: Classification | None,
    graph_name: str,
    frontend_url: str,
) -> Footer:
    if classification is None or not classification.federated:
        message: str | None = NOT_FEDERATED_MESSAGE
    elif classification.is_empty:
        message = NO_SERVICES_MESSAGE
    else:
        message = None
    return Footer(message=message, link=build_service_list_url(frontend_url, graph_name))


def rows_for(classification: Classification | None, reference_time: datetime) -> Sequence[DisplayRow]:
    """Rows to render as a table; empty when no table should be shown."""

    if classification is None or not classification.federated:
        return ()
    return format_services(classification.services, reference_time)


def resolve_graph_reference(
    settings: AppSettings,
    *,
    graph_id: str | None = None,
    variant: str | None = None,
) -> GraphReference:
    """Build the reference from flags (preferred) and configuration.

    Raises `PreconditionError` when no graph id can be resolved.
    """

    resolved_id = (graph_id or settings.graph_id or "").strip()
    if not resolved_id:
        raise PreconditionError(
            "No graph id found in config or flags. "
            "Pass --graph or set GRAPHCTL_GRAPH_ID."
        )
    return GraphReference(id=resolved_id, variant=variant or settings.graph_variant)
