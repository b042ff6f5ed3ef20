"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- The view reacts to fetch state transitions instead of polling.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from rich.console import Console
from rich.status import Status
from rich.table import Table
from rich.text import Text

from core.domain.models import DISPLAY_COLUMNS, DisplayRow, Footer, GraphReference
from core.services.fetch import Failed, FetchState, Loading, Succeeded
from core.services.service_list import classify, compose_footer, rows_for


def fetching_title(ref: GraphReference) -> Text:
    return Text.assemble("Fetching list of services for graph ", (str(ref), "cyan"))


def build_services_table(rows: Sequence[DisplayRow]) -> Table:
    """Rich table with the fixed `Name | URL | Last Updated` columns."""

    table = Table()
    name, url, last_updated = DISPLAY_COLUMNS
    table.add_column(name, style="cyan", no_wrap=True)
    table.add_column(url, style="magenta")
    table.add_column(last_updated, style="white")
    for row in rows:
        table.add_row(*row.cells())
    return table


def print_footer(console: Console, footer: Footer) -> None:
    if footer.top_margin:
        console.print()
    if footer.message:
        console.print(Text(footer.message, style="red"), soft_wrap=True)
    console.print(
        Text.assemble("View full details at: ", (footer.link, "cyan")),
        soft_wrap=True,
    )


class ServiceListView:
    """Renders the `service list` lifecycle; subscribe it to a `FetchController`."""

    def __init__(
        self,
        console: Console,
        *,
        graph_name: str,
        frontend_url: str,
        reference_time: datetime,
    ) -> None:
        self._console = console
        self._graph_name = graph_name
        self._frontend_url = frontend_url
        self._reference_time = reference_time
        self._status: Status | None = None

    def __call__(self, state: FetchState) -> None:
        if isinstance(state, Loading):
            self._start(state)
        elif isinstance(state, Succeeded):
            self._stop(state.ref, ok=True)
            self._render_result(state)
        elif isinstance(state, Failed):
            self._stop(state.ref, ok=False)

    def _start(self, state: Loading) -> None:
        self._status = self._console.status(fetching_title(state.ref))
        self._status.start()

    def _stop(self, ref: GraphReference, *, ok: bool) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
        marker = Text("✔ ", style="green") if ok else Text("✖ ", style="red")
        self._console.print(Text.assemble(marker, fetching_title(ref)), soft_wrap=True)

    def _render_result(self, state: Succeeded) -> None:
        classification = classify(state.result)
        rows = rows_for(classification, self._reference_time)
        if rows:
            self._console.print(build_services_table(rows))
        print_footer(
            self._console,
            compose_footer(classification, self._graph_name, self._frontend_url),
        )
