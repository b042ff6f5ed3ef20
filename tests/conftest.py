from __future__ import annotations

from datetime import datetime

import pytest

from core.domain.models import ServiceRecord
from core.domain.queries import ListServicesQuery


def make_record(name: str, *, url: str | None = None, updated_at: datetime | None = None) -> ServiceRecord:
    return ServiceRecord(
        graph_id="mygraph",
        graph_variant="current",
        name=name,
        url=url,
        updated_at=updated_at or datetime(2019, 6, 10),
    )


class FakeSource:
    """In-memory `ImplementingServicesSource` that records every query."""

    def __init__(self, result=None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.queries: list[ListServicesQuery] = []

    async def list_implementing_services(self, query: ListServicesQuery):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep host configuration (env vars, project .env) out of the tests."""

    for name in (
        "GRAPHCTL_GRAPH_ID",
        "GRAPHCTL_GRAPH_VARIANT",
        "GRAPHCTL_API_KEY",
        "GRAPHCTL_ENDPOINT",
        "GRAPHCTL_FRONTEND_URL",
        "GRAPHCTL_DETERMINISTIC_TIME",
        "GRAPHCTL_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
