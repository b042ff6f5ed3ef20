"""GraphQL client for the graph manager.

Implements `core.interfaces.graph_source.ImplementingServicesSource` on top of
httpx. Every failure is mapped onto the `core.errors.FetchError` family so the
CLI can report it uniformly.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import (
    FederatedImplementingServices,
    NonFederatedImplementingService,
    implementing_services_adapter,
)
from core.domain.queries import ListServicesQuery
from core.errors import GraphNotFoundError, RemoteServiceError, TransportError

logger = logging.getLogger(__name__)


def _error_messages(errors: list[Any]) -> str:
    messages = []
    for error in errors:
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            messages.append(error["message"])
        else:
            messages.append(str(error))
    return "; ".join(messages) or "unknown error"


class GraphManagerClient:
    """Sends `ListServicesQuery` requests to the configured GraphQL endpoint."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        endpoint = self._settings.endpoint
        logger.debug("POST %s (%s)", endpoint, payload.get("operationName"))
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.post(endpoint, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"Could not reach {endpoint}: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            detail = ""
            if isinstance(body, dict) and body.get("errors"):
                detail = f": {_error_messages(body['errors'])}"
            raise TransportError(
                f"{endpoint} answered HTTP {response.status_code}{detail}",
                status_code=response.status_code,
            )
        if not isinstance(body, dict):
            raise RemoteServiceError(f"{endpoint} did not return a JSON object")
        return body

    async def list_implementing_services(
        self, query: ListServicesQuery
    ) -> FederatedImplementingServices | NonFederatedImplementingService | None:
        body = await self._post(query.to_payload())

        errors = body.get("errors")
        if errors:
            raise RemoteServiceError(_error_messages(errors), errors=list(errors))

        data = body.get("data") or {}
        service = data.get("service") if isinstance(data, dict) else None
        if service is None:
            raise GraphNotFoundError(
                f"Graph '{query.graph_id}' was not found or is not accessible with this API key."
            )
        if not isinstance(service, dict):
            raise RemoteServiceError(f"Unexpected service payload: {service!r}")

        raw = service.get("implementingServices")
        if raw is None:
            return None
        try:
            return implementing_services_adapter.validate_python(raw)
        except ValidationError as exc:
            raise RemoteServiceError(f"Unexpected implementingServices payload: {exc}") from exc
