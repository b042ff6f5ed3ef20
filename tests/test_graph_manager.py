import json

import httpx
import pytest

from adapters.graph_manager import GraphManagerClient
from core.config import AppSettings
from core.domain.models import FederatedImplementingServices, NonFederatedImplementingService
from core.domain.queries import ListServicesQuery
from core.errors import GraphNotFoundError, RemoteServiceError, TransportError

QUERY = ListServicesQuery(graph_id="mygraph", graph_variant="current")
SETTINGS = AppSettings(api_key="service:mygraph:secret", endpoint="https://gm.test/api/graphql")


def _client(handler) -> GraphManagerClient:
    return GraphManagerClient(SETTINGS, transport=httpx.MockTransport(handler))


def _implementing(payload) -> dict:
    return {"data": {"service": {"implementingServices": payload}}}


async def test_federated_payload_is_parsed():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json=_implementing(
                {
                    "__typename": "FederatedImplementingServices",
                    "services": [
                        {
                            "graphID": "mygraph",
                            "graphVariant": "current",
                            "name": "accounts",
                            "url": None,
                            "updatedAt": "2019-06-10T00:00:00Z",
                        }
                    ],
                }
            ),
        )

    result = await _client(handler).list_implementing_services(QUERY)

    assert isinstance(result, FederatedImplementingServices)
    (service,) = result.services
    assert (service.name, service.url, service.graph_id) == ("accounts", None, "mygraph")

    (request,) = requests
    assert request.headers["x-api-key"] == "service:mygraph:secret"
    body = json.loads(request.content)
    assert body["operationName"] == "ListServices"
    assert body["variables"] == {"id": "mygraph", "graphVariant": "current"}


async def test_non_federated_payload_is_parsed():
    def handler(request):
        return httpx.Response(200, json=_implementing({"__typename": "NonFederatedImplementingService"}))

    result = await _client(handler).list_implementing_services(QUERY)

    assert isinstance(result, NonFederatedImplementingService)


async def test_missing_implementing_services_returns_none():
    def handler(request):
        return httpx.Response(200, json=_implementing(None))

    assert await _client(handler).list_implementing_services(QUERY) is None


async def test_null_service_is_graph_not_found():
    def handler(request):
        return httpx.Response(200, json={"data": {"service": None}})

    with pytest.raises(GraphNotFoundError):
        await _client(handler).list_implementing_services(QUERY)


async def test_graphql_errors_are_raised():
    def handler(request):
        return httpx.Response(200, json={"data": None, "errors": [{"message": "Unauthorized"}]})

    with pytest.raises(RemoteServiceError, match="Unauthorized") as excinfo:
        await _client(handler).list_implementing_services(QUERY)
    assert excinfo.value.errors == [{"message": "Unauthorized"}]


async def test_http_failure_is_transport_error():
    def handler(request):
        return httpx.Response(503, text="unavailable")

    with pytest.raises(TransportError) as excinfo:
        await _client(handler).list_implementing_services(QUERY)
    assert excinfo.value.status_code == 503


async def test_network_failure_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError, match="Could not reach"):
        await _client(handler).list_implementing_services(QUERY)


async def test_unknown_typename_is_remote_error():
    def handler(request):
        return httpx.Response(200, json=_implementing({"__typename": "SomethingElse"}))

    with pytest.raises(RemoteServiceError):
        await _client(handler).list_implementing_services(QUERY)


async def test_non_object_service_is_remote_error():
    def handler(request):
        return httpx.Response(200, json={"data": {"service": "mygraph"}})

    with pytest.raises(RemoteServiceError, match="Unexpected service payload"):
        await _client(handler).list_implementing_services(QUERY)
