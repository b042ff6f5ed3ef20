import pytest
from typer.testing import CliRunner

from cli import service as service_cli
from cli.main import app
from conftest import FakeSource, make_record
from core.domain.models import FederatedImplementingServices, NonFederatedImplementingService
from core.errors import RemoteServiceError

runner = CliRunner()
ENV = {"COLUMNS": "200", "GRAPHCTL_DETERMINISTIC_TIME": "1"}
FRONTEND = "https://studio.example.com"


@pytest.fixture
def use_source(monkeypatch):
    def install(source: FakeSource) -> FakeSource:
        monkeypatch.setattr(service_cli, "GraphManagerClient", lambda settings: source)
        return source

    return install


def test_lists_federated_services_sorted(use_source):
    source = use_source(
        FakeSource(
            result=FederatedImplementingServices(
                services=[make_record("b-svc", url="http://b"), make_record("a-svc", url="http://a")]
            )
        )
    )

    result = runner.invoke(
        app,
        ["service", "list", "--graph", "mygraph", "--variant", "current", "--frontend", FRONTEND],
        env=ENV,
    )

    assert result.exit_code == 0, result.output
    assert result.output.index("a-svc") < result.output.index("b-svc")
    assert "10 June 2019 (3 days ago)" in result.output
    assert "not federated" not in result.output
    assert "no services" not in result.output
    assert f"{FRONTEND}/graph/mygraph/service-list" in result.output
    (query,) = source.queries
    assert query.variables == {"id": "mygraph", "graphVariant": "current"}


def test_non_federated_graph_shows_message_and_exits_zero(use_source):
    use_source(FakeSource(result=NonFederatedImplementingService()))

    result = runner.invoke(app, ["service", "list", "-g", "mygraph", "--frontend", FRONTEND], env=ENV)

    assert result.exit_code == 0, result.output
    assert "This graph is not federated" in result.output
    assert "Last Updated" not in result.output


def test_missing_graph_id_fails_before_fetching(use_source):
    source = use_source(FakeSource())

    result = runner.invoke(app, ["service", "list"], env=ENV)

    assert result.exit_code == 1
    assert "No graph id found" in result.output
    assert source.queries == []


def test_fetch_error_exits_non_zero_without_table(use_source):
    use_source(FakeSource(error=RemoteServiceError("Unauthorized")))

    result = runner.invoke(app, ["service", "list", "-g", "mygraph"], env=ENV)

    assert result.exit_code == 1
    assert "Unauthorized" in result.output
    assert "Last Updated" not in result.output
    assert "View full details" not in result.output


def test_tag_flag_overrides_configured_variant(use_source):
    source = use_source(FakeSource(result=NonFederatedImplementingService()))
    env = {**ENV, "GRAPHCTL_GRAPH_ID": "configured", "GRAPHCTL_GRAPH_VARIANT": "staging"}

    runner.invoke(app, ["service", "list"], env=env)
    runner.invoke(app, ["service", "list", "--tag", "prod"], env=env)

    assert [(q.graph_id, q.graph_variant) for q in source.queries] == [
        ("configured", "staging"),
        ("configured", "prod"),
    ]


def test_error_text_with_brackets_is_printed_verbatim(use_source):
    message = "Unexpected payload [type=union_tag_invalid, input_type=dict] [/x]"
    use_source(FakeSource(error=RemoteServiceError(message)))

    result = runner.invoke(app, ["service", "list", "-g", "mygraph"], env=ENV)

    assert result.exit_code == 1
    assert f"Error: {message}" in result.output


def test_invalid_endpoint_flag_is_rejected_before_fetching(use_source):
    source = use_source(FakeSource())

    result = runner.invoke(app, ["service", "list", "-g", "mygraph", "--endpoint", "x"], env=ENV)

    assert result.exit_code == 2
    assert source.queries == []


def test_invalid_log_level_is_a_usage_error(use_source):
    source = use_source(FakeSource())

    result = runner.invoke(
        app, ["service", "list", "-g", "mygraph"], env={**ENV, "GRAPHCTL_LOG_LEVEL": "verbose"}
    )

    assert result.exit_code == 2
    assert source.queries == []
