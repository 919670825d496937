from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

from adxops.cli import cli
from adxops.cli.commands import clusters, demo
from adxops.cli.common import context
from adxops.cli.common.output import Out
from adxops.core.errors import RequestError
from adxops.core.kusto import Cluster, Database, DeleteResult
from adxops.core.operations import PollResult

runner = CliRunner()


class _Done:
    def __init__(self, value):
        self.value = value

    def poll(self) -> PollResult:
        return PollResult.succeeded(self.value)


class _Failed:
    def poll(self) -> PollResult:
        return PollResult.failed(RuntimeError("quota exceeded"))


class _Adapter:
    def __init__(self, *, create_cluster=None, delete_status: int = 200):
        self.calls: list[str] = []
        self._create_cluster = create_cluster
        self._delete_status = delete_status

    def begin_create_cluster(self, resource_group, spec):
        self.calls.append("begin_create_cluster")
        return self._create_cluster or _Done(Cluster(name=spec.name, state="Running"))

    def list_clusters(self, resource_group):
        self.calls.append("list_clusters")
        return iter([Cluster(name="devADXTestCluster", state="Running", capacity=1)])

    def begin_create_database(self, resource_group, spec):
        self.calls.append("begin_create_database")
        return _Done(Database(name=spec.name, kind="ReadWrite"))

    def list_databases(self, resource_group, cluster_name):
        self.calls.append("list_databases")
        return iter([Database(name="db", kind="ReadWrite")])

    def begin_delete_database(self, resource_group, cluster_name, database_name):
        self.calls.append("begin_delete_database")
        return _Done(DeleteResult(database_name, status_code=self._delete_status))

    def begin_delete_cluster(self, resource_group, cluster_name):
        self.calls.append("begin_delete_cluster")
        return _Done(DeleteResult(cluster_name, status_code=200))


@pytest.fixture
def no_client(monkeypatch):
    """Fail the test if a management client is ever built."""
    built: list[object] = []

    def _get_client(config, credential=None):
        built.append(config)
        raise AssertionError("management client must not be created")

    monkeypatch.setattr(context, "get_client", _get_client)
    return built


def _use_adapter(monkeypatch, adapter: _Adapter) -> None:
    monkeypatch.setattr(
        demo,
        "build_kusto_context",
        lambda config: SimpleNamespace(config=config, adapter=adapter),
    )


@pytest.mark.parametrize(
    "missing",
    [
        "SUBSCRIPTION",
        "RESOURCE_GROUP",
        "LOCATION",
        "CLUSTER_NAME_PREFIX",
        "DATABASE_NAME_PREFIX",
    ],
)
def test_demo_run_exits_before_any_remote_call_when_config_is_missing(
    demo_env, monkeypatch, no_client, missing
):
    monkeypatch.delenv(missing)

    result = runner.invoke(cli.app, ["demo", "run"])

    assert result.exit_code == 1
    assert missing in result.output
    assert no_client == []


def test_demo_run_dry_run_prints_plan_only(demo_env, no_client):
    result = runner.invoke(cli.app, ["demo", "run", "--dry-run", "--capacity", "2"])

    assert result.exit_code == 0
    assert "demoADXTestCluster" in result.output
    assert "demoADXTestDB" in result.output
    assert "2 instance(s)" in result.output
    assert no_client == []


def test_demo_run_completes_full_cycle(demo_env, monkeypatch):
    adapter = _Adapter()
    _use_adapter(monkeypatch, adapter)

    result = runner.invoke(cli.app, ["demo", "run", "--poll-interval", "0"])

    assert result.exit_code == 0, result.output
    assert adapter.calls == [
        "begin_create_cluster",
        "list_clusters",
        "begin_create_database",
        "list_databases",
        "begin_delete_database",
        "begin_delete_cluster",
    ]
    assert "Lifecycle demo completed" in result.output


def test_demo_run_reports_failing_step_and_exits_non_zero(demo_env, monkeypatch):
    adapter = _Adapter(create_cluster=_Failed())
    _use_adapter(monkeypatch, adapter)

    result = runner.invoke(cli.app, ["demo", "run"])

    assert result.exit_code == 1
    assert "create cluster failed" in result.output
    assert adapter.calls == ["begin_create_cluster"]


@pytest.mark.parametrize("strict, code", [(False, 0), (True, 1)])
def test_demo_run_deletion_status_anomaly_respects_strict(
    demo_env, monkeypatch, strict, code
):
    _use_adapter(monkeypatch, _Adapter(delete_status=500))
    args = ["demo", "run"] + (["--strict"] if strict else [])

    result = runner.invoke(cli.app, args)

    assert result.exit_code == code
    assert "status code - 500" in result.output


def test_demo_run_declined_confirmation_builds_no_client(demo_env, monkeypatch, no_client):
    monkeypatch.setattr(Out, "confirm", lambda self, message, default=False: False)

    result = runner.invoke(cli.app, ["demo", "run", "--confirm"])

    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert no_client == []


def test_build_kusto_context_wraps_client_in_adapter(demo_env, monkeypatch):
    client = object()
    monkeypatch.setattr(context, "get_client", lambda config, credential=None: client)

    appctx = context.build_kusto_context(context.load_config_or_exit())

    assert appctx.adapter.client is client
    assert appctx.config.cluster_name == "demoADXTestCluster"


class _ListingAdapter:
    def __init__(self, *, error: Exception | None = None):
        self.calls: list[tuple] = []
        self._error = error

    def list_clusters(self, resource_group):
        self.calls.append(("list_clusters", resource_group))
        if self._error is not None:
            raise self._error
        return iter([Cluster(name="devc", state="Running", location="westeurope", capacity=2)])

    def list_databases(self, resource_group, cluster_name):
        self.calls.append(("list_databases", resource_group, cluster_name))
        if self._error is not None:
            raise self._error
        return iter(
            [
                Database(name="db_rw", kind="ReadWrite", provisioning_state="Succeeded"),
                Database(name="db_follow", kind="ReadOnlyFollowing"),
            ]
        )


def _use_listing_adapter(monkeypatch, adapter: _ListingAdapter) -> None:
    monkeypatch.setattr(
        clusters,
        "build_kusto_context",
        lambda config: SimpleNamespace(config=config, adapter=adapter),
    )


def test_clusters_list_renders_cluster_table(demo_env, monkeypatch):
    adapter = _ListingAdapter()
    _use_listing_adapter(monkeypatch, adapter)

    result = runner.invoke(cli.app, ["clusters", "list"])

    assert result.exit_code == 0, result.output
    assert adapter.calls == [("list_clusters", "rg-adx")]
    for text in ("Instance count", "devc", "Running", "2"):
        assert text in result.output


def test_clusters_databases_defaults_to_demo_cluster_and_keeps_read_write(
    demo_env, monkeypatch
):
    adapter = _ListingAdapter()
    _use_listing_adapter(monkeypatch, adapter)

    result = runner.invoke(cli.app, ["clusters", "databases"])

    assert result.exit_code == 0, result.output
    assert adapter.calls == [("list_databases", "rg-adx", "demoADXTestCluster")]
    assert "db_rw" in result.output
    assert "db_follow" not in result.output


def test_clusters_databases_honours_cluster_option(demo_env, monkeypatch):
    adapter = _ListingAdapter()
    _use_listing_adapter(monkeypatch, adapter)

    result = runner.invoke(cli.app, ["clusters", "databases", "--cluster", "other"])

    assert result.exit_code == 0, result.output
    assert adapter.calls == [("list_databases", "rg-adx", "other")]


@pytest.mark.parametrize("command", [["clusters", "list"], ["clusters", "databases"]])
def test_clusters_commands_exit_non_zero_on_request_error(demo_env, monkeypatch, command):
    _use_listing_adapter(monkeypatch, _ListingAdapter(error=RequestError("throttled")))

    result = runner.invoke(cli.app, command)

    assert result.exit_code == 1
    assert "throttled" in result.output
