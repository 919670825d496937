"""Resource-lifecycle orchestration for a Kusto cluster and one database.

This module drives one full demo cycle against the management plane:
create cluster, list clusters, create database, list databases, delete
database, delete cluster. Steps run strictly in sequence and each mutating
step blocks until its long-running operation reaches a terminal state.

It is intentionally free of CLI concerns. Progress is reported through a
`LifecycleReporter` (the CLI passes its shared `out` object) and every
failure is raised as a `StepError` naming the step, so a single top-level
handler decides how to exit.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ContextManager, Iterable, Iterator, Protocol

from adxops.core.config import DemoConfig
from adxops.core.errors import AdxOpsError, StepError
from adxops.core.kusto import (
    Cluster,
    ClusterSpec,
    Database,
    DatabaseSpec,
    DeleteResult,
)
from adxops.core.operations import Operation, PollSettings, wait_for_operation


class Step(str, Enum):
    """The steps of a lifecycle run, in execution order."""

    CREATE_CLUSTER = "create cluster"
    LIST_CLUSTERS = "list clusters"
    CREATE_DATABASE = "create database"
    LIST_DATABASES = "list databases"
    DELETE_DATABASE = "delete database"
    DELETE_CLUSTER = "delete cluster"


class LifecycleAdapter(Protocol):
    """Interface for the management operations used by the orchestrator."""

    def begin_create_cluster(self, resource_group: str, spec: ClusterSpec) -> Operation:
        """Submit a cluster creation and return its operation handle."""
        ...

    def list_clusters(self, resource_group: str) -> Iterable[Cluster]:
        """Return all clusters in the resource group."""
        ...

    def begin_create_database(self, resource_group: str, spec: DatabaseSpec) -> Operation:
        """Submit a database creation and return its operation handle."""
        ...

    def list_databases(self, resource_group: str, cluster_name: str) -> Iterable[Database]:
        """Return all databases (any kind) in the cluster."""
        ...

    def begin_delete_database(
        self, resource_group: str, cluster_name: str, database_name: str
    ) -> Operation:
        """Submit a database deletion and return its operation handle."""
        ...

    def begin_delete_cluster(self, resource_group: str, cluster_name: str) -> Operation:
        """Submit a cluster deletion and return its operation handle."""
        ...


class LifecycleReporter(Protocol):
    """Sink for progress lines and result tables."""

    def info(self, msg: str) -> None: ...

    def success(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def status(self, msg: str) -> ContextManager[None]: ...

    def clusters_table(self, clusters: Iterable[Cluster], title: str = ...) -> None: ...

    def databases_table(self, databases: Iterable[Database], title: str = ...) -> None: ...


@dataclass
class LifecycleReport:
    """Outputs of a completed lifecycle run."""

    cluster: Cluster | None = None
    clusters: list[Cluster] = field(default_factory=list)
    database: Database | None = None
    databases: list[Database] = field(default_factory=list)
    database_deletion: DeleteResult | None = None
    cluster_deletion: DeleteResult | None = None

    @property
    def deletions_ok(self) -> bool:
        """True unless a deletion reported a non-success status."""
        return all(
            d is None or d.ok for d in (self.database_deletion, self.cluster_deletion)
        )


def cluster_spec_for(config: DemoConfig) -> ClusterSpec:
    """Return the cluster creation request described by the configuration."""
    return ClusterSpec(
        name=config.cluster_name,
        location=config.location,
        sku_name=config.sku_name,
        tier=config.sku_tier,
        capacity=config.capacity,
    )


def database_spec_for(config: DemoConfig) -> DatabaseSpec:
    """Return the database creation request described by the configuration."""
    return DatabaseSpec(
        name=config.database_name,
        cluster_name=config.cluster_name,
        location=config.location,
    )


def read_write_only(databases: Iterable[Database]) -> list[Database]:
    """Keep read-write databases; other kinds are skipped silently."""
    return [db for db in databases if db.is_read_write]


class LifecycleRunner:
    """Runs the create/list/delete cycle for one cluster and one database."""

    def __init__(
        self,
        adapter: LifecycleAdapter,
        config: DemoConfig,
        reporter: LifecycleReporter,
        *,
        polling: PollSettings = PollSettings(),
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.adapter = adapter
        self.config = config
        self.reporter = reporter
        self.polling = polling
        self._sleep = sleep
        self._clock = clock

    @contextmanager
    def _step(self, step: Step) -> Iterator[None]:
        try:
            yield
        except StepError:
            raise
        except AdxOpsError as exc:
            raise StepError(step, exc) from exc

    def _wait(self, operation: Operation, message: str):
        self.reporter.info(message)
        with self.reporter.status(message):
            return wait_for_operation(
                operation,
                poll_interval=self.polling.poll_interval,
                retry=self.polling.retry,
                timeout=self.polling.timeout,
                sleep=self._sleep,
                clock=self._clock,
            )

    def create_cluster(self) -> Cluster:
        """Create the cluster and block until it is provisioned."""
        spec = cluster_spec_for(self.config)
        with self._step(Step.CREATE_CLUSTER):
            operation = self.adapter.begin_create_cluster(self.config.resource_group, spec)
            cluster = self._wait(
                operation, f"waiting for cluster creation to complete - {spec.name}"
            )
        self.reporter.success(f"created cluster {cluster.name}")
        return cluster

    def list_clusters(self) -> list[Cluster]:
        """List and render all clusters in the resource group."""
        rg = self.config.resource_group
        self.reporter.info(f"listing clusters in resource group {rg}")
        with self._step(Step.LIST_CLUSTERS):
            clusters = list(self.adapter.list_clusters(rg))
        self.reporter.clusters_table(clusters, title=f"Clusters in {rg}")
        return clusters

    def create_database(self) -> Database:
        """Create the read-write database and block until it is provisioned."""
        spec = database_spec_for(self.config)
        with self._step(Step.CREATE_DATABASE):
            operation = self.adapter.begin_create_database(self.config.resource_group, spec)
            database = self._wait(
                operation, f"waiting for database creation to complete - {spec.name}"
            )
        self.reporter.success(
            f"created database {database.name} with ID {database.id} and type {database.type}"
        )
        return database

    def list_databases(self) -> list[Database]:
        """List and render the read-write databases in the cluster."""
        cluster_name = self.config.cluster_name
        self.reporter.info(f"listing databases in cluster {cluster_name}")
        with self._step(Step.LIST_DATABASES):
            databases = read_write_only(
                self.adapter.list_databases(self.config.resource_group, cluster_name)
            )
        self.reporter.databases_table(databases, title=f"Databases in {cluster_name}")
        return databases

    def delete_database(self) -> DeleteResult:
        """Delete the database; a non-success final status is only a warning."""
        cluster_name = self.config.cluster_name
        name = self.config.database_name
        with self._step(Step.DELETE_DATABASE):
            operation = self.adapter.begin_delete_database(
                self.config.resource_group, cluster_name, name
            )
            result = self._wait(
                operation, f"waiting for database deletion to complete - {name}"
            )
        if result.ok:
            self.reporter.success(f"deleted database {name} from cluster {cluster_name}")
        else:
            self.reporter.warn(
                f"failed to delete database {name}. response status code - {result.status_code}"
            )
        return result

    def delete_cluster(self) -> DeleteResult:
        """Delete the cluster; a non-success final status is only a warning."""
        rg = self.config.resource_group
        name = self.config.cluster_name
        with self._step(Step.DELETE_CLUSTER):
            operation = self.adapter.begin_delete_cluster(rg, name)
            result = self._wait(
                operation, f"waiting for cluster deletion to complete - {name}"
            )
        if result.ok:
            self.reporter.success(f"deleted cluster {name} from resource group {rg}")
        else:
            self.reporter.warn(
                f"failed to delete cluster {name}. response status code - {result.status_code}"
            )
        return result

    def run(self) -> LifecycleReport:
        """
        Run all six steps in order.

        Returns:
            LifecycleReport with the output of every step.

        Raises:
            StepError: On the first failing step; later steps do not run.
        """
        report = LifecycleReport()
        report.cluster = self.create_cluster()
        report.clusters = self.list_clusters()
        report.database = self.create_database()
        report.databases = self.list_databases()
        report.database_deletion = self.delete_database()
        report.cluster_deletion = self.delete_cluster()
        return report
