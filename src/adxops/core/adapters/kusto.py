from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ServiceRequestError,
    ServiceResponseError,
)
from azure.core.polling import LROPoller
from azure.mgmt.kusto import KustoManagementClient
from azure.mgmt.kusto.models import AzureSku
from azure.mgmt.kusto.models import Cluster as KustoCluster
from azure.mgmt.kusto.models import ReadWriteDatabase

from adxops.core.auth import AuthError, format_auth_error
from adxops.core.errors import PollTransportError, RequestError
from adxops.core.kusto import (
    Cluster,
    ClusterSpec,
    Database,
    DatabaseKind,
    DatabaseSpec,
    DeleteResult,
)
from adxops.core.operations import PollResult
from adxops.core.paging import iter_pages

_TRANSPORT_ERRORS = (ServiceRequestError, ServiceResponseError)


def _text(value: Any) -> str | None:
    """Return the plain string of an SDK enum or value."""
    if value is None:
        return None
    return str(getattr(value, "value", value))


def _status_code(pipeline_response, deserialized, headers) -> int:
    """`cls=` hook that makes a deletion poller return the final HTTP status."""
    return pipeline_response.http_response.status_code


@contextmanager
def _translate_errors(action: str):
    """Map Azure SDK errors raised by a request into the adxops taxonomy."""
    try:
        yield
    except ClientAuthenticationError as exc:
        raise AuthError(format_auth_error(str(exc))) from exc
    except _TRANSPORT_ERRORS as exc:
        raise RequestError(f"failed to {action}: {exc}") from exc
    except HttpResponseError as exc:
        raise RequestError(f"failed to {action}: {exc.message or exc}") from exc


class AzureOperation:
    """Operation handle backed by an azure-core LROPoller."""

    def __init__(
        self,
        poller: LROPoller,
        convert: Callable[[Any], Any] = lambda value: value,
        resume: Callable[[str], LROPoller] | None = None,
    ):
        """
        Args:
            poller: Poller returned by a `begin_*` SDK call.
            convert: Maps the poller's final result to a domain object.
            resume: Rebuilds a poller from a continuation token after a
                transport failure. Without it, the failure is final.
        """
        self._poller: LROPoller | None = poller
        self._convert = convert
        self._resume = resume
        self._token = poller.continuation_token() if resume else None

    def poll(self) -> PollResult:
        """Observe the poller once without blocking."""
        if self._poller is None:
            try:
                self._poller = self._resume(self._token)
            except _TRANSPORT_ERRORS as exc:
                raise PollTransportError(str(exc)) from exc

        if not self._poller.done():
            return PollResult.pending()

        try:
            value = self._poller.result()
        except _TRANSPORT_ERRORS as exc:
            if self._resume is not None:
                self._poller = None
            raise PollTransportError(str(exc)) from exc
        except HttpResponseError as exc:
            return PollResult.failed(exc)

        return PollResult.succeeded(self._convert(value))


def cluster_from_sdk(c: Any) -> Cluster:
    """Convert an SDK Cluster into a domain Cluster."""
    sku = getattr(c, "sku", None)
    return Cluster(
        name=c.name,
        location=getattr(c, "location", None),
        state=_text(getattr(c, "state", None)),
        provisioning_state=_text(getattr(c, "provisioning_state", None)),
        capacity=getattr(sku, "capacity", None),
        sku_name=_text(getattr(sku, "name", None)),
        tier=_text(getattr(sku, "tier", None)),
        uri=getattr(c, "uri", None),
        id=getattr(c, "id", None),
    )


def database_from_sdk(db: Any) -> Database:
    """Convert an SDK Database (any kind) into a domain Database."""
    return Database(
        name=db.name,
        kind=_text(getattr(db, "kind", None)),
        location=getattr(db, "location", None),
        provisioning_state=_text(getattr(db, "provisioning_state", None)),
        type=getattr(db, "type", None),
        id=getattr(db, "id", None),
    )


class KustoAdapter:
    """Adapter around the Azure SDK Kusto management APIs (clusters/databases)."""

    def __init__(self, client: KustoManagementClient) -> None:
        self.client = client

    def begin_create_cluster(self, resource_group: str, spec: ClusterSpec) -> AzureOperation:
        """Submit a cluster create-or-update request."""
        parameters = KustoCluster(
            location=spec.location,
            sku=AzureSku(name=spec.sku_name, tier=spec.tier, capacity=spec.capacity),
        )

        def begin(**kwargs) -> LROPoller:
            return self.client.clusters.begin_create_or_update(
                resource_group, spec.name, parameters, **kwargs
            )

        with _translate_errors(f"start creation of cluster {spec.name}"):
            poller = begin()
            return AzureOperation(
                poller,
                convert=cluster_from_sdk,
                resume=lambda token: begin(continuation_token=token),
            )

    def list_clusters(self, resource_group: str) -> Iterator[Cluster]:
        """Lazily list clusters in a resource group across all pages."""
        with _translate_errors(f"list clusters in resource group {resource_group}"):
            pager = self.client.clusters.list_by_resource_group(resource_group)
            for c in iter_pages(pager.by_page()):
                yield cluster_from_sdk(c)

    def begin_create_database(self, resource_group: str, spec: DatabaseSpec) -> AzureOperation:
        """Submit a read-write database create-or-update request."""
        parameters = ReadWriteDatabase(
            location=spec.location, kind=DatabaseKind.READ_WRITE.value
        )

        def begin(**kwargs) -> LROPoller:
            return self.client.databases.begin_create_or_update(
                resource_group, spec.cluster_name, spec.name, parameters, **kwargs
            )

        with _translate_errors(f"start creation of database {spec.name}"):
            poller = begin()
            return AzureOperation(
                poller,
                convert=database_from_sdk,
                resume=lambda token: begin(continuation_token=token),
            )

    def list_databases(self, resource_group: str, cluster_name: str) -> Iterator[Database]:
        """Lazily list databases (all kinds) in a cluster across all pages."""
        with _translate_errors(f"list databases in cluster {cluster_name}"):
            pager = self.client.databases.list_by_cluster(resource_group, cluster_name)
            for db in iter_pages(pager.by_page()):
                yield database_from_sdk(db)

    def begin_delete_database(
        self, resource_group: str, cluster_name: str, database_name: str
    ) -> AzureOperation:
        """Submit a database deletion request."""

        def begin(**kwargs) -> LROPoller:
            return self.client.databases.begin_delete(
                resource_group, cluster_name, database_name, cls=_status_code, **kwargs
            )

        with _translate_errors(f"start deletion of database {database_name}"):
            poller = begin()
            return AzureOperation(
                poller,
                convert=lambda status: DeleteResult(name=database_name, status_code=status),
                resume=lambda token: begin(continuation_token=token),
            )

    def begin_delete_cluster(self, resource_group: str, cluster_name: str) -> AzureOperation:
        """Submit a cluster deletion request."""

        def begin(**kwargs) -> LROPoller:
            return self.client.clusters.begin_delete(
                resource_group, cluster_name, cls=_status_code, **kwargs
            )

        with _translate_errors(f"start deletion of cluster {cluster_name}"):
            poller = begin()
            return AzureOperation(
                poller,
                convert=lambda status: DeleteResult(name=cluster_name, status_code=status),
                resume=lambda token: begin(continuation_token=token),
            )
