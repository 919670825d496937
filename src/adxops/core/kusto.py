"""Core domain models for Azure Data Explorer (Kusto) resources.

These models represent clusters and databases in a simple, immutable form.
They are intentionally free of Azure SDK types and UI/CLI concerns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from adxops.core.config import DEFAULT_CAPACITY, DEFAULT_SKU_NAME, DEFAULT_SKU_TIER

# Final deletion statuses that mean the resource is gone.
DELETE_SUCCESS_STATUS_CODES = frozenset({200, 204})


class DatabaseKind(str, Enum):
    """
    Kinds of Kusto databases.

    Values:
        READ_WRITE: A regular database owned by the cluster.
        READ_ONLY_FOLLOWING: A database attached from a leader cluster.
    """

    READ_WRITE = "ReadWrite"
    READ_ONLY_FOLLOWING = "ReadOnlyFollowing"


@dataclass(frozen=True)
class Cluster:
    """Lightweight representation of a Kusto cluster."""

    name: str
    location: str | None = None
    state: str | None = None
    provisioning_state: str | None = None
    capacity: int | None = None
    sku_name: str | None = None
    tier: str | None = None
    uri: str | None = None
    id: str | None = None


@dataclass(frozen=True)
class Database:
    """Lightweight representation of a Kusto database."""

    name: str
    kind: str | None = None
    location: str | None = None
    provisioning_state: str | None = None
    type: str | None = None
    id: str | None = None

    @property
    def is_read_write(self) -> bool:
        return self.kind == DatabaseKind.READ_WRITE


@dataclass(frozen=True)
class ClusterSpec:
    """Desired attributes of a cluster to create."""

    name: str
    location: str
    sku_name: str = DEFAULT_SKU_NAME
    tier: str = DEFAULT_SKU_TIER
    capacity: int = DEFAULT_CAPACITY


@dataclass(frozen=True)
class DatabaseSpec:
    """Desired attributes of a read-write database to create."""

    name: str
    cluster_name: str
    location: str


@dataclass(frozen=True)
class DeleteResult:
    """
    Outcome of a completed deletion.

    Attributes:
        name: Name of the deleted resource.
        status_code: Final HTTP status reported by the operation, or None
            when the SDK did not expose one.
    """

    name: str
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.status_code is None or self.status_code in DELETE_SUCCESS_STATUS_CODES
