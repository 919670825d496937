"""Run configuration loaded from the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from adxops.core.errors import ConfigError

CLUSTER_NAME_SUFFIX = "ADXTestCluster"
DATABASE_NAME_SUFFIX = "ADXTestDB"

DEFAULT_SKU_NAME = "Dev(No SLA)_Standard_D11_v2"
DEFAULT_SKU_TIER = "Basic"
DEFAULT_CAPACITY = 1

# field -> (primary variable, aliases...)
_ENV_VARS: dict[str, tuple[str, ...]] = {
    "subscription_id": ("SUBSCRIPTION", "AZURE_SUBSCRIPTION_ID"),
    "resource_group": ("RESOURCE_GROUP", "AZURE_RESOURCE_GROUP"),
    "location": ("LOCATION", "AZURE_LOCATION"),
    "cluster_name_prefix": ("CLUSTER_NAME_PREFIX",),
    "database_name_prefix": ("DATABASE_NAME_PREFIX",),
}


@dataclass(frozen=True)
class DemoConfig:
    """
    Immutable configuration for one lifecycle run.

    Attributes:
        subscription_id: Azure subscription that owns the resource group.
        resource_group: Resource group the cluster is created in.
        location: Azure region for the cluster and database.
        cluster_name_prefix: Prefix prepended to the fixed cluster name.
        database_name_prefix: Prefix prepended to the fixed database name.
        sku_name: Compute SKU for the cluster.
        sku_tier: Pricing tier for the cluster.
        capacity: Number of cluster instances.
    """

    subscription_id: str
    resource_group: str
    location: str
    cluster_name_prefix: str
    database_name_prefix: str
    sku_name: str = DEFAULT_SKU_NAME
    sku_tier: str = DEFAULT_SKU_TIER
    capacity: int = DEFAULT_CAPACITY

    @property
    def cluster_name(self) -> str:
        return f"{self.cluster_name_prefix}{CLUSTER_NAME_SUFFIX}"

    @property
    def database_name(self) -> str:
        return f"{self.database_name_prefix}{DATABASE_NAME_SUFFIX}"


def _lookup(environ: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    """Return the first non-blank value among names, or None."""
    for name in names:
        value = (environ.get(name) or "").strip()
        if value:
            return value
    return None


def _describe(names: tuple[str, ...]) -> str:
    primary, *aliases = names
    if not aliases:
        return primary
    return f"{primary} (or {', '.join(aliases)})"


def load_config(environ: Mapping[str, str] | None = None) -> DemoConfig:
    """
    Build a DemoConfig from environment variables.

    Every variable is required. Blank values are treated as missing.
    All missing variables are reported together in one ConfigError.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        DemoConfig populated from the environment.
    """
    env = os.environ if environ is None else environ

    values: dict[str, str] = {}
    missing: list[str] = []
    for field, names in _ENV_VARS.items():
        value = _lookup(env, names)
        if value is None:
            missing.append(_describe(names))
        else:
            values[field] = value

    if missing:
        raise ConfigError(f"missing environment variable(s): {', '.join(missing)}")

    return DemoConfig(**values)
