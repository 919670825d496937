"""Application context management for the CLI."""

from dataclasses import dataclass

from adxops.cli.common.exits import exit_from_exc
from adxops.core.adapters.kusto import KustoAdapter
from adxops.core.auth import AuthError, get_client
from adxops.core.config import DemoConfig, load_config
from adxops.core.errors import ConfigError


@dataclass
class KustoAppContext:
    """Application context holding configuration and the Kusto adapter."""

    config: DemoConfig
    adapter: KustoAdapter


def load_config_or_exit() -> DemoConfig:
    """Load configuration from the environment, exiting on missing values."""
    try:
        return load_config()
    except ConfigError as exc:
        exit_from_exc(exc)


def build_kusto_context(config: DemoConfig) -> KustoAppContext:
    """Build the Kusto management client and return the adapter context.

    Args:
        config: Configuration loaded at process entry.

    Returns:
        KustoAppContext: Application context with the configured adapter.
    """
    try:
        client = get_client(config)
    except AuthError as exc:
        exit_from_exc(exc)
    adapter = KustoAdapter(client)
    return KustoAppContext(config=config, adapter=adapter)
