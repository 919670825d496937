"""Common CLI options for the CLI."""

import typer

PollIntervalOpt = typer.Option(
    5.0,
    "--poll-interval",
    envvar="ADXOPS_POLL_INTERVAL",
    min=0.0,
    help="Seconds between polls of a long-running operation",
)

RetriesOpt = typer.Option(
    0,
    "--retries",
    envvar="ADXOPS_POLL_RETRIES",
    min=0,
    help="Retry transient polling errors this many times (0 disables retry)",
)

RetryBackoffOpt = typer.Option(
    2.0,
    "--retry-backoff",
    envvar="ADXOPS_POLL_BACKOFF",
    min=0.0,
    help="Initial backoff in seconds between polling retries (doubles each retry)",
)

TimeoutOpt = typer.Option(
    None,
    "--timeout",
    envvar="ADXOPS_POLL_TIMEOUT",
    min=0.0,
    help="Give up waiting on an operation after this many seconds",
    show_default=False,
)

SkuOpt = typer.Option(
    None,
    "--sku",
    help="Cluster compute SKU [default: Dev(No SLA)_Standard_D11_v2]",
    show_default=False,
)

TierOpt = typer.Option(
    None,
    "--tier",
    help="Cluster pricing tier [default: Basic]",
    show_default=False,
)

CapacityOpt = typer.Option(
    None,
    "--capacity",
    min=1,
    help="Cluster instance count [default: 1]",
    show_default=False,
)

ClusterOpt = typer.Option(
    None,
    "--cluster",
    "-c",
    help="Cluster name (defaults to CLUSTER_NAME_PREFIX + ADXTestCluster)",
    show_default=False,
)

ConfirmOpt = typer.Option(
    False,
    "--confirm/--no-confirm",
    help="Ask for confirmation before creating resources",
)

DryRunOpt = typer.Option(
    False,
    "--dry-run",
    help="Show what would be created and deleted, but don't call Azure",
)

StrictOpt = typer.Option(
    False,
    "--strict",
    help="Exit non-zero when a deletion reports a non-success status",
)
