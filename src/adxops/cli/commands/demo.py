"""Commands for running the cluster/database lifecycle demo."""

from dataclasses import replace

import typer

from adxops.cli.common.context import build_kusto_context, load_config_or_exit
from adxops.cli.common.exits import exit_from_exc, ok_exit, warn_exit
from adxops.cli.common.options import (
    CapacityOpt,
    ConfirmOpt,
    DryRunOpt,
    PollIntervalOpt,
    RetriesOpt,
    RetryBackoffOpt,
    SkuOpt,
    StrictOpt,
    TierOpt,
    TimeoutOpt,
)
from adxops.cli.common.output import out
from adxops.core.config import DemoConfig
from adxops.core.errors import StepError
from adxops.core.lifecycle import LifecycleRunner
from adxops.core.operations import PollSettings, RetryPolicy

app = typer.Typer(
    help="Run the Azure Data Explorer lifecycle demo",
    no_args_is_help=True,
)


def _poll_settings(
    poll_interval: float, retries: int, retry_backoff: float, timeout: float | None
) -> PollSettings:
    retry = (
        RetryPolicy(max_attempts=retries, initial_backoff=retry_backoff)
        if retries > 0
        else None
    )
    return PollSettings(poll_interval=poll_interval, retry=retry, timeout=timeout)


def _print_plan(config: DemoConfig) -> None:
    out.header("Lifecycle plan")
    out.kv(
        {
            "Subscription": config.subscription_id,
            "Resource group": config.resource_group,
            "Location": config.location,
            "Cluster": config.cluster_name,
            "SKU": f"{config.sku_name} ({config.sku_tier}, {config.capacity} instance(s))",
            "Database": config.database_name,
        }
    )


@app.command()
def run(
    poll_interval: float = PollIntervalOpt,
    retries: int = RetriesOpt,
    retry_backoff: float = RetryBackoffOpt,
    timeout: float | None = TimeoutOpt,
    sku: str | None = SkuOpt,
    tier: str | None = TierOpt,
    capacity: int | None = CapacityOpt,
    confirm: bool = ConfirmOpt,
    dry_run: bool = DryRunOpt,
    strict: bool = StrictOpt,
):
    """
    Create a cluster and database, list both, then delete them again.
    """
    config = load_config_or_exit()

    overrides = {
        k: v
        for k, v in {"sku_name": sku, "sku_tier": tier, "capacity": capacity}.items()
        if v is not None
    }
    if overrides:
        config = replace(config, **overrides)

    _print_plan(config)

    if dry_run:
        warn_exit("Dry-run enabled: no resources were created", code=0)

    if confirm and not out.confirm("Create and then delete these resources?"):
        ok_exit("Cancelled")

    appctx = build_kusto_context(config)
    runner = LifecycleRunner(
        appctx.adapter,
        config,
        out,
        polling=_poll_settings(poll_interval, retries, retry_backoff, timeout),
    )

    try:
        report = runner.run()
    except StepError as exc:
        exit_from_exc(exc)

    if not report.deletions_ok:
        warn_exit(
            "Lifecycle finished, but a deletion reported a non-success status",
            code=1 if strict else 0,
        )

    out.success("Lifecycle demo completed")
