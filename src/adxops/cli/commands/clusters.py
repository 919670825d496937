"""Commands for inspecting Kusto clusters and their databases."""

import typer

from adxops.cli.common.context import (
    KustoAppContext,
    build_kusto_context,
    load_config_or_exit,
)
from adxops.cli.common.exits import exit_from_exc
from adxops.cli.common.options import ClusterOpt
from adxops.cli.common.output import out
from adxops.core.errors import AdxOpsError
from adxops.core.lifecycle import read_write_only

app = typer.Typer(
    help="Inspect Azure Data Explorer clusters",
    no_args_is_help=True,
)


@app.callback()
def _init(ctx: typer.Context):
    """Load configuration and build the Kusto client once per invocation."""
    ctx.obj = build_kusto_context(load_config_or_exit())


@app.command("list")
def list_(ctx: typer.Context):
    """
    List clusters in the configured resource group.
    """
    appctx: KustoAppContext = ctx.obj
    rg = appctx.config.resource_group

    try:
        with out.status("Loading clusters..."):
            clusters = list(appctx.adapter.list_clusters(rg))
    except AdxOpsError as exc:
        exit_from_exc(exc)

    out.clusters_table(clusters, title=f"Clusters in {rg}")


@app.command()
def databases(ctx: typer.Context, cluster: str | None = ClusterOpt):
    """
    List read-write databases in a cluster.
    """
    appctx: KustoAppContext = ctx.obj
    cluster_name = cluster or appctx.config.cluster_name

    try:
        with out.status("Loading databases..."):
            found = read_write_only(
                appctx.adapter.list_databases(appctx.config.resource_group, cluster_name)
            )
    except AdxOpsError as exc:
        exit_from_exc(exc)

    out.databases_table(found, title=f"Databases in {cluster_name}")
