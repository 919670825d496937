"""CLI application for Azure Data Explorer operations tooling."""

import typer

from adxops.cli.commands.clusters import app as clusters_app
from adxops.cli.commands.demo import app as demo_app

app = typer.Typer(
    help="adxops - Azure Data Explorer cluster lifecycle tooling",
    no_args_is_help=True,
)

app.add_typer(demo_app, name="demo", help="Create, list and delete a demo cluster and database.")
app.add_typer(clusters_app, name="clusters", help="List clusters and their databases.")


if __name__ == "__main__":
    app()
