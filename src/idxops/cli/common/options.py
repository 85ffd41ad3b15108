"""Common CLI options for the CLI."""

import typer

MetastoreUriOpt = typer.Option(
    ...,
    "--metastore-uri",
    help="Metastore URI (file:///path, http://host:port) or a local directory",
    show_default=False,
)

IndexIdOpt = typer.Option(
    ...,
    "--index-id",
    help="ID of the target index",
    show_default=False,
)

SourceIdOpt = typer.Option(
    ...,
    "--source-id",
    help="ID of the source to describe",
    show_default=False,
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Log metastore access details to stderr",
)
