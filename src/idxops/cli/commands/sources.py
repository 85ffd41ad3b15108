"""Commands for inspecting the sources of an index."""

import asyncio

import typer

from idxops.cli.common.context import SourceAppContext, build_source_context
from idxops.cli.common.exits import exit_from_exc
from idxops.cli.common.options import IndexIdOpt, MetastoreUriOpt, SourceIdOpt
from idxops.cli.common.output import out
from idxops.core.commands import (
    INDEX_ID,
    METASTORE_URI,
    SOURCE_ID,
    parse_cli_args,
)
from idxops.core.errors import ArgumentError, SourceCliError
from idxops.core.sources import execute

source_app = typer.Typer(
    help="Inspect the sources of an index.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@source_app.callback()
def _init(ctx: typer.Context):
    """Initialize source commands context."""
    ctx.obj = build_source_context()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def _run(ctx: typer.Context, subcommand: str, matches: dict[str, str | None]) -> None:
    """Parse raw arguments, then execute the command against the metastore."""
    appctx: SourceAppContext = ctx.obj

    try:
        command = parse_cli_args(subcommand, matches)
    except ArgumentError as exc:
        exit_from_exc(exc, message=str(exc), code=2)

    try:
        asyncio.run(execute(command, resolver=appctx.resolver, renderer=out))
    except SourceCliError as exc:
        exit_from_exc(exc, message=str(exc), code=1)


@source_app.command("describe")
def describe(
    ctx: typer.Context,
    metastore_uri: str = MetastoreUriOpt,
    index_id: str = IndexIdOpt,
    source_id: str = SourceIdOpt,
):
    """
    Describe a source: its type, parameters and checkpoint.
    """
    _run(
        ctx,
        "describe",
        {METASTORE_URI: metastore_uri, INDEX_ID: index_id, SOURCE_ID: source_id},
    )


@source_app.command("list")
def list_(
    ctx: typer.Context,
    metastore_uri: str = MetastoreUriOpt,
    index_id: str = IndexIdOpt,
):
    """
    List the sources of an index.
    """
    _run(ctx, "list", {METASTORE_URI: metastore_uri, INDEX_ID: index_id})
