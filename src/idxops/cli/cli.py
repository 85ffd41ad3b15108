"""CLI application for index source inspection."""

import typer

from idxops.cli.commands.sources import source_app
from idxops.cli.common.log_setup import configure_logging
from idxops.cli.common.options import VerboseOpt

app = typer.Typer(
    help="idxops - index operations tooling",
    no_args_is_help=True,
)


@app.callback()
def _main(verbose: bool = VerboseOpt):
    configure_logging(verbose)


app.add_typer(source_app, name="source", help="Describe / list the sources of an index.")


if __name__ == "__main__":
    app()
