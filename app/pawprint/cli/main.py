"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from pawprint import __version__
from pawprint.cli.commands import apply, init, show
from pawprint.utils.formatting import setup_logging

app = typer.Typer(
    name="pawprint",
    help="Create, clean and remove temporary and runtime files from rule files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pawprint version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every action, including skipped rules.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress warnings and result tables.",
        ),
    ] = False,
) -> None:
    """pawprint - declarative temporary file management.

    Rules describe which files and directories should exist, how they
    are owned, and when their contents expire.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="apply")(apply.apply_rules)
app.command(name="show")(show.show_rules)
app.command(name="init")(init.init_settings)


if __name__ == "__main__":
    app()
