"""CLI application for uniqueness validation checks."""

import typer

from uqcheck.cli.commands.check import check
from uqcheck.cli.commands.schema import schema_app

app = typer.Typer(
    help="uqcheck - find uniqueness validations not backed by a unique index",
    no_args_is_help=True,
)

app.command("check")(check)
app.add_typer(schema_app, name="schema")


if __name__ == "__main__":
    app()
