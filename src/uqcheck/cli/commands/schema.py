"""Commands for inspecting the database schema."""

import re

import typer

from uqcheck.cli.common.context import SchemaAppContext, build_schema_context
from uqcheck.cli.common.exits import die, warn_exit
from uqcheck.cli.common.options import DatabaseUrlOpt, SchemaOpt
from uqcheck.cli.common.output import out

schema_app = typer.Typer(
    help="Inspect tables and indexes.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@schema_app.callback()
def _init(
    ctx: typer.Context,
    database_url: str = DatabaseUrlOpt,
    schema: str | None = SchemaOpt,
):
    """Initialize schema context."""
    ctx.obj = build_schema_context(database_url, schema)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@schema_app.command("indexes-list")
def indexes_list(
    ctx: typer.Context,
    name: str | None = typer.Option(
        None, "--name", help="Regex filter for table names"
    ),
    unique_only: bool = typer.Option(
        False, "--unique-only", help="Only show unique indexes"
    ),
):
    """List tables with their indexes, unique constraints and primary key."""
    appctx: SchemaAppContext = ctx.obj
    adapter = appctx.adapter

    try:
        name_rx = re.compile(name) if name else None
    except re.error as exc:
        die(f"Invalid regex for --name: {exc}")

    with out.status("Loading indexes..."):
        tables = [t for t in adapter.table_names() if not name_rx or name_rx.search(t)]
        indexes = {t: adapter.indexes_for(t) for t in tables}

    if not tables:
        warn_exit("No tables found.")

    out.header("Indexes")
    out.info(f"Tables: {len(tables)}")
    for table in tables:
        shown = [ix for ix in indexes[table] if ix.is_unique or not unique_only]
        out.indexes_table(table, shown)
