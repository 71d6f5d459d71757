"""Common CLI options for the CLI."""

import typer

DatabaseUrlOpt = typer.Option(
    ...,
    "--database-url",
    "-d",
    envvar="UQCHECK_DATABASE_URL",
    help="SQLAlchemy database URL of the schema to inspect",
)

SchemaOpt = typer.Option(
    None,
    "--schema",
    "-s",
    help="Database schema to inspect (defaults to the connection's default)",
)

RulesOpt = typer.Option(
    ...,
    "--rules",
    "-r",
    envvar="UQCHECK_RULES",
    help="JSON file with the declared uniqueness validations",
)

TableOpt = typer.Option(
    [],
    "--table",
    "-t",
    help="Only check this table. This is reusable.",
    show_default=False,
)

IgnoreTableOpt = typer.Option(
    [],
    "--ignore-table",
    help="Regex on table name; matching tables are not checked. This is reusable.",
    show_default=False,
)

IgnoreRuleOpt = typer.Option(
    [],
    "--ignore",
    help="Ignore one rule (table:col_a,col_b). This is reusable.",
    show_default=False,
)

ParallelOpt = typer.Option(
    1,
    "--parallel",
    "-n",
    help="Number of rules to verify in parallel",
)

FormatOpt = typer.Option(
    "text",
    "--format",
    "-f",
    help="Output format: text, table or json",
)

SelectOpt = typer.Option(
    False,
    "--select",
    help="Pick the tables to check from an interactive list",
)
