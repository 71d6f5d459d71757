"""Command for checking uniqueness validations against unique indexes."""

import typer
from sqlalchemy.exc import SQLAlchemyError

from uqcheck.cli.common.context import build_schema_context, load_rules_or_exit
from uqcheck.cli.common.exits import (
    EXIT_FINDINGS,
    EXIT_USAGE,
    die,
    exit_from_exc,
    ok_exit,
    warn_exit,
)
from uqcheck.cli.common.options import (
    DatabaseUrlOpt,
    FormatOpt,
    IgnoreRuleOpt,
    IgnoreTableOpt,
    ParallelOpt,
    RulesOpt,
    SchemaOpt,
    SelectOpt,
    TableOpt,
)
from uqcheck.cli.common.output import out
from uqcheck.cli.common.selector_builder import build_ignore_selector
from uqcheck.cli.tui import select_tables
from uqcheck.core.check import run_check
from uqcheck.core.models import normalize_column
from uqcheck.core.report import render_report, report_to_dict
from uqcheck.core.schema import UnknownTableError
from uqcheck.core.selectors import filter_rules

FORMATS = ("text", "table", "json")


def check(
    database_url: str = DatabaseUrlOpt,
    rules: str = RulesOpt,
    schema: str | None = SchemaOpt,
    table: list[str] = TableOpt,
    ignore_table: list[str] = IgnoreTableOpt,
    ignore: list[str] = IgnoreRuleOpt,
    parallel: int = ParallelOpt,
    output_format: str = FormatOpt,
    select: bool = SelectOpt,
):
    """
    Report uniqueness validations that no unique index backs.
    """
    if output_format not in FORMATS:
        die(f"Unknown format '{output_format}' (choose from {', '.join(FORMATS)})")
    if parallel < 1:
        die("--parallel must be >= 1")

    try:
        ignore_selector = build_ignore_selector(
            ignore_tables=ignore_table, ignore_rules=ignore
        )
    except ValueError as e:
        die(str(e))

    rule_catalog = filter_rules(load_rules_or_exit(rules), ignore_selector)
    appctx = build_schema_context(database_url, schema)

    try:
        tables = [normalize_column(t) for t in table] or rule_catalog.table_names()
    except ValueError as e:
        die(f"Invalid --table: {e}")

    try:
        known_tables = set(appctx.adapter.table_names())
    except SQLAlchemyError as exc:
        exit_from_exc(exc, message=f"Cannot read the database schema: {exc}", code=1)
    for name in tables:
        if name not in known_tables:
            die(str(UnknownTableError(name)))

    if select:
        tables = select_tables({t: len(rule_catalog.rules_for(t)) for t in tables})
        if not tables:
            warn_exit("No tables selected")

    if not any(rule_catalog.rules_for(t) for t in tables):
        warn_exit("No uniqueness validations to check")

    try:
        with out.status("Checking uniqueness validations..."):
            result = run_check(
                appctx.adapter, rule_catalog, tables=tables, max_parallel=parallel
            )
    except UnknownTableError as exc:
        exit_from_exc(exc, message=str(exc), code=EXIT_USAGE)
    except SQLAlchemyError as exc:
        exit_from_exc(exc, message=f"Cannot read the database schema: {exc}", code=1)

    if output_format == "json":
        out.json(
            {
                "violations": report_to_dict(result.report),
                "diagnostics": [
                    {
                        "table": d.table,
                        "columns": list(d.rule.display_columns),
                        "error": d.error,
                    }
                    for d in result.diagnostics
                ],
                "counts": result.counts(),
            }
        )
    elif output_format == "table":
        if result.report:
            out.violations_table(result.report)
    else:
        out.report(render_report(result.report))

    if result.diagnostics:
        out.warn(f"{len(result.diagnostics)} rule(s) could not be checked")
        out.diagnostics_table(result.diagnostics)

    if result.ok:
        ok_exit("All uniqueness validations are backed by unique indexes")

    raise typer.Exit(EXIT_FINDINGS)
