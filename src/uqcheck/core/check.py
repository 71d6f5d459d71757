"""Orchestration of a single uniqueness check run.

A run takes both catalogs, makes sure every table that has rules exists in
the schema, verifies each (table, rule) pair and builds the report. It is
intentionally free of CLI concerns so it can be reused by scripts and
tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from uqcheck.core.models import (
    Diagnostic,
    Report,
    Satisfied,
    UniquenessRule,
    Unverifiable,
    VerificationOutcome,
    Violated,
    normalize_column,
)
from uqcheck.core.report import build_report
from uqcheck.core.rules import RuleCatalog
from uqcheck.core.schema import IndexCatalog, UnknownTableError
from uqcheck.core.verifier import verify_all


@dataclass(frozen=True)
class CheckResult:
    """
    Result of a check run.

    Attributes:
        report: Violated column sets grouped by table.
        outcomes: (table, rule, outcome) for every verified rule, in order.
        diagnostics: Rules whose check raised unexpectedly.
    """

    report: Report
    outcomes: tuple[tuple[str, UniquenessRule, VerificationOutcome], ...]
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        """True when nothing is violated and no rule failed to check."""
        return not self.report and not self.diagnostics

    def counts(self) -> dict[str, int]:
        """Return the number of rules per outcome kind."""
        counts = {"satisfied": 0, "violated": 0, "unverifiable": 0, "errored": 0}
        for _, _, outcome in self.outcomes:
            if isinstance(outcome, Satisfied):
                counts["satisfied"] += 1
            elif isinstance(outcome, Violated):
                counts["violated"] += 1
            elif isinstance(outcome, Unverifiable):
                counts["unverifiable"] += 1
        counts["errored"] = len(self.diagnostics)
        return counts


def _ensure_tables_exist(index_catalog: IndexCatalog, tables: list[str]) -> None:
    """Fail fast if a table with rules is missing from the schema catalog."""
    known = {normalize_column(t) for t in index_catalog.table_names()}
    for table in tables:
        if normalize_column(table) not in known:
            raise UnknownTableError(table)


def run_check(
    index_catalog: IndexCatalog,
    rule_catalog: RuleCatalog,
    *,
    tables: Iterable[str] | None = None,
    max_parallel: int = 1,
) -> CheckResult:
    """
    Verify every declared uniqueness rule against the schema.

    Args:
        index_catalog: Schema index catalog.
        rule_catalog: Uniqueness rule catalog.
        tables: Optional subset of tables to check (defaults to all tables
                that have rules, in declaration order).
        max_parallel: Maximum number of rules verified concurrently.

    Returns:
        A CheckResult with the report, per-rule outcomes and diagnostics.

    Raises:
        UnknownTableError: If a checked table is not in the schema catalog.
    """
    selected = [
        normalize_column(t)
        for t in (tables if tables is not None else rule_catalog.table_names())
    ]
    _ensure_tables_exist(index_catalog, selected)

    pairs = [(table, rule) for table in selected for rule in rule_catalog.rules_for(table)]
    results = verify_all(index_catalog, pairs, max_parallel=max_parallel)

    outcomes: list[tuple[str, UniquenessRule, VerificationOutcome]] = []
    diagnostics: list[Diagnostic] = []
    for table, rule, outcome in results:
        if isinstance(outcome, Diagnostic):
            diagnostics.append(outcome)
        else:
            outcomes.append((table, rule, outcome))

    report = build_report((table, outcome) for table, _, outcome in outcomes)
    return CheckResult(
        report=report, outcomes=tuple(outcomes), diagnostics=tuple(diagnostics)
    )
