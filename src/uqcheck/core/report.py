"""Report building and rendering.

Turns verification outcomes into a `Report` grouped by table and renders
it in the plain-text format other tooling diffs against:

    The following indexes should be created to back model-level uniqueness validations:
      users: company_id, department_id, email

A report without violations renders as an empty string.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence, Union

from uqcheck.core.models import Report, VerificationOutcome, Violated

HEADER = (
    "The following indexes should be created to back model-level "
    "uniqueness validations:"
)

OutcomesInput = Union[
    Mapping[str, Sequence[VerificationOutcome]],
    Iterable[tuple[str, VerificationOutcome]],
]


def _pairs(outcomes: OutcomesInput) -> Iterable[tuple[str, VerificationOutcome]]:
    if isinstance(outcomes, Mapping):
        for table, items in outcomes.items():
            for outcome in items:
                yield table, outcome
    else:
        yield from outcomes


def build_report(outcomes: OutcomesInput) -> Report:
    """
    Group violated outcomes by table.

    Only `Violated` outcomes are kept. Tables appear in the order they are
    first encountered and a column set already listed for a table is not
    repeated. Tables without violations are left out.

    Args:
        outcomes: Either a mapping of table name to outcomes, or an
                  iterable of (table, outcome) pairs.

    Returns:
        The Report for this run (empty when nothing is violated).
    """
    grouped: dict[str, list[tuple[str, ...]]] = {}
    for table, outcome in _pairs(outcomes):
        if not isinstance(outcome, Violated):
            continue
        sets = grouped.setdefault(table, [])
        if any(frozenset(cols) == outcome.required for cols in sets):
            continue
        sets.append(outcome.columns)
    return Report(grouped)


def render_report(report: Report) -> str:
    """Render the report as text, or an empty string for a clean run."""
    if not report:
        return ""
    lines = [HEADER]
    for table, sets in report.items():
        for columns in sets:
            lines.append(f"  {table}: {', '.join(columns)}")
    return "\n".join(lines) + "\n"


def report_to_dict(report: Report) -> dict[str, list[list[str]]]:
    """Return a JSON-ready representation of the report."""
    return {table: [list(cols) for cols in sets] for table, sets in report.items()}
