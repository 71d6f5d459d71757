"""Rule verification against the schema index catalog.

For every declared uniqueness rule the verifier decides whether a unique
index backs it. Matching uses exact set equality between the rule's
required columns (target plus scope) and the index columns: supersets,
subsets and non-unique indexes never qualify, and column order never
matters.

Rules with a row condition or with case-insensitive comparison cannot be
backed by a plain unique index. They are reported as `Unverifiable`
instead of being guessed at, so reported violations carry no false
positives.

Verification of one rule never depends on another, which lets
`verify_all` spread the work over a thread pool while still returning
results in input order.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Union

from uqcheck.core.models import (
    Diagnostic,
    Satisfied,
    UniquenessRule,
    Unverifiable,
    VerificationOutcome,
    Violated,
)
from uqcheck.core.schema import IndexCatalog

CONDITIONAL = "conditional"
CASE_INSENSITIVE = "case_insensitive"

PairResult = tuple[str, UniquenessRule, Union[VerificationOutcome, Diagnostic]]


def verify(
    catalog: IndexCatalog, table: str, rule: UniquenessRule
) -> VerificationOutcome:
    """
    Decide whether a unique index on the table backs the rule.

    Args:
        catalog: Schema index catalog used to look up the table's indexes.
        table: Name of the table the rule belongs to.
        rule: Uniqueness rule to verify.

    Returns:
        Satisfied if a unique index covers exactly the required columns,
        Unverifiable for conditional or case-insensitive rules, and
        Violated (with the display-ordered columns) otherwise.

    Raises:
        UnknownTableError: If the catalog does not know the table.
    """
    if rule.is_conditional:
        return Unverifiable(CONDITIONAL)
    if rule.is_case_insensitive:
        return Unverifiable(CASE_INSENSITIVE)

    required = rule.required_columns
    for index in catalog.indexes_for(table):
        if index.is_unique and index.columns == required:
            return Satisfied()

    return Violated(rule.display_columns)


def _verify_or_diagnose(
    catalog: IndexCatalog, table: str, rule: UniquenessRule
) -> PairResult:
    """Verify one pair, turning any failure into a diagnostic for that pair."""
    try:
        return table, rule, verify(catalog, table, rule)
    except Exception as e:  # noqa: BLE001
        return table, rule, Diagnostic(table=table, rule=rule, error=str(e) or repr(e))


def verify_all(
    catalog: IndexCatalog,
    pairs: Iterable[tuple[str, UniquenessRule]],
    *,
    max_parallel: int = 1,
) -> list[PairResult]:
    """
    Verify many (table, rule) pairs independently.

    With `max_parallel` above one, pairs are verified in a thread pool.
    Results are always returned in the order of `pairs`, so the report
    built from them is identical across runs.

    Args:
        catalog: Schema index catalog.
        pairs: (table, rule) pairs to verify.
        max_parallel: Maximum number of pairs verified concurrently.

    Returns:
        A list of (table, rule, outcome) tuples, where the outcome is a
        Diagnostic if checking that pair raised.
    """
    if max_parallel < 1:
        raise ValueError("max_parallel must be >= 1")

    work = list(pairs)
    if not work:
        return []

    if max_parallel == 1:
        return [_verify_or_diagnose(catalog, table, rule) for table, rule in work]

    with ThreadPoolExecutor(max_workers=max_parallel) as pool:
        futures = [
            pool.submit(_verify_or_diagnose, catalog, table, rule)
            for table, rule in work
        ]
        return [f.result() for f in futures]
