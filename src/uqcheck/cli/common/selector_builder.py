"""Ignore-selector construction utilities.

Translates the `--ignore-table` and `--ignore` CLI arguments into a single
RuleSelector. Validation of the user-provided formats happens here, so the
rest of the application only deals with selector objects.
"""

from typing import Iterable

from uqcheck.core.selectors import (
    AnySelector,
    ColumnsSelector,
    RuleSelector,
    TableRegexSelector,
)


def parse_ignore_rule(value: str) -> ColumnsSelector:
    """Parse `table:col_a,col_b` into a ColumnsSelector."""
    if ":" not in value:
        raise ValueError(f"Invalid ignore rule: '{value}' (expected table:col_a,col_b)")

    table, raw_columns = value.split(":", 1)
    columns = [c for c in (part.strip() for part in raw_columns.split(",")) if c]
    if not table.strip() or not columns:
        raise ValueError(f"Invalid ignore rule: '{value}' (expected table:col_a,col_b)")
    return ColumnsSelector(table, columns)


def build_ignore_selector(
    *,
    ignore_tables: Iterable[str],
    ignore_rules: Iterable[str],
) -> RuleSelector | None:
    """
    Build a selector matching every rule the user asked to ignore.

    Args:
        ignore_tables: Regular expressions matched against table names.
        ignore_rules: Rules in the form `table:col_a,col_b`.

    Returns:
        A RuleSelector, or None if nothing is ignored.

    Raises:
        ValueError: If a regex is invalid or an ignore rule is malformed.
    """
    selectors: list[RuleSelector] = []

    for pattern in ignore_tables:
        selectors.append(TableRegexSelector(pattern))

    for rule in ignore_rules:
        selectors.append(parse_ignore_rule(rule))

    if not selectors:
        return None

    if len(selectors) == 1:
        return selectors[0]

    return AnySelector(selectors)
