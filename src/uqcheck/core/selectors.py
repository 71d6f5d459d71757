"""Rule selector abstractions used for suppression.

Selectors decide whether a (table, rule) pair matches a given criterion.
They are used to drop rules the user chose to ignore before verification
starts, so the verifier itself never has to know about suppression.

Selectors are pure, side-effect-free objects and can be composed with
`AnySelector`.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Iterable

from uqcheck.core.models import UniquenessRule, normalize_column, normalize_columns
from uqcheck.core.rules import RuleCatalog, StaticRuleCatalog


class RuleSelector(ABC):
    """
    Abstract base class for all rule selectors.

    A RuleSelector encapsulates a single piece of matching logic that
    determines whether a rule declared on a table satisfies a criterion.
    """

    @abstractmethod
    def matches(self, table: str, rule: UniquenessRule) -> bool:
        """
        Determine whether the given rule matches this selector.

        Args:
            table: Name of the table the rule belongs to.
            rule: Rule to evaluate.

        Returns:
            True if the rule matches the selector criteria, False otherwise.
        """
        ...


class TableRegexSelector(RuleSelector):
    """
    Selector that matches every rule of tables whose name matches a regex.
    """

    def __init__(self, pattern: str):
        """
        Create a table-name regex selector.

        Args:
            pattern: Regular expression matched against the table name.
        """
        try:
            self.regex = re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"Invalid regex expression: {exc}") from exc

    def matches(self, table: str, rule: UniquenessRule) -> bool:
        return bool(self.regex.search(table))


class ColumnsSelector(RuleSelector):
    """
    Selector that matches rules on one table requiring exactly a column set.

    Column order is irrelevant, like for index matching.
    """

    def __init__(self, table: str, columns: Iterable[str]):
        self.table = normalize_column(table)
        self.columns = frozenset(normalize_columns(columns))
        if not self.columns:
            raise ValueError("At least one column is required.")

    def matches(self, table: str, rule: UniquenessRule) -> bool:
        return (
            normalize_column(table) == self.table
            and rule.required_columns == self.columns
        )


class AnySelector(RuleSelector):
    """
    Composite selector that matches a rule if any child selector matches.
    """

    def __init__(self, selectors: list[RuleSelector]):
        self.selectors = selectors

    def matches(self, table: str, rule: UniquenessRule) -> bool:
        return any(s.matches(table, rule) for s in self.selectors)


def filter_rules(
    catalog: RuleCatalog, ignore: RuleSelector | None
) -> StaticRuleCatalog:
    """
    Return a rule catalog without the rules matched by the ignore selector.

    Tables whose rules are all ignored disappear from the returned catalog.
    """
    kept: dict[str, list[UniquenessRule]] = {}
    for table in catalog.table_names():
        rules = [
            rule
            for rule in catalog.rules_for(table)
            if ignore is None or not ignore.matches(table, rule)
        ]
        if rules:
            kept[table] = rules
    return StaticRuleCatalog(kept)
