"""Uniqueness rule catalog contract.

Declared uniqueness validations reach the verifier as plain
`UniquenessRule` values. This module defines the catalog interface and the
expansion of a declared validation into rules, including the filtering of
validations that carry no checkable column (custom validators declared
without attributes).
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol, Sequence

from uqcheck.core.models import UniquenessRule, normalize_column


class RuleCatalog(Protocol):
    """Interface for looking up the uniqueness rules declared for a table."""

    def rules_for(self, table: str) -> Sequence[UniquenessRule]:
        """Return the rules declared for the table (empty if none)."""
        ...

    def table_names(self) -> list[str]:
        """Return the tables that have rules, in declaration order."""
        ...


class StaticRuleCatalog:
    """In-memory rule catalog keyed by table name."""

    def __init__(self, rules: Mapping[str, Iterable[UniquenessRule]]):
        self._rules: dict[str, list[UniquenessRule]] = {}
        for table, items in rules.items():
            self._rules.setdefault(normalize_column(table), []).extend(items)

    def rules_for(self, table: str) -> Sequence[UniquenessRule]:
        return tuple(self._rules.get(normalize_column(table), ()))

    def table_names(self) -> list[str]:
        return list(self._rules)


def rules_from_validation(
    attributes: Iterable[str | None],
    *,
    scope: Iterable[str] | str | None = None,
    conditional: bool = False,
    case_sensitive: bool = True,
    model: str | None = None,
) -> list[UniquenessRule]:
    """
    Expand one declared uniqueness validation into rules.

    A validation declared over several attributes yields one rule per
    attribute, all sharing the same scope and modifiers. Attributes that
    cannot be resolved (None or blank) are dropped, so a validator declared
    without attributes yields no rules at all.

    Args:
        attributes: Validated attribute (column) names.
        scope: Scope column name or names.
        conditional: True if the validation has a row filter or an
                     enable/disable predicate.
        case_sensitive: False if the validation ignores case.
        model: Name of the declaring model, kept for diagnostics.

    Returns:
        A list of UniquenessRule objects (possibly empty).
    """
    if scope is None:
        scope_columns: tuple[str, ...] = ()
    elif isinstance(scope, str):
        scope_columns = (scope,)
    else:
        scope_columns = tuple(scope)

    rules: list[UniquenessRule] = []
    for attribute in attributes:
        if attribute is None or not str(attribute).strip():
            continue
        rules.append(
            UniquenessRule.of(
                attribute,
                scope_columns,
                conditional=conditional,
                case_insensitive=not case_sensitive,
                model=model,
            )
        )
    return rules
