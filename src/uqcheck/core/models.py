"""Core domain models for uniqueness checking.

This module defines the data structures shared by the catalogs, the rule
verifier and the report builder: indexes, uniqueness rules, verification
outcomes and the final report. All models are immutable snapshots created
fresh for a single run and are free of database, file or CLI concerns.

Column names are normalized (trimmed, lower-cased) as soon as they enter
a model, so that matching can rely on plain set equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Union


def normalize_column(name: str) -> str:
    """Return a column name trimmed and lower-cased."""
    normalized = str(name).strip().lower()
    if not normalized:
        raise ValueError("Column name must not be empty.")
    return normalized


def normalize_columns(names: Iterable[str]) -> tuple[str, ...]:
    """Normalize column names, dropping duplicates but keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in names:
        seen.setdefault(normalize_column(name), None)
    return tuple(seen)


@dataclass(frozen=True)
class Index:
    """
    Snapshot of a single database index.

    Attributes:
        columns: Unordered set of normalized column names covered by the index.
        is_unique: True if the index enforces uniqueness.
        name: Optional index name as reported by the database.
    """

    columns: frozenset[str]
    is_unique: bool = False
    name: str | None = None

    @classmethod
    def of(
        cls,
        columns: Iterable[str],
        *,
        unique: bool = False,
        name: str | None = None,
    ) -> Index:
        """Build an index from any iterable of (possibly unnormalized) names."""
        return cls(
            columns=frozenset(normalize_columns(columns)),
            is_unique=bool(unique),
            name=name,
        )


@dataclass(frozen=True)
class UniquenessRule:
    """
    Represents a declared "these columns must be unique together" rule.

    Attributes:
        target_column: Column the rule declares unique.
        scope_columns: Additional columns that, together with the target,
                       must be jointly unique (declared order kept).
        is_conditional: True if the rule only applies to a subset of rows.
        is_case_insensitive: True if values are compared ignoring case.
        model: Optional name of the model declaring the rule.
    """

    target_column: str
    scope_columns: tuple[str, ...] = ()
    is_conditional: bool = False
    is_case_insensitive: bool = False
    model: str | None = None

    @classmethod
    def of(
        cls,
        target_column: str,
        scope_columns: Iterable[str] = (),
        *,
        conditional: bool = False,
        case_insensitive: bool = False,
        model: str | None = None,
    ) -> UniquenessRule:
        """Build a rule with normalized column names."""
        return cls(
            target_column=normalize_column(target_column),
            scope_columns=normalize_columns(scope_columns),
            is_conditional=bool(conditional),
            is_case_insensitive=bool(case_insensitive),
            model=model,
        )

    @property
    def display_columns(self) -> tuple[str, ...]:
        """Scope columns in declared order, then the target column."""
        return normalize_columns((*self.scope_columns, self.target_column))

    @property
    def required_columns(self) -> frozenset[str]:
        """The unordered set an index must cover exactly to back this rule."""
        return frozenset(self.display_columns)


@dataclass(frozen=True)
class Satisfied:
    """A unique index with exactly the required columns exists."""


@dataclass(frozen=True)
class Violated:
    """No qualifying unique index exists for the required columns."""

    columns: tuple[str, ...]

    @property
    def required(self) -> frozenset[str]:
        return frozenset(self.columns)


@dataclass(frozen=True)
class Unverifiable:
    """The rule cannot be backed by a plain unique index."""

    reason: str


VerificationOutcome = Union[Satisfied, Violated, Unverifiable]


@dataclass(frozen=True)
class Diagnostic:
    """An unexpected failure while checking a single (table, rule) pair."""

    table: str
    rule: UniquenessRule
    error: str



class Report(Mapping[str, tuple[tuple[str, ...], ...]]):
    """
    Violated column sets grouped by table.

    Tables keep the order in which they were first encountered and each
    column tuple is in display order. An empty report means a clean run.
    """

    def __init__(
        self, entries: Mapping[str, Iterable[tuple[str, ...]]] | None = None
    ) -> None:
        frozen = {
            table: tuple(tuple(cols) for cols in sets)
            for table, sets in (entries or {}).items()
        }
        self._entries = MappingProxyType(frozen)

    def __getitem__(self, table: str) -> tuple[tuple[str, ...], ...]:
        return self._entries[table]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Report({dict(self._entries)!r})"
