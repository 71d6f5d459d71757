"""Schema index catalog contract.

The verifier never talks to a database directly. It consumes an
`IndexCatalog`, which hands out immutable `Index` snapshots per table.
Adapters (for example the SQLAlchemy one) implement the same interface.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol, Sequence

from uqcheck.core.models import Index, normalize_column


class CatalogError(RuntimeError):
    """Raised when catalog data is inconsistent or cannot be loaded."""


class UnknownTableError(CatalogError):
    """Raised when a table is referenced that the schema catalog does not know."""

    def __init__(self, table: str):
        super().__init__(f"Table '{table}' does not exist in the schema catalog.")
        self.table = table


class IndexCatalog(Protocol):
    """Interface for looking up the indexes of a table."""

    def indexes_for(self, table: str) -> Sequence[Index]:
        """Return the indexes of a table or raise UnknownTableError."""
        ...

    def table_names(self) -> list[str]:
        """Return all table names known to the catalog."""
        ...


class StaticIndexCatalog:
    """In-memory index catalog built from already-collected schema data."""

    def __init__(self, indexes: Mapping[str, Iterable[Index]]):
        self._indexes: dict[str, tuple[Index, ...]] = {
            normalize_column(table): tuple(items) for table, items in indexes.items()
        }

    def indexes_for(self, table: str) -> Sequence[Index]:
        try:
            return self._indexes[normalize_column(table)]
        except KeyError:
            raise UnknownTableError(table) from None

    def table_names(self) -> list[str]:
        return list(self._indexes)
