from __future__ import annotations

from threading import Lock
from typing import Sequence

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, NoSuchModuleError, NoSuchTableError

from uqcheck.core.models import Index
from uqcheck.core.schema import CatalogError, UnknownTableError


def build_engine(url: str) -> Engine:
    """Create a SQLAlchemy engine, turning a malformed URL into a CatalogError."""
    try:
        return create_engine(url)
    except (ArgumentError, NoSuchModuleError) as exc:
        raise CatalogError(f"Invalid database URL: {exc}") from exc


class SqlAlchemySchemaAdapter:
    """Adapter around SQLAlchemy's inspector (tables, indexes, unique constraints)."""

    def __init__(self, engine: Engine, schema: str | None = None) -> None:
        self.engine = engine
        self.schema = schema
        self._inspector = inspect(engine)
        self._tables: dict[str, str] | None = None
        self._cache: dict[str, tuple[Index, ...]] = {}
        self._lock = Lock()

    def table_names(self) -> list[str]:
        """List tables in the configured schema (or the default one)."""
        return list(self._table_map())

    def _table_map(self) -> dict[str, str]:
        # normalized name -> name as stored by the database
        with self._lock:
            if self._tables is None:
                names = self._inspector.get_table_names(schema=self.schema)
                self._tables = {n.lower(): n for n in names}
            return self._tables

    def indexes_for(self, table: str) -> Sequence[Index]:
        """Return index snapshots for a table (loaded once per adapter)."""
        key = table.strip().lower()
        real_name = self._table_map().get(key)
        if real_name is None:
            raise UnknownTableError(table)

        with self._lock:
            cached = self._cache.get(key)
            if cached is None:
                cached = self._cache[key] = tuple(self._load_indexes(real_name))
            return cached

    def _load_indexes(self, table: str) -> list[Index]:
        """
        Collect indexes, unique constraints and the primary key of a table.

        The primary key is returned as a unique index over its columns, even
        though some frameworks list it separately from the table's indexes.
        """
        try:
            raw_indexes = self._inspector.get_indexes(table, schema=self.schema)
            raw_uniques = self._inspector.get_unique_constraints(
                table, schema=self.schema
            )
            pk = self._inspector.get_pk_constraint(table, schema=self.schema)
        except NoSuchTableError as exc:
            raise UnknownTableError(table) from exc

        out: list[Index] = []
        for ix in raw_indexes:
            columns = ix.get("column_names") or []
            # expression indexes report None for non-column parts
            if not columns or any(c is None for c in columns):
                continue
            out.append(
                Index.of(columns, unique=bool(ix.get("unique")), name=ix.get("name"))
            )

        for uc in raw_uniques:
            columns = uc.get("column_names") or []
            if columns:
                out.append(Index.of(columns, unique=True, name=uc.get("name")))

        pk_columns = (pk or {}).get("constrained_columns") or []
        if pk_columns:
            out.append(Index.of(pk_columns, unique=True, name=pk.get("name")))

        return out
