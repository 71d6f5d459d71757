"""Application context management for the CLI."""

from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from uqcheck.cli.common.exits import die
from uqcheck.core.adapters.rules_file import load_rules_file
from uqcheck.core.adapters.sqlalchemy_schema import (
    SqlAlchemySchemaAdapter,
    build_engine,
)
from uqcheck.core.rules import StaticRuleCatalog
from uqcheck.core.schema import CatalogError


@dataclass
class SchemaAppContext:
    """Application context holding the engine and the schema index adapter."""

    database_url: str
    engine: Engine
    adapter: SqlAlchemySchemaAdapter


def build_schema_context(database_url: str, schema: str | None) -> SchemaAppContext:
    """Build and return the application context for schema introspection.

    Args:
        database_url: SQLAlchemy URL of the database to inspect.
        schema: Optional schema name; the connection's default when None.

    Returns:
        SchemaAppContext: Context with a connected engine and adapter.
    """
    try:
        engine = build_engine(database_url)
        adapter = SqlAlchemySchemaAdapter(engine, schema=schema)
    except CatalogError as exc:
        die(str(exc))
    except SQLAlchemyError as exc:
        die(f"Cannot connect to the database: {exc}", code=1)
    return SchemaAppContext(database_url=database_url, engine=engine, adapter=adapter)


def load_rules_or_exit(path: str) -> StaticRuleCatalog:
    """Load the rules file, turning a broken file into a CLI input error."""
    try:
        return load_rules_file(path)
    except CatalogError as exc:
        die(str(exc))
