# promptsql/core/engine/catalog.py
"""
SCHEMA CATALOG - Discover tables and columns once at startup

Data Flow:
    information_schema.tables   → base tables of the app schema (minus pg_/sql_)
                                          ↓
    information_schema.columns  → columns per table, in ordinal order
                                          ↓
                                   infer_roles() per table
                                          ↓
                                   frozen Catalog

Failure policy:
    - listing tables fails          → SchemaDiscoveryError (whole discovery fails)
    - one table's columns fail      → warning, that table is left out
    - a table has no columns at all → still recorded, with an empty column list
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from promptsql.core.exceptions import SchemaDiscoveryError
from promptsql.core.models import Catalog, ColumnDescriptor, TableDescriptor
from promptsql.core.engine.roles import infer_roles

logger = logging.getLogger(__name__)

RESERVED_PREFIXES = ("pg_", "sql_")
RESERVED_NAMES = {"information_schema"}

TABLES_QUERY = text(
    """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = :schema
      AND table_type = 'BASE TABLE'
    ORDER BY table_name
    """
)

COLUMNS_QUERY = text(
    """
    SELECT column_name, data_type, column_default, is_identity
    FROM information_schema.columns
    WHERE table_schema = :schema
      AND table_name = :table
    ORDER BY ordinal_position
    """
)


# ============================================================================
# STEP 1: NORMALIZE COLUMN METADATA
# ============================================================================

# Checked in order, first matching family wins
TYPE_FAMILIES = [
    ("timestamp", ("timestamp",)),
    ("interval", ("interval",)),
    ("date", ("date",)),
    ("time", ("time",)),
    ("integer", ("smallint", "integer", "bigint", "serial")),
    ("numeric", ("numeric", "decimal", "real", "double", "float", "money")),
    ("text", ("char", "text", "citext", "name")),
    ("boolean", ("bool",)),
    ("json", ("json",)),
    ("uuid", ("uuid",)),
    ("array", ("array",)),
    ("binary", ("bytea", "blob")),
]


def normalize_type(raw_type: Optional[str]) -> str:
    """
    Map an engine-reported type name to a small set of tags.

    Examples:
        "character varying"           → "text"
        "timestamp without time zone" → "timestamp"
        "bigint"                      → "integer"
        "USER-DEFINED"                → "other"
    """
    if not raw_type:
        return "other"

    lowered = raw_type.lower()
    for family, markers in TYPE_FAMILIES:
        if any(marker in lowered for marker in markers):
            return family
    return "other"


def is_auto_default(column_default: Optional[str], is_identity: Any = None) -> bool:
    """Sequence-backed default: serial columns (nextval) or identity columns."""
    if column_default and "nextval(" in column_default.lower():
        return True
    return str(is_identity or "").upper() in ("YES", "TRUE")


def build_column(row: Mapping[str, Any]) -> ColumnDescriptor:
    raw_type = row.get("data_type") or ""
    return ColumnDescriptor(
        name=row["column_name"],
        data_type=normalize_type(raw_type),
        raw_type=raw_type,
        has_auto_default=is_auto_default(
            row.get("column_default"), row.get("is_identity")
        ),
    )


def is_reserved_table(name: str) -> bool:
    return name in RESERVED_NAMES or name.lower().startswith(RESERVED_PREFIXES)


# ============================================================================
# STEP 2: READ INFORMATION_SCHEMA
# ============================================================================


async def list_tables(conn: AsyncConnection, schema: str) -> List[str]:
    try:
        result = await conn.execute(TABLES_QUERY, {"schema": schema})
        rows = result.mappings().all()
    except SQLAlchemyError as error:
        raise SchemaDiscoveryError(f"Could not list tables: {error}") from error

    names = [row["table_name"] for row in rows]
    return [name for name in names if not is_reserved_table(name)]


async def read_table(
    conn: AsyncConnection, schema: str, table_name: str
) -> Optional[TableDescriptor]:
    """
    Read one table's columns. Returns None if the columns could not be read.

    A failed statement leaves the transaction aborted on PostgreSQL, so we
    roll back before the next table is read.
    """
    try:
        result = await conn.execute(
            COLUMNS_QUERY, {"schema": schema, "table": table_name}
        )
        rows = result.mappings().all()
        columns = tuple(build_column(row) for row in rows)
    except SQLAlchemyError as error:
        logger.warning(f"Skipping table {table_name}, cannot read columns: {error}")
        await conn.rollback()
        return None

    return infer_roles(
        TableDescriptor(name=table_name, schema_name=schema, columns=columns)
    )


# ============================================================================
# STEP 3: BUILD THE CATALOG
# ============================================================================


async def discover(conn: AsyncConnection, schema: str = "public") -> Catalog:
    """
    Discover every base table of `schema` and return the frozen catalog.

    Raises:
        SchemaDiscoveryError: the table listing itself failed
    """
    table_names = await list_tables(conn, schema)

    tables: Dict[str, TableDescriptor] = {}
    for table_name in table_names:
        table = await read_table(conn, schema, table_name)
        if table is not None:
            tables[table.name] = table

    skipped = len(table_names) - len(tables)
    logger.info(
        f"Database schema information loaded: {len(tables)} tables"
        + (f" ({skipped} skipped)" if skipped else "")
    )
    return Catalog(tables)


async def load_catalog(engine: AsyncEngine, schema: str = "public") -> Catalog:
    """
    Connect, check the database answers, then run discovery.

    Any connection-level failure is reported as SchemaDiscoveryError so the
    caller has one error type to handle at startup.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT now()"))
            logger.info("Database connected successfully")
            return await discover(conn, schema)
    except SchemaDiscoveryError:
        raise
    except (SQLAlchemyError, OSError) as error:
        raise SchemaDiscoveryError(f"Database connection error: {error}") from error
