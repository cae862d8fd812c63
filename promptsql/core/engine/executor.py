# promptsql/core/engine/executor.py
"""
QUERY EXECUTOR - Run a built statement and hand back plain rows

One statement per call. run_prompt borrows a pooled connection only after
the table is resolved.
No retries: a failure is reported once as QueryExecutionError with the
driver's own message.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
from sqlalchemy.sql import Select

from promptsql.core.exceptions import QueryExecutionError
from promptsql.core.models import Catalog
from promptsql.core.engine.builder import build_query, compile_query
from promptsql.core.engine.intent import match

logger = logging.getLogger(__name__)


def driver_message(error: SQLAlchemyError) -> str:
    # DBAPIError keeps the driver exception in .orig
    original = getattr(error, "orig", None)
    return str(original) if original is not None else str(error)


async def execute_query(conn: AsyncConnection, query: Select) -> List[Dict[str, Any]]:
    sql, params = compile_query(query, conn.dialect)
    logger.info(f"Executing query: {sql} {params}")

    try:
        result = await conn.execute(query)
        rows = [dict(row) for row in result.mappings().all()]
    except SQLAlchemyError as error:
        logger.error(f"Error executing query: {error}")
        raise QueryExecutionError(driver_message(error)) from error

    return rows


async def run_prompt(
    engine: AsyncEngine, catalog: Catalog, category: str, prompt: Optional[str]
) -> List[Dict[str, Any]]:
    """
    Full request path: catalog lookup → match → build → execute.

    The table is resolved before a connection is borrowed, so an unknown
    table is reported even while the database is unreachable.

    Raises:
        TableNotFound: `category` is not in the catalog
        QueryExecutionError: no connection could be made, or the database
            failed the statement
    """
    descriptor = catalog.require(category)
    intent = match(descriptor, prompt)
    logger.debug(f"Prompt {prompt!r} on {category} matched {intent}")
    query = build_query(descriptor, intent)

    try:
        async with engine.connect() as conn:
            return await execute_query(conn, query)
    except (SQLAlchemyError, OSError) as error:
        logger.error(f"Database connection error: {error}")
        raise QueryExecutionError(driver_message(error)) from error
