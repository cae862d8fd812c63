# promptsql/core/engine/builder.py
"""
QUERY BUILDER - Intent + table metadata → bounded SELECT

Shapes:
    DEFAULT      SELECT * FROM t LIMIT 20
    NAME_SEARCH  SELECT * FROM t WHERE <display column> ILIKE :value LIMIT 20
    FILTER       SELECT * FROM t WHERE <column> ILIKE :value LIMIT 20
    TOP_N        SELECT * FROM t ORDER BY <column> DESC LIMIT 10

Table and column names are taken from the TableDescriptor only and quoted by
SQLAlchemy. Everything coming from the prompt, and the limit, is a bound
parameter.
"""

from typing import Any, Dict, Optional, Tuple

from sqlalchemy import column, desc, literal_column, select, table
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import Dialect
from sqlalchemy.sql import Select

from promptsql.core.exceptions import UnknownColumnError
from promptsql.core.models import TableDescriptor
from promptsql.core.engine.intent import Intent, QueryShape


def checked_column(descriptor: TableDescriptor, name: Optional[str]):
    if name is None or not descriptor.has_column(name):
        raise UnknownColumnError(descriptor.name, str(name))
    return column(name)


def build_query(descriptor: TableDescriptor, intent: Intent) -> Select:
    source = table(descriptor.name, schema=descriptor.schema_name)
    query = select(literal_column("*")).select_from(source)

    if intent.shape in (QueryShape.NAME_SEARCH, QueryShape.FILTER):
        target = checked_column(descriptor, intent.column)
        query = query.where(target.ilike(intent.parameter or "%%"))
    elif intent.shape == QueryShape.TOP_N:
        target = checked_column(descriptor, intent.column)
        query = query.order_by(desc(target))

    return query.limit(intent.limit)


def compile_query(
    query: Select, dialect: Optional[Dialect] = None
) -> Tuple[str, Dict[str, Any]]:
    """
    Render a built query as (statement template, bound parameters).

    Defaults to the PostgreSQL dialect; values never appear in the template.
    """
    compiled = query.compile(dialect=dialect or postgresql.dialect())
    return str(compiled), dict(compiled.params)
