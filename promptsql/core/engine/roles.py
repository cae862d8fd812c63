# promptsql/core/engine/roles.py
"""
ROLE INFERENCE - Guess which columns identify a row and which one names it

Rules (first column in ordinal order wins, later candidates are ignored):
    identifier -> column whose default comes from a sequence (serial / identity)
    display    -> column whose name contains "name" AND whose type is text-like

Nothing found → the role stays unset. Queries then fall back to the literal
column names "id" / "name" (see TableDescriptor.resolved_*), which may not
exist on the table; the database error reaches the caller in that case.
"""

from typing import Optional

from promptsql.core.models import ColumnDescriptor, TableDescriptor

TEXT_TYPE = "text"


def find_identifier_column(table: TableDescriptor) -> Optional[ColumnDescriptor]:
    return next((col for col in table.columns if col.has_auto_default), None)


def find_display_column(table: TableDescriptor) -> Optional[ColumnDescriptor]:
    return next(
        (
            col
            for col in table.columns
            if "name" in col.name.lower() and col.data_type == TEXT_TYPE
        ),
        None,
    )


def infer_roles(table: TableDescriptor) -> TableDescriptor:
    """Return a copy of `table` with identifier/display columns filled in."""
    identifier = find_identifier_column(table)
    display = find_display_column(table)

    return TableDescriptor(
        name=table.name,
        schema_name=table.schema_name,
        columns=table.columns,
        identifier_column=identifier.name if identifier else None,
        display_column=display.name if display else None,
    )
