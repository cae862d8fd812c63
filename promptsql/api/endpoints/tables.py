from typing import List

from fastapi import APIRouter, HTTPException, status

from promptsql.api.dependencies import catalog_dep
from promptsql.core import schemas
from promptsql.core.models import TableDescriptor

router = APIRouter(prefix="/tables", tags=["Tables"])


def to_column_responses(table: TableDescriptor) -> List[schemas.ColumnResponse]:
    return [
        schemas.ColumnResponse(
            name=col.name, type=col.raw_type, is_primary=col.has_auto_default
        )
        for col in table.columns
    ]


def find_table(catalog, table_name: str) -> TableDescriptor:
    table = catalog.get(table_name)
    if table is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Table not found")
    return table


# List every discovered table
@router.get("", response_model=List[str])
async def list_tables(catalog: catalog_dep):
    return catalog.table_names()


@router.get("/{table_name}/columns", response_model=List[schemas.ColumnResponse])
async def list_columns(table_name: str, catalog: catalog_dep):
    return to_column_responses(find_table(catalog, table_name))


@router.get("/{table_name}", response_model=schemas.TableResponse)
async def describe_table(table_name: str, catalog: catalog_dep):
    """Columns plus the identifier/display columns inferred for the table."""
    table = find_table(catalog, table_name)
    return schemas.TableResponse(
        name=table.name,
        identifier_column=table.identifier_column,
        display_column=table.display_column,
        columns=to_column_responses(table),
    )
