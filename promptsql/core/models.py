from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from promptsql.core.exceptions import TableNotFound

# Name search targets this column when a table has no display column
DEFAULT_DISPLAY_COLUMN = "name"


# =========================
# Column
# =========================
class ColumnDescriptor(BaseModel):
    name: str
    data_type: str  # normalized tag: integer, text, timestamp, ...
    raw_type: str  # what information_schema reported
    has_auto_default: bool = False

    model_config = ConfigDict(frozen=True)


# =========================
# Table
# =========================
class TableDescriptor(BaseModel):
    """
    One discoverable table.

    Columns keep their physical ordinal order. The two role columns are
    filled by role inference and, when set, always name one of `columns`.
    """

    name: str
    schema_name: Optional[str] = None
    columns: Tuple[ColumnDescriptor, ...] = ()
    identifier_column: Optional[str] = None
    display_column: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_role_columns(self):
        names = set(self.column_names)
        for role in ("identifier_column", "display_column"):
            value = getattr(self, role)
            if value is not None and value not in names:
                raise ValueError(
                    f"{role} '{value}' is not a column of table '{self.name}'"
                )
        return self

    @property
    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]

    def has_column(self, name: str) -> bool:
        return any(col.name == name for col in self.columns)

    @property
    def resolved_display(self) -> str:
        return self.display_column or DEFAULT_DISPLAY_COLUMN


# =========================
# Catalog
# =========================
class Catalog:
    """
    Read-only view of every discovered table, keyed by table name.

    Built once at startup and shared by all requests. An empty catalog is
    what requests see before discovery finished or after it failed.
    """

    def __init__(self, tables: Optional[Dict[str, TableDescriptor]] = None):
        self._tables = MappingProxyType(dict(tables or {}))

    @classmethod
    def from_tables(cls, tables: List[TableDescriptor]) -> "Catalog":
        return cls({table.name: table for table in tables})

    def table_names(self) -> List[str]:
        return list(self._tables)

    def get(self, name: str) -> Optional[TableDescriptor]:
        return self._tables.get(name)

    def require(self, name: str) -> TableDescriptor:
        table = self._tables.get(name)
        if table is None:
            raise TableNotFound(name)
        return table

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[TableDescriptor]:
        return iter(self._tables.values())

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"Catalog(tables={self.table_names()!r})"
