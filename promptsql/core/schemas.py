from typing import List, Optional

from pydantic import BaseModel, Field


# =========================
# TABLES
# =========================
class ColumnResponse(BaseModel):
    name: str
    type: str
    is_primary: bool = Field(serialization_alias="isPrimary")


class TableResponse(BaseModel):
    name: str
    identifier_column: Optional[str] = Field(
        default=None, serialization_alias="identifierColumn"
    )
    display_column: Optional[str] = Field(
        default=None, serialization_alias="displayColumn"
    )
    columns: List[ColumnResponse] = []


# =========================
# QUERY
# =========================
class QueryRequest(BaseModel):
    category: str
    prompt: str = ""


class HealthResponse(BaseModel):
    status: str
    tables: int
