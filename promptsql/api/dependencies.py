from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncEngine

from promptsql.core.database import get_engine
from promptsql.core.models import Catalog


# The catalog is built once by the lifespan handler and only read afterwards
def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


catalog_dep = Annotated[Catalog, Depends(get_catalog)]
engine_dep = Annotated[AsyncEngine, Depends(get_engine)]
