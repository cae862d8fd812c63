import logging

from fastapi import APIRouter, HTTPException, status

from promptsql.api.dependencies import catalog_dep, engine_dep
from promptsql.core import schemas
from promptsql.core.engine import run_prompt
from promptsql.core.exceptions import QueryExecutionError, TableNotFound

router = APIRouter(tags=["Query"])

logger = logging.getLogger(__name__)


@router.post("/query")
async def query_table(
    payload: schemas.QueryRequest, catalog: catalog_dep, engine: engine_dep
):
    """
    Translate the prompt into a query on the `category` table and run it.
    Returns the matching rows as a list of column-keyed objects.
    """
    try:
        return await run_prompt(engine, catalog, payload.category, payload.prompt)

    except TableNotFound as error:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(error))

    except QueryExecutionError as error:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Database error", "details": error.message},
        )

    except Exception as error:
        logger.error(f"Error executing query for {payload.category}: {error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Database error", "details": str(error)},
        )


@router.get("/health", response_model=schemas.HealthResponse)
async def health_check(catalog: catalog_dep):
    return {"status": "healthy", "tables": len(catalog)}
