import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from promptsql.api.endpoints import frontend
from promptsql.api.router import api_router
from promptsql.core.config import settings
from promptsql.core.database import engine
from promptsql.core.engine import load_catalog
from promptsql.core.exceptions import SchemaDiscoveryError
from promptsql.core.logging_utils import configure_logging
from promptsql.core.models import Catalog

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


# Discover the schema once on startup and close the pool on shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        app.state.catalog = await load_catalog(engine, settings.DB_SCHEMA)
    except SchemaDiscoveryError as error:
        # Keep serving; every table lookup answers "not found" until restart
        logger.error(f"Error loading database schema: {error}")

    yield
    await engine.dispose()


app = FastAPI(title="PromptSQL API", lifespan=lifespan)

# Empty until the lifespan handler has loaded the schema
app.state.catalog = Catalog()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Errors are answered as {"error": ...} rather than FastAPI's {"detail": ...}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content)


# Include the master router containing all our endpoints
app.include_router(api_router)
# Must stay last: it answers every GET nothing else matched
app.include_router(frontend.router)


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
