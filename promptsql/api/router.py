from fastapi import APIRouter

from promptsql.api.endpoints import query, tables

api_router = APIRouter(prefix="/api")

# Combine all sub-routers into one
api_router.include_router(tables.router)
api_router.include_router(query.router)
