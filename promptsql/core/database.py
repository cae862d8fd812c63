from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from promptsql.core.config import settings

# One pool for the whole process; asyncpg gives up connecting after the timeout
engine = create_async_engine(
    settings.database_url,
    echo=settings.DB_ECHO,
    connect_args={"timeout": settings.DB_CONNECT_TIMEOUT},
)


# Handlers borrow a pooled connection only once they know they need one
def get_engine() -> AsyncEngine:
    return engine
