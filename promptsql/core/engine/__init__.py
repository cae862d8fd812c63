from promptsql.core.engine.builder import build_query, compile_query
from promptsql.core.engine.catalog import discover, load_catalog
from promptsql.core.engine.executor import execute_query, run_prompt
from promptsql.core.engine.intent import Intent, QueryShape, match
from promptsql.core.engine.roles import infer_roles

__all__ = [
    "Intent",
    "QueryShape",
    "build_query",
    "compile_query",
    "discover",
    "execute_query",
    "infer_roles",
    "load_catalog",
    "match",
    "run_prompt",
]
