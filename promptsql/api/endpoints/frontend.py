from pathlib import Path

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import FileResponse

from promptsql.core.config import settings

router = APIRouter(include_in_schema=False)


def resolve_static(full_path: str, static_dir: Path) -> Path:
    """
    File under `static_dir` for the requested path, or the SPA shell.

    Paths escaping the directory are treated as unknown and get the shell.
    """
    root = static_dir.resolve()
    candidate = (root / full_path).resolve()

    if full_path and candidate.is_file() and root in candidate.parents:
        return candidate

    index = root / "index.html"
    if not index.is_file():
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Not found")
    return index


# Registered last so it only sees paths no other route claimed
@router.get("/{full_path:path}")
async def serve_frontend(full_path: str):
    return FileResponse(resolve_static(full_path, Path(settings.STATIC_DIR)))
