# =============================================================================
# app/routers/frontend.py - Front-end Bundle
# =============================================================================
# Serves the pre-built static front-end. Mounted last: any GET that no API
# route matched lands here.
# =============================================================================

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, PlainTextResponse

from app.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _resolve_asset(static_dir: Path, requested: str) -> Path | None:
    """Return the file for `requested` if it exists inside static_dir."""
    if not requested:
        return None
    candidate = (static_dir / requested).resolve()
    if not candidate.is_relative_to(static_dir) or not candidate.is_file():
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str):
    """
    Serve a static asset, or the fallback document for anything else.
    """
    static_dir = Path(settings.STATIC_DIR).resolve()

    asset = _resolve_asset(static_dir, full_path)
    if asset:
        return FileResponse(asset)

    index_path = static_dir / settings.INDEX_FILE
    if index_path.is_file():
        return FileResponse(index_path)

    logger.debug(f"No fallback document at {index_path}")
    return PlainTextResponse(f"{settings.INDEX_FILE} not found", status_code=404)
