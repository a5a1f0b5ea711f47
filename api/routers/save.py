"""
Save Router - POST /save-menu

Replaces menu.json with the posted document (admin credentials required).
"""

import json
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from mugo_menu.settings import get_settings
from api.schemas.save import SaveMenuResponse, ErrorResponse
from api.dependencies import get_repository, require_admin
from api.repositories.base import BaseRepository

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/save-menu",
    response_model=SaveMenuResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def save_menu(
    request: Request,
    user: str = Depends(require_admin),
    repo: BaseRepository = Depends(get_repository)
):
    """
    Save the full menu document.

    The body must be a JSON object; the previous menu.json is kept as menu.json.bak.
    """
    body = await request.body()
    if len(body) > get_settings().max_payload_bytes:
        return _error(413, "Payload too large")

    try:
        menu = json.loads(body) if body else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        menu = None
    if not isinstance(menu, dict):
        return _error(400, "Invalid payload")

    try:
        repo.save_menu(menu)
    except OSError as e:
        logger.error(f"Failed to write menu.json: {e}", exc_info=True)
        return _error(500, "Failed to save file")

    logger.info(f"Menu saved by '{user}' ({len(menu.get('tabs') or [])} tabs)")
    return SaveMenuResponse(ok=True)
