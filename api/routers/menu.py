"""
Menu Router - storefront page, admin preview and the raw menu.json
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, JSONResponse

from mugo_menu.render.html import render_page, render_preview, render_storefront
from api.dependencies import get_repository
from api.repositories.base import BaseRepository

router = APIRouter()
logger = logging.getLogger(__name__)

NO_STORE = {"Cache-Control": "no-store"}


def _load_or_none(repo: BaseRepository):
    try:
        return repo.get_menu()
    except FileNotFoundError as e:
        logger.warning(str(e))
    except ValueError as e:
        logger.error(f"menu.json is not valid JSON: {e}")
    return None


@router.get("/menu.json")
async def get_menu_json(repo: BaseRepository = Depends(get_repository)):
    """Raw menu document; an empty menu when none is stored yet."""
    menu = _load_or_none(repo)
    return JSONResponse(content=menu if menu is not None else {"tabs": []}, headers=NO_STORE)


@router.get("/", response_class=HTMLResponse)
async def storefront(repo: BaseRepository = Depends(get_repository)) -> HTMLResponse:
    """Read-only storefront rendered from menu.json"""
    page = render_page(render_storefront(_load_or_none(repo)), stylesheet="/static/styles.css")
    return HTMLResponse(content=page, headers=NO_STORE)


@router.get("/admin/preview", response_class=HTMLResponse)
async def admin_preview(repo: BaseRepository = Depends(get_repository)) -> HTMLResponse:
    """Preview cards as shown next to the admin editor"""
    page = render_page(render_preview(_load_or_none(repo)), title="MUGO Menu - Preview", stylesheet="/static/styles.css")
    return HTMLResponse(content=page, headers=NO_STORE)
