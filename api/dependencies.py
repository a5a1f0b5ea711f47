"""
API Dependencies - Singleton state management and FastAPI dependency injection

Holds the menu repository and provides the admin authentication dependency.
"""

import logging
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import Request

from mugo_menu.auth import check_authorization_header
from mugo_menu.settings import get_settings
from api.repositories.base import BaseRepository
from api.repositories.local import LocalFileRepository

logger = logging.getLogger(__name__)


class UnauthorizedError(Exception):
    """Raised by require_admin; rendered as 401 {"error": "Unauthorized"}"""


class AppState:
    """
    Global application state - holds the menu repository.

    Singleton pattern: one instance shared across all requests.
    """

    def __init__(self):
        self.repository: Optional[BaseRepository] = None
        self._initialized = False

    def initialize(self) -> None:
        if self._initialized:
            logger.debug("AppState already initialized")
            return

        logger.info("Initializing AppState...")
        self.repository = LocalFileRepository()
        if not self.repository.exists():
            logger.warning(f"No menu stored yet at {self.repository.menu_path}")
        self._initialized = True
        logger.info("AppState initialization complete!")

    def is_ready(self) -> bool:
        """Check if app is ready to serve requests"""
        return self._initialized and self.repository is not None

    def get_status(self) -> dict:
        """Get current initialization status"""
        return {
            "initialized": self._initialized,
            "ready": self.is_ready(),
            "menu_stored": self.repository.exists() if self.repository is not None else False,
        }


# Global singleton instance
app_state = AppState()


def get_app_state() -> AppState:
    """
    FastAPI dependency to access app state.

    Usage in routers:
        @router.get("/example")
        async def example(state: AppState = Depends(get_app_state)):
            repo = state.repository
            ...
    """
    if not app_state.is_ready():
        logger.warning("AppState not initialized, initializing synchronously...")
        app_state.initialize()
    return app_state


def get_repository() -> BaseRepository:
    """FastAPI dependency to access the menu repository."""
    state = get_app_state()
    if state.repository is None:
        raise RuntimeError("Repository not initialized")
    return state.repository


def require_admin(request: Request) -> str:
    """
    FastAPI dependency enforcing the admin Basic credentials.

    Returns the admin user name; raises UnauthorizedError otherwise.
    """
    admin = get_settings().admin
    header = request.headers.get("authorization")
    if not check_authorization_header(header, admin.user, admin.password.get_secret_value()):
        logger.warning(f"Rejected credentials for {request.method} {request.url.path}")
        raise UnauthorizedError()
    return admin.user


@asynccontextmanager
async def lifespan_handler(app):
    """
    FastAPI lifespan context manager for startup/shutdown.

    Usage in main.py:
        app = FastAPI(lifespan=lifespan_handler)
    """
    logger.info("FastAPI starting up...")
    app_state.initialize()

    yield  # App is now running

    logger.info("Shutdown complete")
