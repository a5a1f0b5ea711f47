"""
MUGO Menu Site - FastAPI Application

Main entry point for the menu server: storefront, menu.json and /save-menu.
Environment-agnostic: configuration reads from settings (.env file).
"""

import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from mugo_menu.menu_constants import AUTH_REALM
from mugo_menu.settings import get_settings
from api.dependencies import lifespan_handler, UnauthorizedError
from api.routers import menu, save, auth, health

# Get settings
cfg = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, cfg.log_level),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"error": "Unauthorized"},
        headers={"WWW-Authenticate": f'Basic realm="{AUTH_REALM}"'},
    )


def create_app() -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Configuration is loaded from settings (reads from .env file).

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="MUGO Menu API",
        description="Restaurant menu storefront and admin save endpoint",
        version="0.1.0",
        lifespan=lifespan_handler
    )

    logger.info(f"Configuring CORS with origins: {cfg.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(UnauthorizedError, unauthorized_handler)

    # Mount routers
    app.include_router(save.router, tags=["save"])
    app.include_router(menu.router, tags=["menu"])
    app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
    app.include_router(health.router, prefix="/api/v1/health", tags=["health"])

    static_dir = cfg.data_root / "static"
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")
    else:
        logger.info(f"No static directory at {static_dir}, styles will not be served")

    logger.info(f"FastAPI application created (env={cfg.env})")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"MUGO server running at http://{cfg.api_host}:{cfg.api_port}")

    uvicorn.run(
        "api.main:app",
        host=cfg.api_host,
        port=cfg.api_port,
        reload=cfg.api_reload,
        log_level=cfg.log_level.lower()
    )
