import argparse
import logging

import uvicorn

from mugo_menu import logging_setup
from mugo_menu.settings import get_settings

logger = logging.getLogger(__name__)

def main():
    cfg = get_settings()
    p = argparse.ArgumentParser(description="Run the MUGO menu site (storefront + /save-menu)")
    p.add_argument("--host", default=cfg.api_host, help="Bind address")
    p.add_argument("--port", type=int, default=cfg.api_port, help="Port")
    p.add_argument("--reload", action="store_true", default=cfg.api_reload, help="Auto-reload on code changes")
    a = p.parse_args()

    logging_setup.setup_logging(cfg.log_level)
    logger.info(f"MUGO server running at http://{a.host}:{a.port}")

    uvicorn.run(
        "api.main:app",
        host=a.host,
        port=a.port,
        reload=a.reload,
        log_level=cfg.log_level.lower()
    )

if __name__ == "__main__":
    main()
