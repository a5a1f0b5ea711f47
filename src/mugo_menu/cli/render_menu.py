import argparse
import logging
from pathlib import Path

from mugo_menu import logging_setup
from mugo_menu.io import readers
from mugo_menu.io.writers import atomic_write_text
from mugo_menu.render.html import render_page, render_storefront
from mugo_menu.settings import get_settings

logger = logging.getLogger(__name__)

def main():
    cfg = get_settings()
    p = argparse.ArgumentParser(description="Render the storefront menu to a static HTML page")
    p.add_argument("--menu", type=Path, default=cfg.menu_path, help="Path to menu.json")
    p.add_argument("--out", type=Path, required=True, help="Path to output HTML file")
    p.add_argument("--title", default="MUGO Menu", help="Page title")
    p.add_argument("--log_level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    a = p.parse_args()

    logging_setup.setup_logging(a.log_level)

    try:
        data = readers.read_json(a.menu)
    except (FileNotFoundError, ValueError) as e:
        logger.warning(f"Could not load {a.menu}: {e}. Rendering an empty menu.")
        data = None

    atomic_write_text(render_page(render_storefront(data), title=a.title), a.out)
    logger.info(f"Wrote {a.out}")

if __name__ == "__main__":
    main()
