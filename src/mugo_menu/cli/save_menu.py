import argparse
import logging
import sys
from pathlib import Path

from mugo_menu import logging_setup
from mugo_menu.editor.session import EditorSession
from mugo_menu.errors import MenuError
from mugo_menu.io.readers import read_text
from mugo_menu.menu.codec import parse_menu
from mugo_menu.persistence.coordinator import PersistenceCoordinator
from mugo_menu.utils.interactive import prompt_credentials

logger = logging.getLogger(__name__)

def main():
    p = argparse.ArgumentParser(description="Save a menu.json file to the site (downloads it when the site cannot take it)")
    p.add_argument("menu_file", type=Path, help="Path to the menu JSON to save")
    p.add_argument("--site-url", default=None, help="Base URL of the menu site")
    p.add_argument("--log_level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    a = p.parse_args()

    logging_setup.setup_logging(a.log_level)

    try:
        session = EditorSession(parse_menu(read_text(a.menu_file)))
        coordinator = PersistenceCoordinator.from_settings(session, prompt_credentials, site_url=a.site_url)
        result = coordinator.save()
    except (MenuError, FileNotFoundError) as e:
        logger.error(f"Save failed: {e}")
        sys.exit(1)

    logger.info(f"{result.message} (via {result.via.value})")

if __name__ == "__main__":
    main()
