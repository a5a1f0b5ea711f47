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

logger = logging.getLogger(__name__)

def main():
    p = argparse.ArgumentParser(description="Commit a menu.json file to the remote repository")
    p.add_argument("menu_file", type=Path, help="Path to the menu JSON to commit")
    p.add_argument("--token", default=None, help="Remote API token (default: local store, then MUGO_REMOTE_TOKEN)")
    p.add_argument("--message", default=None, help="Commit message")
    p.add_argument("--log_level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    a = p.parse_args()

    logging_setup.setup_logging(a.log_level)

    try:
        session = EditorSession(parse_menu(read_text(a.menu_file)))
        coordinator = PersistenceCoordinator.from_settings(session)
        result = coordinator.commit_remote(token=a.token, message=a.message)
    except (MenuError, FileNotFoundError) as e:
        logger.error(f"Commit failed: {e}")
        sys.exit(1)

    logger.info(f"{result.message} (revision {result.revision})")

if __name__ == "__main__":
    main()
