"""
CLI for the interactive menu editor.

Loads the menu (local store copy first, then the site's menu.json) into an
editor session and opens the admin command loop.
"""

import argparse
import logging

from mugo_menu import logging_setup
from mugo_menu.editor.session import EditorSession
from mugo_menu.interactive.admin_shell import AdminShell
from mugo_menu.menu.loader import load_menu_source
from mugo_menu.persistence.coordinator import PersistenceCoordinator
from mugo_menu.settings import get_settings
from mugo_menu.utils.interactive import prompt_credentials

logger = logging.getLogger(__name__)


def main():
    cfg = get_settings()

    parser = argparse.ArgumentParser(description="Interactive editor for the MUGO menu")
    parser.add_argument(
        "--site-url",
        default=cfg.site_url,
        help=f"Base URL of the menu site (default: {cfg.site_url})"
    )
    parser.add_argument(
        "--ignore-cache",
        action="store_true",
        help="Load menu.json from the site even when the local store holds a copy"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    args = parser.parse_args()

    logging_setup.setup_logging(args.log_level)

    session = EditorSession()
    coordinator = PersistenceCoordinator.from_settings(
        session, prompt_credentials=prompt_credentials, site_url=args.site_url
    )

    logger.info(f"Loading menu from {args.site_url}")
    document = load_menu_source(
        fetch=coordinator.endpoint.fetch_menu,
        store=coordinator.store,
        prefer_cache=not args.ignore_cache,
    )
    session.replace_document(document)

    AdminShell(session, coordinator).run()


if __name__ == "__main__":
    main()
