"""
Menu source resolution for the admin editor.

The cached copy in the local store wins when it parses; otherwise the menu is
fetched from the site. Any failure degrades to an empty menu.
"""

import logging
from typing import Any, Callable, Optional, TYPE_CHECKING

from mugo_menu.errors import MenuParseError
from mugo_menu.menu.codec import empty_menu, menu_from_data, parse_menu
from mugo_menu.menu.schema import MenuDocument
from mugo_menu.menu_constants import MENU_CACHE_KEY

if TYPE_CHECKING:
    from mugo_menu.editor.local_store import LocalStore

logger = logging.getLogger(__name__)


def load_menu_source(
    fetch: Callable[[], Any],
    store: Optional["LocalStore"] = None,
    prefer_cache: bool = True,
) -> MenuDocument:
    """
    Resolve the working menu.

    Args:
        fetch: Callable returning the decoded menu.json (raises on failure)
        store: Local store holding a cached copy (optional)
        prefer_cache: Use the cached copy when present

    Returns:
        MenuDocument (empty when nothing could be loaded)
    """
    if store is not None and prefer_cache:
        cached = store.get(MENU_CACHE_KEY)
        if cached:
            try:
                return parse_menu(cached)
            except MenuParseError as e:
                logger.warning(f"Invalid menu in local store, falling back to file: {e}")

    try:
        return menu_from_data(fetch())
    except Exception as e:
        logger.error(f"Could not load menu.json: {e}")
        return empty_menu()
