"""
Local File Repository - menu.json on disk

Writes are pretty-printed UTF-8, preceded by a copy of the previous file to
menu.json.bak, and serialised through a process-local lock.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from mugo_menu.io import readers
from mugo_menu.io.writers import write_with_backup
from mugo_menu.menu_constants import JSON_INDENT
from mugo_menu.settings import get_settings
from api.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class LocalFileRepository(BaseRepository):
    """Repository implementation using a local menu.json"""

    def __init__(self, menu_path: Optional[Path] = None):
        self.settings = get_settings()
        self.menu_path = Path(menu_path or self.settings.menu_path)
        self._write_lock = threading.Lock()

        logger.info(f"LocalFileRepository initialized with menu_path: {self.menu_path}")

    def exists(self) -> bool:
        return self.menu_path.exists()

    def get_menu(self) -> Dict[str, Any]:
        """Load menu.json"""
        if not self.menu_path.exists():
            raise FileNotFoundError(
                f"Menu file not found: {self.menu_path}. "
                "Save a menu from the admin editor to create it."
            )
        return readers.read_json(self.menu_path)

    def save_menu(self, menu: Dict[str, Any]) -> Optional[Path]:
        text = json.dumps(menu, indent=JSON_INDENT, ensure_ascii=False)
        with self._write_lock:
            backup = write_with_backup(text, self.menu_path)
        logger.info(f"Menu saved to {self.menu_path}" + (f" (backup: {backup})" if backup else ""))
        return backup
