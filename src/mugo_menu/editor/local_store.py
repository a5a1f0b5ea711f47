"""
Local key/value store - the desktop counterpart of the web admin's localStorage.

Values are strings, persisted as one JSON object on disk. Reads never raise:
a missing or corrupt store file behaves like an empty store.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from mugo_menu.io.writers import atomic_write_text

logger = logging.getLogger(__name__)


class LocalStore:
    """String key/value store backed by a JSON file"""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable local store {self.path}: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring local store {self.path}: not a JSON object")
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _flush(self) -> None:
        atomic_write_text(json.dumps(self._data, indent=2, ensure_ascii=False), self.path)

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def __contains__(self, key: str) -> bool:
        return key in self._data
