"""
Download fallback - writes menu.json where the admin can pick it up and upload
it by hand when the save endpoint is missing or unreachable.
"""

import logging
from pathlib import Path

from mugo_menu.io.writers import atomic_write_text
from mugo_menu.menu.codec import dump_menu
from mugo_menu.menu.schema import MenuDocument
from mugo_menu.menu_constants import MENU_FILENAME

logger = logging.getLogger(__name__)


class FileDownloader:
    """Writes the pretty-printed document into a download directory"""

    def __init__(self, download_dir: Path, filename: str = MENU_FILENAME):
        self.download_dir = Path(download_dir)
        self.filename = filename

    def download(self, document: MenuDocument) -> Path:
        target = self.download_dir / self.filename
        atomic_write_text(dump_menu(document), target)
        logger.info(f"Menu downloaded to {target}")
        return target
