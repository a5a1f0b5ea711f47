"""
Base Repository - Abstract interface for menu storage

This defines the contract that all repository implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from pathlib import Path


class BaseRepository(ABC):
    """Abstract base class for menu repositories"""

    @abstractmethod
    def get_menu(self) -> Dict[str, Any]:
        """
        Load the current menu document.

        Returns:
            Decoded menu.json content

        Raises:
            FileNotFoundError: When no menu has been saved yet
        """
        pass

    @abstractmethod
    def save_menu(self, menu: Dict[str, Any]) -> Optional[Path]:
        """
        Replace the stored menu document (last writer wins).

        Args:
            menu: Menu document as a JSON object

        Returns:
            Location of the backup of the previous version, if one was made
        """
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Whether a menu document has been stored"""
        pass
