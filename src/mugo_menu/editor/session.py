"""
Editor session - the working menu document and its per-tab dirty state.

One session is owned by one editor. Every field edit marks the tab that contains
it as dirty; a successful save (mark_saved) snapshots the document and clears all
flags; revert_tab restores a single tab from that snapshot.
"""

import logging
import time
from typing import List, Optional, Set

from mugo_menu.menu.codec import dump_menu, parse_menu
from mugo_menu.menu.schema import Group, Item, MenuDocument, Tab
from mugo_menu.menu_constants import (
    ITEM_FIELDS,
    NEW_GROUP_LABEL,
    NEW_ITEM_NAME,
    NEW_TAB_LABEL,
    TAB_FIELDS,
)

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Working copy of the menu plus dirty tracking.

    Attributes:
        document: The document being edited
        snapshot: Copy of the document as last successfully saved
        dirty: Indices of tabs modified since the last save
        selected_tab: Tab currently shown by the editor
    """

    def __init__(self, document: Optional[MenuDocument] = None):
        self.document: MenuDocument = document if document is not None else MenuDocument()
        self.snapshot: MenuDocument = self.document.clone()
        self.dirty: Set[int] = set()
        self.selected_tab: int = 0
        # snapshot index of each current tab, None for tabs added since the last save
        self._origin: List[Optional[int]] = list(range(len(self.document.tabs)))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def is_dirty(self, tab_idx: Optional[int] = None) -> bool:
        if tab_idx is None:
            return bool(self.dirty)
        return tab_idx in self.dirty

    @property
    def has_unsaved_changes(self) -> bool:
        """True when any tab is dirty or the tab list itself changed since the snapshot."""
        return bool(self.dirty) or dump_menu(self.document) != dump_menu(self.snapshot)

    def mark_dirty(self, tab_idx: int) -> None:
        self.dirty.add(tab_idx)

    def mark_saved(self) -> None:
        """Record the current document as saved and clear all dirty flags."""
        self.snapshot = self.document.clone()
        self.dirty.clear()
        self._origin = list(range(len(self.document.tabs)))
        logger.debug("Session snapshot updated, dirty flags cleared")

    def replace_document(self, document: MenuDocument, saved: bool = True) -> None:
        """Swap in a freshly loaded document (saved=True treats it as the new snapshot)."""
        self.document = document
        if saved:
            self.mark_saved()
        else:
            self.dirty = set(range(len(document.tabs)))
            self._origin = self._aligned_origin(document)
        self.selected_tab = min(self.selected_tab, max(0, len(document.tabs) - 1))

    def to_json(self) -> str:
        return dump_menu(self.document)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def tab(self, tab_idx: int) -> Tab:
        if not 0 <= tab_idx < len(self.document.tabs):
            raise IndexError(f"No tab at index {tab_idx}")
        return self.document.tabs[tab_idx]

    def group(self, tab_idx: int, group_idx: int) -> Group:
        groups = self.tab(tab_idx).groups
        if not 0 <= group_idx < len(groups):
            raise IndexError(f"No group {group_idx} in tab {tab_idx}")
        return groups[group_idx]

    def item(self, tab_idx: int, group_idx: int, item_idx: int) -> Item:
        items = self.group(tab_idx, group_idx).items
        if not 0 <= item_idx < len(items):
            raise IndexError(f"No item {item_idx} in group {group_idx} of tab {tab_idx}")
        return items[item_idx]

    # ------------------------------------------------------------------
    # Field edits
    # ------------------------------------------------------------------
    def set_tab_field(self, tab_idx: int, field: str, value: str) -> None:
        if field not in TAB_FIELDS:
            raise ValueError(f"Unknown tab field '{field}' (expected one of {TAB_FIELDS})")
        setattr(self.tab(tab_idx), field, value)
        self.mark_dirty(tab_idx)

    def set_group_label(self, tab_idx: int, group_idx: int, value: str) -> None:
        self.group(tab_idx, group_idx).label = value
        self.mark_dirty(tab_idx)

    def set_item_field(self, tab_idx: int, group_idx: int, item_idx: int, field: str, value: str) -> None:
        if field not in ITEM_FIELDS:
            raise ValueError(f"Unknown item field '{field}' (expected one of {ITEM_FIELDS})")
        setattr(self.item(tab_idx, group_idx, item_idx), field, value)
        self.mark_dirty(tab_idx)

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------
    def add_tab(self, label: str = NEW_TAB_LABEL, tab_id: Optional[str] = None) -> int:
        tab = Tab(id=tab_id or f"tab-{int(time.time() * 1000)}", label=label, groups=[])
        self.document.tabs.append(tab)
        idx = len(self.document.tabs) - 1
        self._origin.append(None)
        self.selected_tab = idx
        self.mark_dirty(idx)
        return idx

    def delete_tab(self, tab_idx: int) -> Tab:
        self.tab(tab_idx)
        removed = self.document.tabs.pop(tab_idx)
        self._origin.pop(tab_idx)
        # flags of the following tabs move down with them
        self.dirty = {i if i < tab_idx else i - 1 for i in self.dirty if i != tab_idx}
        if self.selected_tab >= len(self.document.tabs):
            self.selected_tab = max(0, len(self.document.tabs) - 1)
        return removed

    def add_group(self, tab_idx: int, label: str = NEW_GROUP_LABEL) -> int:
        groups = self.tab(tab_idx).groups
        groups.append(Group(label=label, items=[]))
        self.mark_dirty(tab_idx)
        return len(groups) - 1

    def delete_group(self, tab_idx: int, group_idx: int) -> Group:
        self.group(tab_idx, group_idx)
        removed = self.tab(tab_idx).groups.pop(group_idx)
        self.mark_dirty(tab_idx)
        return removed

    def add_item(self, tab_idx: int, group_idx: int, name: str = NEW_ITEM_NAME) -> int:
        items = self.group(tab_idx, group_idx).items
        items.append(Item(name=name, desc="", price=""))
        self.mark_dirty(tab_idx)
        return len(items) - 1

    def delete_item(self, tab_idx: int, group_idx: int, item_idx: int) -> Item:
        self.item(tab_idx, group_idx, item_idx)
        removed = self.group(tab_idx, group_idx).items.pop(item_idx)
        self.mark_dirty(tab_idx)
        return removed

    def toggle_group(self, tab_idx: int, group_idx: int) -> bool:
        """Open/close a group in the editor. UI state only, does not dirty the tab."""
        group = self.group(tab_idx, group_idx)
        group.open = not group.is_open
        return group.open

    def select_tab(self, tab_idx: int) -> None:
        self.tab(tab_idx)
        self.selected_tab = tab_idx

    # ------------------------------------------------------------------
    # Revert / raw text
    # ------------------------------------------------------------------
    def revert_tab(self, tab_idx: int) -> bool:
        """Restore a tab from the last saved snapshot. Returns False when there is nothing to restore."""
        origin = self._origin[tab_idx] if 0 <= tab_idx < len(self._origin) else None
        if origin is None:
            logger.debug(f"No snapshot for tab {tab_idx}, nothing to revert")
            return False
        self.document.tabs[tab_idx] = self.snapshot.tabs[origin].model_copy(deep=True)
        self.dirty.discard(tab_idx)
        return True

    def _aligned_origin(self, document: MenuDocument) -> List[Optional[int]]:
        # a replaced document lines up with the snapshot position by position
        n_saved = len(self.snapshot.tabs)
        return [idx if idx < n_saved else None for idx in range(len(document.tabs))]

    def apply_text(self, text: str) -> MenuDocument:
        """
        Replace the working document with JSON typed by the admin.

        Raises MenuParseError (and leaves the session untouched) when the text is not a menu.
        Tabs whose content differs from the previous document are marked dirty.
        """
        parsed = parse_menu(text)
        previous = self.document
        self.document = parsed
        self._origin = self._aligned_origin(parsed)
        for idx, tab in enumerate(parsed.tabs):
            if idx >= len(previous.tabs) or tab.model_dump() != previous.tabs[idx].model_dump():
                self.mark_dirty(idx)
        self.dirty = {i for i in self.dirty if i < len(parsed.tabs)}
        self.selected_tab = min(self.selected_tab, max(0, len(parsed.tabs) - 1))
        return parsed
