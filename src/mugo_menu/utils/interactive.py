"""
Terminal display helpers for the interactive admin editor.
"""

import getpass
from typing import Optional, Tuple

from mugo_menu.editor.session import EditorSession

HELP_TEXT = """
Commands:
  tabs                                  list tabs (dirty tabs marked with *)
  show [TAB]                            show groups and items of a tab
  select TAB                            select a tab
  set-tab TAB FIELD VALUE               FIELD in id|label|title
  set-group TAB GROUP VALUE             rename a group
  set-item TAB GROUP ITEM FIELD VALUE   FIELD in name|desc|price
  add-tab [LABEL] | del-tab TAB
  add-group TAB [LABEL] | del-group TAB GROUP
  add-item TAB GROUP [NAME] | del-item TAB GROUP ITEM
  toggle TAB GROUP                      open/close a group
  revert TAB                            restore a tab from the last save
  apply FILE                            replace the menu with JSON from FILE
  json                                  print the menu as JSON
  preview FILE                          write an HTML preview to FILE
  save                                  save to the server (download fallback)
  save-local | download
  commit [TOKEN]                        commit menu.json to the remote repository
  login | logout
  help | quit
"""


def display_tabs(session: EditorSession) -> None:
    tabs = session.document.tabs
    if not tabs:
        print("No tabs. Use 'add-tab' to create one.")
        return
    for idx, tab in enumerate(tabs):
        marker = ">" if idx == session.selected_tab else " "
        dirty = " *" if session.is_dirty(idx) else ""
        print(f" {marker}[{idx}] {tab.display_label(f'Categoria {idx + 1}')}{dirty}  ({len(tab.groups)} groups)")


def display_tab(session: EditorSession, tab_idx: int) -> None:
    tab = session.tab(tab_idx)
    print(f"\n{'=' * 60}")
    print(f"[{tab_idx}] {tab.label}  id={tab.id}" + (f"  title={tab.title}" if tab.title else ""))
    print(f"{'=' * 60}")
    for group_idx, group in enumerate(tab.groups):
        state = "" if group.is_open else " (closed)"
        print(f"  [{group_idx}] {group.label}{state}")
        if not group.is_open:
            continue
        for item_idx, item in enumerate(group.items):
            print(f"      [{item_idx}] {item.name:30s} {item.price:>8s}  {item.desc}")
    print()


def prompt_credentials() -> Optional[Tuple[str, str]]:
    """Ask for admin credentials; returns None when the user leaves them empty."""
    print("\nAuthentication required")
    try:
        username = input("Username: ").strip()
        password = getpass.getpass("Password: ")
    except EOFError:
        return None
    if not username or not password:
        print("Enter username and password")
        return None
    return username, password
