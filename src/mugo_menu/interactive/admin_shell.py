"""
Interactive admin editor for the menu.

This module provides the AdminShell class: a small command loop over an
EditorSession where every command is a field edit, a structural edit or a
persistence action routed through the PersistenceCoordinator.
"""

import logging
import shlex
from pathlib import Path
from typing import Callable, Dict, List, Optional

import requests

from mugo_menu.auth import encode_basic_token
from mugo_menu.editor.session import EditorSession
from mugo_menu.errors import (
    AuthenticationRequired,
    MenuParseError,
    MenuSaveError,
    RemoteCommitError,
)
from mugo_menu.io.readers import read_text
from mugo_menu.io.writers import atomic_write_text
from mugo_menu.persistence.coordinator import PersistenceCoordinator
from mugo_menu.render.html import render_admin, render_page, render_preview
from mugo_menu.utils.interactive import HELP_TEXT, display_tab, display_tabs, prompt_credentials

logger = logging.getLogger(__name__)


class AdminShell:
    """
    Command loop over one editor session.

    Commands return normally on success; user mistakes (bad index, bad JSON,
    rejected credentials) are reported and the loop continues.
    """

    def __init__(
        self,
        session: EditorSession,
        coordinator: PersistenceCoordinator,
        ask_credentials: Callable = prompt_credentials,
    ):
        self.session = session
        self.coordinator = coordinator
        self.ask_credentials = ask_credentials
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            "tabs": self._cmd_tabs,
            "show": self._cmd_show,
            "select": self._cmd_select,
            "set-tab": self._cmd_set_tab,
            "set-group": self._cmd_set_group,
            "set-item": self._cmd_set_item,
            "add-tab": self._cmd_add_tab,
            "del-tab": self._cmd_del_tab,
            "add-group": self._cmd_add_group,
            "del-group": self._cmd_del_group,
            "add-item": self._cmd_add_item,
            "del-item": self._cmd_del_item,
            "toggle": self._cmd_toggle,
            "revert": self._cmd_revert,
            "apply": self._cmd_apply,
            "json": self._cmd_json,
            "preview": self._cmd_preview,
            "save": self._cmd_save,
            "save-local": self._cmd_save_local,
            "download": self._cmd_download,
            "commit": self._cmd_commit,
            "login": self._cmd_login,
            "logout": self._cmd_logout,
            "help": self._cmd_help,
        }

    def run(self) -> None:
        print("MUGO menu editor - type 'help' for commands")
        display_tabs(self.session)
        while True:
            try:
                line = input("\nmenu> ")
            except EOFError:
                line = "quit"
            if not self.handle(line):
                break
        if self.session.has_unsaved_changes:
            print("Warning: leaving with unsaved changes")

    def handle(self, line: str) -> bool:
        """Execute one command line. Returns False when the loop should stop."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            print(f"Could not parse command: {e}")
            return True
        if not parts:
            return True

        name, args = parts[0].lower(), parts[1:]
        if name in ("quit", "exit", "q"):
            return False

        command = self._commands.get(name)
        if command is None:
            print(f"Unknown command '{name}' (type 'help')")
            return True

        try:
            command(args)
        except MenuParseError as e:
            print(f"Invalid JSON: {e}")
        except AuthenticationRequired as e:
            print(f"{e}. Log in again with 'login' to save your changes.")
        except MenuSaveError as e:
            print(f"Save failed: {e}")
        except RemoteCommitError as e:
            print(f"Commit failed: {e}")
        except (IndexError, ValueError) as e:
            print(f"Error: {e}")
        # requests exceptions subclass OSError
        except requests.RequestException as e:
            print(f"Network error: {e}")
        except OSError as e:
            print(f"File error: {e}")
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _ints(args: List[str], count: int, usage: str) -> List[int]:
        if len(args) < count:
            raise ValueError(f"usage: {usage}")
        try:
            return [int(a) for a in args[:count]]
        except ValueError:
            raise ValueError(f"indices must be integers - usage: {usage}")

    def _refresh(self, tab_idx: Optional[int] = None) -> None:
        # full re-render after every mutation
        display_tabs(self.session)
        if tab_idx is not None and 0 <= tab_idx < len(self.session.document.tabs):
            display_tab(self.session, tab_idx)

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------
    def _cmd_help(self, args: List[str]) -> None:
        print(HELP_TEXT)

    def _cmd_tabs(self, args: List[str]) -> None:
        display_tabs(self.session)

    def _cmd_show(self, args: List[str]) -> None:
        tab_idx = int(args[0]) if args else self.session.selected_tab
        display_tab(self.session, tab_idx)

    def _cmd_select(self, args: List[str]) -> None:
        (tab_idx,) = self._ints(args, 1, "select TAB")
        self.session.select_tab(tab_idx)
        self._refresh(tab_idx)

    def _cmd_json(self, args: List[str]) -> None:
        print(self.session.to_json())

    def _cmd_preview(self, args: List[str]) -> None:
        if not args:
            raise ValueError("usage: preview FILE")
        body = render_preview(self.session.document)
        body.append(render_admin(self.session))
        out = Path(args[0])
        atomic_write_text(render_page(body, title="MUGO Menu - Admin"), out)
        print(f"Preview written to {out}")

    # ------------------------------------------------------------------
    # Field edits
    # ------------------------------------------------------------------
    def _cmd_set_tab(self, args: List[str]) -> None:
        (tab_idx,) = self._ints(args, 1, "set-tab TAB FIELD VALUE")
        if len(args) < 3:
            raise ValueError("usage: set-tab TAB FIELD VALUE")
        self.session.set_tab_field(tab_idx, args[1], " ".join(args[2:]))
        self._refresh(tab_idx)

    def _cmd_set_group(self, args: List[str]) -> None:
        tab_idx, group_idx = self._ints(args, 2, "set-group TAB GROUP VALUE")
        if len(args) < 3:
            raise ValueError("usage: set-group TAB GROUP VALUE")
        self.session.set_group_label(tab_idx, group_idx, " ".join(args[2:]))
        self._refresh(tab_idx)

    def _cmd_set_item(self, args: List[str]) -> None:
        usage = "set-item TAB GROUP ITEM FIELD VALUE"
        tab_idx, group_idx, item_idx = self._ints(args, 3, usage)
        if len(args) < 4:
            raise ValueError(f"usage: {usage}")
        value = " ".join(args[4:])
        self.session.set_item_field(tab_idx, group_idx, item_idx, args[3], value)
        self._refresh(tab_idx)

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------
    def _cmd_add_tab(self, args: List[str]) -> None:
        tab_idx = self.session.add_tab(" ".join(args)) if args else self.session.add_tab()
        self._refresh(tab_idx)

    def _cmd_del_tab(self, args: List[str]) -> None:
        (tab_idx,) = self._ints(args, 1, "del-tab TAB")
        removed = self.session.delete_tab(tab_idx)
        print(f"Deleted tab '{removed.display_label()}'")
        self._refresh()

    def _cmd_add_group(self, args: List[str]) -> None:
        (tab_idx,) = self._ints(args, 1, "add-group TAB [LABEL]")
        if len(args) > 1:
            self.session.add_group(tab_idx, " ".join(args[1:]))
        else:
            self.session.add_group(tab_idx)
        self._refresh(tab_idx)

    def _cmd_del_group(self, args: List[str]) -> None:
        tab_idx, group_idx = self._ints(args, 2, "del-group TAB GROUP")
        self.session.delete_group(tab_idx, group_idx)
        self._refresh(tab_idx)

    def _cmd_add_item(self, args: List[str]) -> None:
        tab_idx, group_idx = self._ints(args, 2, "add-item TAB GROUP [NAME]")
        if len(args) > 2:
            self.session.add_item(tab_idx, group_idx, " ".join(args[2:]))
        else:
            self.session.add_item(tab_idx, group_idx)
        self._refresh(tab_idx)

    def _cmd_del_item(self, args: List[str]) -> None:
        tab_idx, group_idx, item_idx = self._ints(args, 3, "del-item TAB GROUP ITEM")
        self.session.delete_item(tab_idx, group_idx, item_idx)
        self._refresh(tab_idx)

    def _cmd_toggle(self, args: List[str]) -> None:
        tab_idx, group_idx = self._ints(args, 2, "toggle TAB GROUP")
        self.session.toggle_group(tab_idx, group_idx)
        display_tab(self.session, tab_idx)

    def _cmd_revert(self, args: List[str]) -> None:
        (tab_idx,) = self._ints(args, 1, "revert TAB")
        if self.session.revert_tab(tab_idx):
            print(f"Tab {tab_idx} restored from the last save")
        else:
            print(f"Nothing to revert for tab {tab_idx}")
        self._refresh(tab_idx)

    def _cmd_apply(self, args: List[str]) -> None:
        if not args:
            raise ValueError("usage: apply FILE")
        self.session.apply_text(read_text(Path(args[0])))
        print("Menu applied from JSON.")
        self._refresh()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _cmd_save(self, args: List[str]) -> None:
        print("Saving...")
        result = self.coordinator.save()
        print(result.message)
        display_tabs(self.session)

    def _cmd_save_local(self, args: List[str]) -> None:
        print(self.coordinator.save_local().message)

    def _cmd_download(self, args: List[str]) -> None:
        print(self.coordinator.download().message)

    def _cmd_commit(self, args: List[str]) -> None:
        result = self.coordinator.commit_remote(token=args[0] if args else None)
        print(f"{result.message} (revision {result.revision})")
        display_tabs(self.session)

    def _cmd_login(self, args: List[str]) -> None:
        credentials = self.ask_credentials()
        if not credentials:
            print("Login cancelled")
            return
        token = encode_basic_token(*credentials)
        try:
            valid = self.coordinator.endpoint.verify_credentials(token)
        except requests.RequestException as e:
            logger.warning(f"Could not verify credentials: {e}")
            print("Server unreachable, credentials stored without verification")
            valid = True
        if not valid:
            print("Invalid credentials")
            return
        self.coordinator.store_credentials(*credentials)
        print("Logged in")

    def _cmd_logout(self, args: List[str]) -> None:
        self.coordinator.clear_credentials()
        print("Logged out")
