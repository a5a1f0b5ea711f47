"""Tests for the interactive admin command loop (no terminal needed)."""
from unittest.mock import MagicMock

import pytest
import requests

from mugo_menu.editor.session import EditorSession
from mugo_menu.errors import AuthenticationRequired, MenuSaveError
from mugo_menu.interactive.admin_shell import AdminShell
from mugo_menu.menu.codec import menu_from_data
from mugo_menu.persistence.coordinator import SaveResult, SavedVia


MENU = {
    "tabs": [{"id": "t1", "label": "Drinks", "groups": [
        {"label": "Hot", "items": [{"name": "Espresso", "desc": "", "price": "2.50"}]}
    ]}]
}


@pytest.fixture
def session():
    return EditorSession(menu_from_data(MENU))


@pytest.fixture
def coordinator():
    return MagicMock()


@pytest.fixture
def shell(session, coordinator):
    return AdminShell(session, coordinator, ask_credentials=MagicMock(return_value=("admin", "pw")))


class TestEditing:
    def test_set_item_edits_and_marks_dirty(self, shell, session):
        assert shell.handle('set-item 0 0 0 desc "double shot"') is True
        assert session.document.tabs[0].groups[0].items[0].desc == "double shot"
        assert session.is_dirty(0)

    def test_set_item_with_empty_value(self, shell, session):
        shell.handle("set-item 0 0 0 price")
        assert session.document.tabs[0].groups[0].items[0].price == ""

    def test_revert(self, shell, session):
        shell.handle("set-tab 0 label Bar")
        shell.handle("revert 0")
        assert session.document.tabs[0].label == "Drinks"
        assert not session.is_dirty()

    def test_add_and_delete(self, shell, session):
        shell.handle("add-item 0 0 Cappuccino")
        assert session.document.tabs[0].groups[0].items[1].name == "Cappuccino"
        shell.handle("del-item 0 0 0")
        assert [i.name for i in session.document.tabs[0].groups[0].items] == ["Cappuccino"]

    def test_apply_invalid_file_reports_and_keeps_menu(self, shell, session, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text("{nope", encoding="utf-8")

        shell.handle(f"apply {bad}")

        assert "Invalid JSON" in capsys.readouterr().out
        assert session.document.tabs[0].label == "Drinks"

    def test_user_errors_do_not_stop_the_loop(self, shell, capsys):
        assert shell.handle("set-item 0 0 9 name x") is True
        assert shell.handle("set-item a b c name x") is True
        assert shell.handle("frobnicate") is True
        out = capsys.readouterr().out
        assert "Error:" in out
        assert "Unknown command" in out

    def test_quit(self, shell):
        assert shell.handle("quit") is False


class TestPersistenceCommands:
    def test_save_reports_result(self, shell, coordinator, capsys):
        coordinator.save.return_value = SaveResult(via=SavedVia.SERVER, message="Save completed")
        shell.handle("save")
        coordinator.save.assert_called_once()
        assert "Save completed" in capsys.readouterr().out

    def test_save_auth_failure_asks_to_log_in(self, shell, coordinator, capsys):
        coordinator.save.side_effect = AuthenticationRequired("Credentials rejected by the server")
        assert shell.handle("save") is True
        assert "login" in capsys.readouterr().out

    def test_save_server_error(self, shell, coordinator, capsys):
        coordinator.save.side_effect = MenuSaveError("Failed to save file", status_code=500)
        shell.handle("save")
        assert "Save failed: Failed to save file" in capsys.readouterr().out

    def test_login_verifies_on_server(self, shell, coordinator):
        coordinator.endpoint.verify_credentials.return_value = True
        shell.handle("login")
        coordinator.store_credentials.assert_called_once_with("admin", "pw")

    def test_login_rejected(self, shell, coordinator, capsys):
        coordinator.endpoint.verify_credentials.return_value = False
        shell.handle("login")
        coordinator.store_credentials.assert_not_called()
        assert "Invalid credentials" in capsys.readouterr().out

    def test_preview_writes_html(self, shell, tmp_path):
        out = tmp_path / "preview.html"
        shell.handle(f"preview {out}")
        assert "Espresso" in out.read_text(encoding="utf-8")

    def test_commit_network_failure_is_reported_as_network_error(self, shell, coordinator, capsys):
        coordinator.commit_remote.side_effect = requests.ConnectionError("connection refused")

        assert shell.handle("commit tok") is True
        out = capsys.readouterr().out
        assert "Network error: connection refused" in out
        assert "File error" not in out

    def test_apply_missing_file_is_reported_as_file_error(self, shell, tmp_path, capsys):
        assert shell.handle(f"apply {tmp_path / 'missing.json'}") is True
        assert "File error" in capsys.readouterr().out
