"""
Tests for the menu site API (save endpoint, menu.json, storefront, auth check).

The repository dependency is overridden with a LocalFileRepository on tmp_path.
"""
import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from mugo_menu.auth import basic_header, encode_basic_token
from api.dependencies import get_repository
from api.main import create_app
from api.repositories.local import LocalFileRepository


ESPRESSO_MENU = {
    "tabs": [{"id": "t1", "label": "Drinks", "groups": [
        {"label": "Hot", "items": [{"name": "Espresso", "desc": "", "price": "2.50"}]}
    ]}]
}

VALID_AUTH = {"Authorization": basic_header(encode_basic_token("admin", "mugo1234kf"))}


@pytest.fixture(autouse=True)
def default_credentials(monkeypatch):
    monkeypatch.delenv("MUGO_ADMIN_USER", raising=False)
    monkeypatch.delenv("MUGO_ADMIN_PASS", raising=False)


@pytest.fixture
def repo(tmp_path):
    return LocalFileRepository(menu_path=tmp_path / "menu.json")


@pytest.fixture
def client(repo):
    app = create_app()
    app.dependency_overrides[get_repository] = lambda: repo
    return TestClient(app)


class TestSaveMenu:
    """POST /save-menu"""

    def test_missing_credentials(self, client, repo):
        resp = client.post("/save-menu", json=ESPRESSO_MENU)

        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}
        assert resp.headers["WWW-Authenticate"] == 'Basic realm="MUGO Admin"'
        assert not repo.exists()

    def test_wrong_credentials(self, client):
        headers = {"Authorization": basic_header(encode_basic_token("admin", "wrong"))}
        assert client.post("/save-menu", json=ESPRESSO_MENU, headers=headers).status_code == 401

    def test_credentials_from_environment(self, client, monkeypatch):
        monkeypatch.setenv("MUGO_ADMIN_USER", "chef")
        monkeypatch.setenv("MUGO_ADMIN_PASS", "tiramisu")
        headers = {"Authorization": basic_header(encode_basic_token("chef", "tiramisu"))}

        assert client.post("/save-menu", json=ESPRESSO_MENU, headers=headers).status_code == 200
        assert client.post("/save-menu", json=ESPRESSO_MENU, headers=VALID_AUTH).status_code == 401

    def test_save_writes_pretty_json(self, client, repo):
        resp = client.post("/save-menu", json=ESPRESSO_MENU, headers=VALID_AUTH)

        assert resp.status_code == 200
        assert resp.json() == {"ok": True}
        assert repo.menu_path.read_text(encoding="utf-8") == json.dumps(ESPRESSO_MENU, indent=2)

    def test_previous_menu_is_backed_up(self, client, repo):
        client.post("/save-menu", json={"tabs": []}, headers=VALID_AUTH)
        client.post("/save-menu", json=ESPRESSO_MENU, headers=VALID_AUTH)

        backup = repo.menu_path.with_name("menu.json.bak")
        assert json.loads(backup.read_text(encoding="utf-8")) == {"tabs": []}
        assert json.loads(repo.menu_path.read_text(encoding="utf-8")) == ESPRESSO_MENU

    @pytest.mark.parametrize("body", [b"[1, 2]", b"\"menu\"", b"{broken", b""])
    def test_invalid_payload(self, client, body):
        headers = {**VALID_AUTH, "Content-Type": "application/json"}
        resp = client.post("/save-menu", content=body, headers=headers)

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid payload"}

    def test_write_failure(self, repo):
        broken = MagicMock()
        broken.save_menu.side_effect = OSError("disk full")
        app = create_app()
        app.dependency_overrides[get_repository] = lambda: broken

        resp = TestClient(app).post("/save-menu", json=ESPRESSO_MENU, headers=VALID_AUTH)

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to save file"}


class TestReadMenu:
    def test_save_then_load_round_trip(self, client):
        client.post("/save-menu", json=ESPRESSO_MENU, headers=VALID_AUTH)

        resp = client.get("/menu.json")

        assert resp.status_code == 200
        assert resp.json() == ESPRESSO_MENU
        assert resp.headers["Cache-Control"] == "no-store"

    def test_no_menu_yet(self, client):
        assert client.get("/menu.json").json() == {"tabs": []}

    def test_storefront_renders_saved_menu(self, client):
        client.post("/save-menu", json=ESPRESSO_MENU, headers=VALID_AUTH)

        resp = client.get("/")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "Espresso" in resp.text

    def test_storefront_with_corrupt_file_is_empty(self, client, repo):
        repo.menu_path.write_text("{corrupt", encoding="utf-8")
        resp = client.get("/")
        assert resp.status_code == 200
        assert "menu-card" not in resp.text

    def test_admin_preview(self, client):
        client.post("/save-menu", json=ESPRESSO_MENU, headers=VALID_AUTH)
        assert "Espresso" in client.get("/admin/preview").text


class TestAuthVerify:
    def test_valid(self, client):
        resp = client.post("/api/v1/auth/verify", headers=VALID_AUTH)
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "user": "admin"}

    def test_invalid(self, client):
        resp = client.post("/api/v1/auth/verify", headers={"Authorization": "Basic bm9wZQ=="})
        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized"}
