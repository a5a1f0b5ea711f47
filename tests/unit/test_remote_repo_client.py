"""Unit tests for the remote repository contents client (HTTP is mocked)."""
import base64
import json
from unittest.mock import MagicMock

import pytest
import requests

from mugo_menu.adapters.remote_repo.client import RemoteRepoClient
from mugo_menu.errors import AuthenticationRequired, RemoteCommitError
from mugo_menu.settings import RemoteRepoSettings


def _response(status_code: int, body=None) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(body).encode("utf-8") if body is not None else b""
    return resp


@pytest.fixture
def remote():
    return RemoteRepoSettings(
        api_base_url="https://api.example.test",
        owner="mugo",
        repo="site",
        branch="gh-pages",
        path="data/menu.json",
    )


@pytest.fixture
def http():
    return MagicMock()


@pytest.fixture
def client(remote, http):
    return RemoteRepoClient(token="secret", remote=remote, session=http)


class TestCommitFile:
    """Read-then-write keyed to the revision marker."""

    def test_existing_file_is_updated_against_its_sha(self, client, http):
        http.get.return_value = _response(200, {"sha": "old-sha"})
        http.put.return_value = _response(200, {"content": {"sha": "new-sha"}})

        result = client.commit_file('{"tabs": []}', message="Update menu")

        assert result["content"]["sha"] == "new-sha"
        url = "https://api.example.test/repos/mugo/site/contents/data/menu.json"
        assert http.get.call_args.args[0] == url
        assert http.get.call_args.kwargs["params"] == {"ref": "gh-pages"}

        payload = http.put.call_args.kwargs["json"]
        assert http.put.call_args.args[0] == url
        assert payload["sha"] == "old-sha"
        assert payload["branch"] == "gh-pages"
        assert payload["message"] == "Update menu"
        assert base64.b64decode(payload["content"]).decode("utf-8") == '{"tabs": []}'

    def test_missing_file_is_created_without_sha(self, client, http):
        http.get.return_value = _response(404, {"message": "Not Found"})
        http.put.return_value = _response(201, {"content": {"sha": "first"}})

        client.commit_file("{}")

        assert "sha" not in http.put.call_args.kwargs["json"]

    def test_default_commit_message(self, client, http, remote):
        http.get.return_value = _response(404)
        http.put.return_value = _response(201, {"content": {"sha": "first"}})

        client.commit_file("{}")

        assert http.put.call_args.kwargs["json"]["message"] == remote.commit_message

    def test_token_is_sent_as_bearer(self, client, http):
        http.headers.update.assert_called_once()
        headers = http.headers.update.call_args.args[0]
        assert headers["Authorization"] == "Bearer secret"


class TestErrors:
    def test_rejected_token(self, client, http):
        http.get.return_value = _response(401, {"message": "Bad credentials"})
        with pytest.raises(AuthenticationRequired):
            client.commit_file("{}")
        http.put.assert_not_called()

    def test_conflict_is_reported(self, client, http):
        http.get.return_value = _response(200, {"sha": "old-sha"})
        http.put.return_value = _response(409, {"message": "data/menu.json does not match old-sha"})

        with pytest.raises(RemoteCommitError, match="does not match") as exc_info:
            client.commit_file("{}")
        assert exc_info.value.status_code == 409

    def test_unconfigured_repository(self, http):
        with pytest.raises(RemoteCommitError, match="not configured"):
            RemoteRepoClient(token="t", remote=RemoteRepoSettings(owner="", repo=""), session=http)
