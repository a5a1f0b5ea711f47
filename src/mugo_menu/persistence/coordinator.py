"""
Persistence Coordinator - decides where an editor session's menu ends up.

Save policy (server path):
    no stored token     -> ask for credentials first
    POST /save-menu 2xx -> saved; snapshot taken, dirty flags cleared
    network error / 404 -> menu.json written to the download directory
    401                 -> ask for credentials, retry exactly once
    other non-2xx       -> MenuSaveError

The remote commit path is independent: read the file's revision marker on the
remote repository, then write the new content keyed to it.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Tuple

import requests

from mugo_menu.adapters.remote_repo.client import RemoteRepoClient
from mugo_menu.adapters.save_endpoint.client import SaveEndpointClient
from mugo_menu.auth import encode_basic_token
from mugo_menu.editor.local_store import LocalStore
from mugo_menu.editor.session import EditorSession
from mugo_menu.errors import AuthenticationRequired, MenuSaveError
from mugo_menu.menu.codec import dump_menu, menu_to_data
from mugo_menu.menu_constants import (
    AUTH_FLAG_KEY,
    AUTH_TOKEN_KEY,
    MENU_CACHE_KEY,
    REMOTE_TOKEN_KEY,
)
from mugo_menu.persistence.download import FileDownloader
from mugo_menu.settings import get_settings

logger = logging.getLogger(__name__)

# Returns (username, password), or None when the user cancels
CredentialPrompt = Callable[[], Optional[Tuple[str, str]]]


class SavedVia(Enum):
    SERVER = "server"
    DOWNLOAD = "download"
    REMOTE_COMMIT = "remote_commit"
    LOCAL_STORE = "local_store"


@dataclass
class SaveResult:
    """Outcome of a successful persistence action"""
    via: SavedVia
    message: str
    path: Optional[Path] = None
    revision: Optional[str] = None


class PersistenceCoordinator:
    """
    Persists the document of one EditorSession.

    Only a server save or a remote commit counts as "saved": those take a new
    snapshot and clear the dirty flags. Downloads and local-store copies leave
    the dirty state as it is.
    """

    def __init__(
        self,
        session: EditorSession,
        endpoint: SaveEndpointClient,
        downloader: FileDownloader,
        store: LocalStore,
        prompt_credentials: Optional[CredentialPrompt] = None,
        remote_client_factory: Callable[[str], RemoteRepoClient] = RemoteRepoClient,
    ):
        self.session = session
        self.endpoint = endpoint
        self.downloader = downloader
        self.store = store
        self.prompt_credentials = prompt_credentials
        self.remote_client_factory = remote_client_factory

    @classmethod
    def from_settings(
        cls,
        session: EditorSession,
        prompt_credentials: Optional[CredentialPrompt] = None,
        site_url: Optional[str] = None,
    ) -> "PersistenceCoordinator":
        """Wire a coordinator with the clients and paths configured in settings."""
        cfg = get_settings()
        return cls(
            session=session,
            endpoint=SaveEndpointClient(site_url=site_url),
            downloader=FileDownloader(cfg.download_dir),
            store=LocalStore(cfg.local_store_path),
            prompt_credentials=prompt_credentials,
        )

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    def store_credentials(self, username: str, password: str) -> str:
        token = encode_basic_token(username, password)
        self.store.set(AUTH_FLAG_KEY, "1")
        self.store.set(AUTH_TOKEN_KEY, token)
        return token

    def clear_credentials(self) -> None:
        self.store.remove(AUTH_FLAG_KEY)
        self.store.remove(AUTH_TOKEN_KEY)

    def _login_via_prompt(self) -> str:
        if self.prompt_credentials is None:
            raise AuthenticationRequired("Authentication required")
        credentials = self.prompt_credentials()
        if not credentials or not credentials[0] or not credentials[1]:
            raise AuthenticationRequired("Authentication required")
        return self.store_credentials(*credentials)

    # ------------------------------------------------------------------
    # Server save
    # ------------------------------------------------------------------
    def save(self) -> SaveResult:
        document = self.session.document
        token = self.store.get(AUTH_TOKEN_KEY)
        if not token:
            logger.info("No stored credentials, asking for login before saving")
            token = self._login_via_prompt()

        retried = False
        while True:
            try:
                resp = self.endpoint.post_menu(document, token)
            except (requests.ConnectionError, requests.Timeout) as e:
                logger.warning(f"Save endpoint unreachable ({e}), falling back to download")
                return self._download_fallback("Server unreachable")

            if resp.status_code == 404:
                logger.warning("Save endpoint not found (404), falling back to download")
                return self._download_fallback("Save endpoint not available")

            if resp.status_code == 401:
                if retried:
                    self.clear_credentials()
                    raise AuthenticationRequired("Credentials rejected by the server")
                logger.info("Save rejected with 401, asking for credentials and retrying once")
                retried = True
                token = self._login_via_prompt()
                continue

            if not resp.ok:
                message = self._error_message(resp)
                logger.error(f"Save failed with HTTP {resp.status_code}: {message}")
                raise MenuSaveError(message, status_code=resp.status_code)

            break

        self._mark_saved()
        logger.info("Menu saved to server")
        return SaveResult(via=SavedVia.SERVER, message="Save completed")

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return resp.reason or "Save failed"

    def _download_fallback(self, reason: str) -> SaveResult:
        path = self.downloader.download(self.session.document)
        return SaveResult(via=SavedVia.DOWNLOAD, message=f"{reason}: menu downloaded to {path}", path=path)

    def _mark_saved(self) -> None:
        self.session.mark_saved()
        self.store.set(MENU_CACHE_KEY, json.dumps(menu_to_data(self.session.document), ensure_ascii=False))

    # ------------------------------------------------------------------
    # Remote repository commit
    # ------------------------------------------------------------------
    def commit_remote(self, token: Optional[str] = None, message: Optional[str] = None) -> SaveResult:
        """Commit menu.json to the remote repository using a user-supplied token."""
        if token:
            self.store.set(REMOTE_TOKEN_KEY, token)
        else:
            token = self.store.get(REMOTE_TOKEN_KEY)
        if not token:
            configured = get_settings().remote.token
            token = configured.get_secret_value() if configured else None
        if not token:
            raise AuthenticationRequired("A remote API token is required to commit")

        client = self.remote_client_factory(token)
        result = client.commit_file(dump_menu(self.session.document), message=message)
        revision = (result.get("content") or {}).get("sha")

        self._mark_saved()
        logger.info(f"Menu committed to remote repository (revision {revision})")
        return SaveResult(via=SavedVia.REMOTE_COMMIT, message="Commit completed", revision=revision)

    # ------------------------------------------------------------------
    # Local copies
    # ------------------------------------------------------------------
    def save_local(self) -> SaveResult:
        self.store.set(MENU_CACHE_KEY, json.dumps(menu_to_data(self.session.document), ensure_ascii=False))
        return SaveResult(via=SavedVia.LOCAL_STORE, message="Saved to local store")

    def download(self) -> SaveResult:
        path = self.downloader.download(self.session.document)
        return SaveResult(via=SavedVia.DOWNLOAD, message=f"Menu downloaded to {path}", path=path)
