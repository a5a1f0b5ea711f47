import logging
from typing import Any, Optional

import certifi
import requests

from mugo_menu.auth import basic_header
from mugo_menu.menu.codec import menu_to_data
from mugo_menu.menu.schema import MenuDocument
from mugo_menu.menu_constants import MENU_FILENAME
from mugo_menu.settings import get_settings

logger = logging.getLogger(__name__)


class SaveEndpointClient:
    """
    HTTP client for the menu site: reads menu.json, posts to /save-menu and
    verifies admin credentials.

    No retry adapter is mounted; failed saves go back to the persistence
    coordinator (download fallback or re-login).
    """

    def __init__(
        self,
        site_url: Optional[str] = None,
        timeout: Optional[float] = None,
        verify_ssl: Optional[bool] = None,
        session: Optional[requests.Session] = None,
    ):
        cfg = get_settings()
        self.site_url = (site_url or cfg.site_url).rstrip("/")
        self.timeout = timeout if timeout is not None else cfg.http_timeout
        verify_ssl = cfg.verify_ssl if verify_ssl is None else verify_ssl
        self.verify = certifi.where() if verify_ssl else False

        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
        })

    def _url(self, path: str) -> str:
        return f"{self.site_url}/{path.lstrip('/')}"

    def _handle_response(self, resp: requests.Response) -> Any:
        """
        Raise for 4xx/5xx and decode the JSON body.

        Raises:
            requests.HTTPError: For 4xx/5xx HTTP status codes
            ValueError: If response is not valid JSON
        """
        try:
            resp.raise_for_status()
            if not resp.content:
                logger.warning(f"Empty response received for {resp.url}")
                return {}
            return resp.json()
        except requests.HTTPError:
            logger.error(f"HTTP {resp.status_code} error for {resp.url}: {resp.text}")
            raise
        except ValueError as e:
            logger.error(f"Invalid JSON response from {resp.url}: {resp.text[:200]}...")
            raise ValueError(f"Invalid JSON response: {e}")

    def fetch_menu(self) -> Any:
        """GET menu.json, bypassing caches."""
        resp = self.session.get(
            self._url(MENU_FILENAME),
            headers={"Cache-Control": "no-store"},
            timeout=self.timeout,
            verify=self.verify,
        )
        return self._handle_response(resp)

    def post_menu(self, document: MenuDocument, token: str) -> requests.Response:
        """
        POST the full document to /save-menu.

        The raw response is returned so the caller can act on the status code.
        Connection errors and timeouts propagate as requests exceptions.
        """
        logger.info(f"Posting menu ({len(document.tabs)} tabs) to {self._url('save-menu')}")
        return self.session.post(
            self._url("save-menu"),
            json=menu_to_data(document),
            headers={"Authorization": basic_header(token)},
            timeout=self.timeout,
            verify=self.verify,
        )

    def verify_credentials(self, token: str) -> bool:
        """Ask the server whether a basic token is valid (401 means no)."""
        resp = self.session.post(
            self._url("api/v1/auth/verify"),
            headers={"Authorization": basic_header(token)},
            timeout=self.timeout,
            verify=self.verify,
        )
        if resp.status_code == 401:
            return False
        self._handle_response(resp)
        return True
