import base64
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import certifi
import requests

from mugo_menu.errors import AuthenticationRequired, RemoteCommitError
from mugo_menu.settings import get_settings, RemoteRepoSettings

logger = logging.getLogger(__name__)


class RemoteRepoClient:
    """
    Client for a GitHub-style repository contents API.

    A commit is a read-then-write: the current revision marker (blob sha) of the
    file is read first and the new content is written keyed to it, so the API
    refuses the write when someone else changed the file in between.
    """

    def __init__(
        self,
        token: str,
        remote: Optional[RemoteRepoSettings] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        cfg = get_settings()
        self.remote: RemoteRepoSettings = remote or cfg.remote
        self.timeout = timeout if timeout is not None else cfg.http_timeout
        self.verify = certifi.where() if cfg.verify_ssl else False

        if not self.remote.owner or not self.remote.repo:
            raise RemoteCommitError("Remote repository owner/repo are not configured")

        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
        })

    def _contents_url(self, path: Optional[str] = None) -> str:
        api_base_url: str = str(self.remote.api_base_url)
        file_path = quote((path or self.remote.path).lstrip("/"), safe="/")
        return (
            f"{api_base_url.rstrip('/')}/repos/"
            f"{self.remote.owner}/{self.remote.repo}/contents/{file_path}"
        )

    def _handle_response(self, resp: requests.Response) -> Dict[str, Any]:
        if resp.status_code in (401, 403):
            logger.error(f"Remote API refused credentials ({resp.status_code}) for {resp.url}")
            raise AuthenticationRequired(f"Remote API rejected the token ({resp.status_code})")
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            logger.error(f"HTTP {resp.status_code} error for {resp.url}: {resp.text}")
            message = resp.reason or "Remote API error"
            try:
                message = resp.json().get("message", message)
            except ValueError:
                pass
            raise RemoteCommitError(message, status_code=resp.status_code) from e
        if not resp.content:
            return {}
        return resp.json()

    def get_revision(self, path: Optional[str] = None, branch: Optional[str] = None) -> Optional[str]:
        """Current revision marker (sha) of the file, or None when it does not exist yet."""
        resp = self.session.get(
            self._contents_url(path),
            params={"ref": branch or self.remote.branch},
            timeout=self.timeout,
            verify=self.verify,
        )
        if resp.status_code == 404:
            logger.info(f"{path or self.remote.path} not found on remote, it will be created")
            return None
        data = self._handle_response(resp)
        return data.get("sha")

    def put_file(
        self,
        content: str,
        sha: Optional[str],
        message: Optional[str] = None,
        path: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Write new content keyed to the given revision marker."""
        payload: Dict[str, Any] = {
            "message": message or self.remote.commit_message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": branch or self.remote.branch,
        }
        if sha:
            payload["sha"] = sha
        resp = self.session.put(
            self._contents_url(path),
            json=payload,
            timeout=self.timeout,
            verify=self.verify,
        )
        return self._handle_response(resp)

    def commit_file(self, content: str, message: Optional[str] = None) -> Dict[str, Any]:
        sha = self.get_revision()
        logger.info(
            f"Committing {self.remote.path} to {self.remote.owner}/{self.remote.repo}@{self.remote.branch} "
            f"(base revision: {sha or 'new file'})"
        )
        return self.put_file(content, sha=sha, message=message)
