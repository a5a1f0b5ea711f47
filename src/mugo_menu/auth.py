"""Basic-auth token helpers shared by the editor (client) and the server."""

import base64
import secrets
from typing import Optional


def encode_basic_token(username: str, password: str) -> str:
    """base64('user:pass') - the value sent after 'Basic ' in the Authorization header."""
    return base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")


def basic_header(token: str) -> str:
    return f"Basic {token}"


def check_authorization_header(header: Optional[str], username: str, password: str) -> bool:
    """Constant-time comparison of an Authorization header against the expected credentials."""
    expected = basic_header(encode_basic_token(username, password))
    return secrets.compare_digest((header or "").encode("utf-8"), expected.encode("utf-8"))
