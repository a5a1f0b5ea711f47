"""
Exception hierarchy shared by the editor, the persistence layer and the CLIs.

Categories follow how the admin reacts to them:
- MenuParseError: text typed in the editor is not a menu; shown inline, nothing applied
- AuthenticationRequired: credentials missing or rejected; ask the user to log in again
- MenuSaveError: the save endpoint answered with an error; shown as a status message
- RemoteCommitError: the remote contents API refused the commit
"""

from typing import Optional


class MenuError(Exception):
    """Base class for all menu errors"""


class MenuParseError(MenuError):
    """Raised when a menu document cannot be parsed"""


class AuthenticationRequired(MenuError):
    """Raised when a save needs credentials the user did not (validly) provide"""


class MenuSaveError(MenuError):
    """Raised when the save endpoint rejects a save with a non-auth error"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteCommitError(MenuError):
    """Raised when the remote contents API rejects a read or a write"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
