"""
Session credentials and the implicit authentication flow.

A :class:`Session` holds everything needed to talk to the API on behalf of one
caller: the application id, the API version and either a session token or a
username/password pair that can be exchanged for one.

:class:`AuthManager` makes sure a token exists before any call that needs one.
When the caller did not supply a token, it performs a single auth call, keeps
the returned token and marks it as self-issued so the client can revoke it at
the end of the run. The username and password are dropped as soon as they
have been used.
"""

import logging
from typing import Awaitable
from typing import Callable
from typing import Optional

from instamojo_sdk.exceptions import AuthError
from instamojo_sdk.models import AuthResponse

logger = logging.getLogger("instamojo_sdk.auth")

IssueToken = Callable[[str, str], Awaitable[AuthResponse]]


class Session:
    """
    Per-caller credentials.

    Attributes:
        app_id (str): Application identifier sent with every request.
        api_version (str): API version used in the URL prefix.
        token (Optional[str]): Active session token, if any.
        username (Optional[str]): Username used to mint a token.
        password (Optional[str]): Password used to mint a token.
        self_issued (bool): True when ``token`` was obtained by the client
            rather than supplied by the caller.
    """

    def __init__(
        self,
        app_id: str,
        token: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        api_version: str = "1",
    ):
        if not app_id:
            raise ValueError("An application id is required")
        if not api_version:
            raise ValueError("An API version is required")
        self.app_id = app_id
        self.api_version = api_version
        self.token = token or None
        self.username = username or None
        self.password = password or None
        self.self_issued = False

    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    def clear_credentials(self) -> None:
        self.username = None
        self.password = None

    def __repr__(self) -> str:
        return (
            f"Session(app_id={self.app_id!r}, api_version={self.api_version!r}, "
            f"has_token={self.token is not None}, has_credentials={self.has_credentials()}, "
            f"self_issued={self.self_issued})"
        )


class AuthManager:
    """
    Ensures a session token is available before authenticated calls.

    Args:
        session (Session): Credentials to read from and update.
        issue_token (IssueToken): Coroutine function performing the auth call,
            typically :meth:`InstamojoClient.get_new_auth_token`.
    """

    def __init__(self, session: Session, issue_token: IssueToken):
        self.session = session
        self._issue_token = issue_token

    async def ensure_token(self) -> str:
        """
        Returns the session token, obtaining one first if needed.

        Returns:
            str: The active session token.

        Raises:
            AuthError: If there is no token and no username/password, or the
                auth call did not return a token. No token is stored then.
        """
        if self.session.token:
            return self.session.token

        if not self.session.has_credentials():
            raise AuthError(
                "No auth token available and no username/password to obtain one."
            )

        username, password = self.session.username, self.session.password
        self.session.clear_credentials()

        logger.debug("No auth token. Requesting one for this session...")
        result = await self._issue_token(username, password)

        if not result.success or not result.token:
            logger.error(f"Unable to get a valid Auth Token from API: {result.message}")
            raise AuthError(
                f"Unable to get a valid Auth Token from API: {result.message}",
                details=result,
            )

        self.session.token = result.token
        self.session.self_issued = True
        logger.debug("Self-issued auth token acquired")
        return result.token
