"""
Async-first Instamojo API SDK Client.

This module provides the main InstamojoClient class that handles all interactions
with the Instamojo API. Features include:

- Async-first design with async/await for all API operations
- Implicit authentication: a token is minted from username/password when the
  caller does not supply one, and can be revoked when the work is done
- Multiple HTTP transport backends (httpx, aiohttp, requests)
- Pluggable middleware system for request/response processing
- Uniform result envelopes: transport and decode failures come back as
  ``success=False`` results instead of exceptions

Example usage:
    from instamojo_sdk import InstamojoClient, InstamojoSettings, Session

    settings = InstamojoSettings()
    session = Session(app_id="my-app", username="me", password="secret")

    async with InstamojoClient(settings, session) as client:
        result = await client.list_offers()
        for offer in result.offers:
            print(offer.title)
        await client.revoke_self_issued_token()
"""

import json
import logging
import os
from pathlib import Path
from typing import cast

from instamojo_sdk import actions
from instamojo_sdk.auth import AuthManager
from instamojo_sdk.auth import Session
from instamojo_sdk.config import InstamojoSettings
from instamojo_sdk.decoder import decode_response
from instamojo_sdk.exceptions import AuthError
from instamojo_sdk.exceptions import TransportError
from instamojo_sdk.logging_middleware import redact_url
from instamojo_sdk.middleware import Middleware
from instamojo_sdk.models import APIResponse
from instamojo_sdk.models import ArchiveResponse
from instamojo_sdk.models import AuthResponse
from instamojo_sdk.models import DeAuthResponse
from instamojo_sdk.models import FileUploadResponse
from instamojo_sdk.models import ListOffersResponse
from instamojo_sdk.models import OfferDetailsResponse
from instamojo_sdk.transport import get_transport
from instamojo_sdk.transport.base import Files
from instamojo_sdk.transport.base import UnifiedResponse

logger = logging.getLogger("instamojo_sdk.client")

APP_ID_HEADER = "X-App-Id"
AUTH_TOKEN_HEADER = "X-Auth-Token"
UPLOAD_FIELD = "fileUpload"

CONNECTION_FAILURE_MESSAGE = (
    "Error connecting to or retrieving response from API URL. "
    "Please check connectivity. API URL: {url}"
)


def connection_failure_body(url: str) -> str:
    """Failure envelope, as JSON text, standing in for an unreachable server."""
    return json.dumps(
        {"success": False, "message": CONNECTION_FAILURE_MESSAGE.format(url=url)}
    )


class InstamojoClient:
    """
    Async client for the Instamojo API.

    Args:
        settings (InstamojoSettings): SDK configuration (base URL, timeout, transport)
        session (Session): Credentials for this caller; updated in place when a
                           token is issued or revoked
        transport_name (str | None): Transport backend ('httpx', 'aiohttp', 'requests').
                                   Defaults to settings.transport
        middlewares (list[Middleware] | None): Optional list of middleware hooks for
                                             request/response processing

    Example:
        from instamojo_sdk.logging_middleware import LoggingMiddleware

        client = InstamojoClient(
            settings=InstamojoSettings(),
            session=Session(app_id="my-app", token="abc"),
            transport_name="httpx",
            middlewares=[LoggingMiddleware()],
        )
        details = await client.get_offer_details("my-offer")
        await client.aclose()
    """

    def __init__(
        self,
        settings: InstamojoSettings,
        session: Session,
        transport_name: str | None = None,
        middlewares: list[Middleware] | None = None,
    ):
        self.settings = settings
        self.session = session
        self.auth = AuthManager(session, self.get_new_auth_token)
        transport = transport_name or settings.transport
        self.transport = get_transport(transport, timeout=settings.timeout)
        self.middlewares = middlewares or []

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
        files: Files | None = None,
    ) -> UnifiedResponse:
        headers = headers or {}

        # === MIDDLEWARE: before request ===
        for mw in self.middlewares:
            await mw.on_request(
                method=method,
                url=url,
                headers=headers,
                content=content,
                files=files,
            )

        response = await self.transport.request(
            method=method,
            url=url,
            headers=headers,
            content=content,
            files=files,
        )

        # === MIDDLEWARE: after response ===
        for mw in self.middlewares:
            await mw.on_response(response)

        if response.status_code >= 400:
            logger.debug(f"{method} {redact_url(url)} returned {response.status_code}")
        return response

    async def _call(self, action: str, data=None) -> APIResponse:
        """
        Run one action and decode its response.

        Non-auth actions first make sure a session token exists, which may
        cost one extra auth round-trip. Raises AuthError if none can be had.
        """
        if action != actions.AUTH:
            await self.auth.ensure_token()

        request = actions.route(action, "" if data is None else data)
        url = actions.build_url(
            self.settings.base_url, self.session.api_version, request.path
        )
        headers = {APP_ID_HEADER: self.session.app_id, **request.headers}
        if action != actions.AUTH:
            headers[AUTH_TOKEN_HEADER] = self.session.token

        try:
            response = await self._send(
                request.method, url, headers=headers, content=request.body or None
            )
            body: str | bytes = response.content
        except TransportError as exc:
            logger.warning(f"Could not reach {redact_url(url)}: {exc}")
            body = connection_failure_body(url)

        return decode_response(action, body)

    async def get_new_auth_token(
        self, username: str | None = None, password: str | None = None
    ) -> AuthResponse:
        """
        Exchange a username and password for a new session token.

        When called without arguments the session's stored credentials are
        used and then cleared. The session itself is not changed otherwise;
        the returned token is the caller's to keep or revoke.

        Raises:
            AuthError: If no username/password is available.
        """
        if username is None and password is None:
            username, password = self.session.username, self.session.password
            self.session.clear_credentials()
        if not username or not password:
            raise AuthError("Both username and password are required to get a token.")
        return cast(AuthResponse, await self._call(actions.AUTH, (username, password)))

    async def delete_auth_token(self, token: str | None = None) -> DeAuthResponse:
        """
        Revoke a session token (the session's own token by default).

        If the revoked token is the session's token, the session forgets it.
        """
        token = token or self.session.token
        if not token:
            return DeAuthResponse(success=False, message="No auth token to delete.")

        result = cast(DeAuthResponse, await self._call(actions.DEAUTH, token))
        if result.success and token == self.session.token:
            self.session.token = None
            self.session.self_issued = False
        return result

    async def revoke_self_issued_token(self) -> DeAuthResponse | None:
        """
        Revoke the token the client obtained on the caller's behalf, if any.

        Returns:
            DeAuthResponse | None: The deauth result, or None when there was no
            self-issued token to revoke.
        """
        if not (self.session.self_issued and self.session.token):
            return None
        logger.debug("Revoking self-issued auth token")
        return await self.delete_auth_token(self.session.token)

    async def list_offers(self) -> ListOffersResponse:
        """
        List all offers created under the application.

        Only short URL, title, slug and status are filled in on each offer.
        """
        return cast(ListOffersResponse, await self._call(actions.LIST_OFFERS))

    async def get_offer_details(self, offer_slug: str) -> OfferDetailsResponse:
        """Fetch every field of one offer."""
        return cast(
            OfferDetailsResponse, await self._call(actions.OFFER_DETAILS, offer_slug)
        )

    async def archive_offer(self, offer_slug: str) -> ArchiveResponse:
        """Archive an existing offer."""
        return cast(ArchiveResponse, await self._call(actions.ARCHIVE_OFFER, offer_slug))

    async def upload_file(self, file_path: str | os.PathLike) -> FileUploadResponse:
        """
        Upload a file (offer content or cover image).

        This is a two-step flow:
        1. Ask the API for an ephemeral upload URL.
        2. POST the file to that URL as the multipart field ``fileUpload``.

        The body returned by the upload URL is stored uninterpreted in
        ``upload_json``. A failure at any step stops the flow and is reported
        through ``success``/``message``.

        Args:
            file_path: Path to the local file to upload.

        Returns:
            FileUploadResponse: The upload URL result, extended with ``upload_json``.
        """
        result = cast(
            FileUploadResponse, await self._call(actions.GET_FILE_UPLOAD_URL)
        )
        if not result.success or not result.upload_url:
            return result

        path = Path(file_path)
        try:
            with path.open("rb") as fileobj:
                response = await self._send(
                    "POST", result.upload_url, files={UPLOAD_FIELD: (path.name, fileobj)}
                )
        except TransportError as exc:
            logger.warning(f"Upload to {result.upload_url} failed: {exc}")
            return result.model_copy(
                update={
                    "success": False,
                    "message": CONNECTION_FAILURE_MESSAGE.format(url=result.upload_url),
                }
            )
        except OSError as exc:
            logger.warning(f"Could not read {path}: {exc}")
            return result.model_copy(update={"success": False, "message": str(exc)})

        return result.model_copy(update={"upload_json": response.text})

    async def aclose(self):
        """
        Close the underlying transport.

        Does not revoke tokens; call :meth:`revoke_self_issued_token` first if
        the client minted one.
        """
        await self.transport.close()

    async def __aenter__(self) -> "InstamojoClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
