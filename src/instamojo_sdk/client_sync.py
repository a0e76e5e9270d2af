"""
Synchronous wrapper for InstamojoClient.

This module provides a synchronous interface on top of the async InstamojoClient
to support users who need sync operations.
"""

import asyncio
import os

from .auth import Session
from .client import InstamojoClient
from .config import InstamojoSettings
from .middleware import Middleware
from .models import ArchiveResponse
from .models import AuthResponse
from .models import DeAuthResponse
from .models import FileUploadResponse
from .models import ListOffersResponse
from .models import OfferDetailsResponse


class InstamojoClientSync:
    """
    Synchronous wrapper for InstamojoClient.

    All calls run on one private event loop, so the underlying transport can
    keep its connections between calls.

    Example:
        with InstamojoClientSync(settings, session) as client:
            offers = client.list_offers().offers
            client.revoke_self_issued_token()
    """

    def __init__(
        self,
        settings: InstamojoSettings,
        session: Session,
        transport_name: str | None = None,
        middlewares: list[Middleware] | None = None,
    ):
        """
        Initialize the synchronous client.

        Args:
            settings: API configuration settings
            session: Caller credentials
            transport_name: HTTP transport to use (httpx, aiohttp, requests)
            middlewares: Optional request/response hooks
        """
        self._loop = asyncio.new_event_loop()
        self._async_client = InstamojoClient(
            settings=settings,
            session=session,
            transport_name=transport_name,
            middlewares=middlewares,
        )

    @property
    def session(self) -> Session:
        return self._async_client.session

    def _run(self, coro):
        return self._loop.run_until_complete(coro)

    def get_new_auth_token(
        self, username: str | None = None, password: str | None = None
    ) -> AuthResponse:
        return self._run(self._async_client.get_new_auth_token(username, password))

    def delete_auth_token(self, token: str | None = None) -> DeAuthResponse:
        return self._run(self._async_client.delete_auth_token(token))

    def revoke_self_issued_token(self) -> DeAuthResponse | None:
        return self._run(self._async_client.revoke_self_issued_token())

    def list_offers(self) -> ListOffersResponse:
        """
        Synchronous offers listing.

        Raises:
            AuthError: If no token could be obtained
        """
        return self._run(self._async_client.list_offers())

    def get_offer_details(self, offer_slug: str) -> OfferDetailsResponse:
        return self._run(self._async_client.get_offer_details(offer_slug))

    def archive_offer(self, offer_slug: str) -> ArchiveResponse:
        return self._run(self._async_client.archive_offer(offer_slug))

    def upload_file(self, file_path: str | os.PathLike) -> FileUploadResponse:
        return self._run(self._async_client.upload_file(file_path))

    def close(self):
        """
        Synchronous cleanup of client resources.
        """
        if self._loop.is_closed():
            return
        try:
            self._run(self._async_client.aclose())
        finally:
            self._loop.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
