import asyncio

import requests

from instamojo_sdk.exceptions import TransportError

from .base import BaseTransport
from .base import Files
from .base import UnifiedResponse


class RequestsTransport(BaseTransport):
    """
    Sync transport implementation using requests.Session.

    This transport wraps the synchronous requests library in an async interface
    to provide compatibility with the async-first SDK design.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._session = requests.Session()

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
        files: Files | None = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        """
        Async wrapper around synchronous requests.

        This method runs the synchronous requests call in a thread pool
        to avoid blocking the event loop.
        """
        loop = asyncio.get_running_loop()

        def make_request() -> requests.Response:
            return self._session.request(
                method=method,
                url=url,
                headers=headers or {},
                data=None if files else content,
                files=files,
                timeout=timeout or self._timeout,
            )

        try:
            response = await loop.run_in_executor(None, make_request)
        except requests.RequestException as exc:
            raise TransportError(str(exc), url=url) from exc
        return UnifiedResponse(
            response.status_code, response.content, dict(response.headers)
        )

    async def close(self):
        """
        Async wrapper for closing the session.
        """
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._session.close)
