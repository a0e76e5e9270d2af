"""
Aiohttp transport implementation for Instamojo SDK.

This module provides AiohttpTransport, an alternative async HTTP client for the SDK.
The session is created lazily on first use so it binds to the running event loop.
"""

import asyncio

import aiohttp

from instamojo_sdk.exceptions import TransportError

from .base import BaseTransport
from .base import Files
from .base import UnifiedResponse


class AiohttpTransport(BaseTransport):
    """
    Async transport implementation using aiohttp.ClientSession.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
        files: Files | None = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        # Create session if not exists
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )

        payload = content
        if files:
            payload = aiohttp.FormData()
            for field, (filename, fileobj) in files.items():
                payload.add_field(field, fileobj, filename=filename)

        timeout_obj = aiohttp.ClientTimeout(total=timeout or self._timeout)
        try:
            async with self._session.request(
                method=method,
                url=url,
                headers=headers,
                data=payload,
                timeout=timeout_obj,
            ) as response:
                body = await response.read()
                return UnifiedResponse(response.status, body, dict(response.headers))
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(str(exc) or type(exc).__name__, url=url) from exc

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None
