import httpx

from instamojo_sdk.exceptions import TransportError

from .base import BaseTransport
from .base import Files
from .base import UnifiedResponse


class HttpxTransport(BaseTransport):
    """
    Async transport implementation using httpx.AsyncClient.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._client = httpx.AsyncClient(timeout=self._timeout)

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
        files: Files | None = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        try:
            response = await self._client.request(
                method=method,
                url=url,
                headers=headers,
                content=None if files else content,
                files=files,
                timeout=timeout or self._timeout,
            )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(str(exc), url=url) from exc
        return UnifiedResponse(
            response.status_code, response.content, dict(response.headers)
        )

    async def close(self):
        await self._client.aclose()
