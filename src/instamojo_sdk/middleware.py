"""
Middleware interface for InstamojoClient.

This module defines the `Middleware` protocol used in Instamojo SDK.
It allows users to hook into the request/response lifecycle of all HTTP operations
performed by the `InstamojoClient`, including the auth, deauth and upload calls.

Any class that implements this interface can be passed to the client as a middleware.

Current implementations:
- Logging (see: LoggingMiddleware) - logs requests/responses with timing
"""

from typing import Protocol

from instamojo_sdk.transport.base import Files
from instamojo_sdk.transport.base import UnifiedResponse


class Middleware(Protocol):
    async def on_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None,
        files: Files | None,
    ) -> None:
        """
        Called before the HTTP request is executed.

        This can be used to:
        - Log request details (current: LoggingMiddleware)
        - Add or modify headers
        - Cancel or abort execution (by raising)

        Args:
            method (str): HTTP method, e.g., 'GET', 'POST'
            url (str): Full URL of the request
            headers (dict): Request headers (modifiable)
            content (bytes | None): Raw request body
            files (dict | None): Multipart files, for uploads
        """

    async def on_response(self, response: UnifiedResponse) -> None:
        """
        Called after the HTTP response is received (but before it's decoded).

        Not called when the transport fails to reach the server.

        Args:
            response (UnifiedResponse): Unified response object from transport layer
        """
