"""
Test utilities and mock objects for Instamojo SDK.

This module provides a mock transport and helpers to build canned responses
for testing the SDK without making real HTTP requests.
"""

import json

from instamojo_sdk.exceptions import TransportError
from instamojo_sdk.transport.base import UnifiedResponse


def json_response(payload, status_code=200) -> UnifiedResponse:
    """Build a response whose body is ``payload`` encoded as JSON."""
    return UnifiedResponse(status_code, json.dumps(payload).encode())


def raw_response(body: str | bytes, status_code=200) -> UnifiedResponse:
    if isinstance(body, str):
        body = body.encode()
    return UnifiedResponse(status_code, body)


def connection_refused(call):
    raise TransportError("[Errno 111] Connection refused", url=call["url"])


class RoutedHandler:
    """
    Handler answering by (method, URL suffix).

    Example:
        RoutedHandler({("POST", "/auth/"): {"success": True, "token": "t"}})

    Values may be dicts (sent as JSON), strings (sent verbatim), UnifiedResponse
    instances, or callables taking the recorded call.
    """

    def __init__(self, routes):
        self.routes = routes

    def __call__(self, call):
        for (method, suffix), answer in self.routes.items():
            if call["method"] == method and call["url"].endswith(suffix):
                if callable(answer):
                    return answer(call)
                if isinstance(answer, UnifiedResponse):
                    return answer
                if isinstance(answer, str):
                    return raw_response(answer)
                return json_response(answer)
        return json_response({"success": False, "message": "Not found"}, 404)


class MockTransport:
    """Mock transport for testing."""

    def __init__(self, handler=None):
        """
        Initialize mock transport.

        Args:
            handler: Optional function that takes the recorded call (a dict)
                   and returns a UnifiedResponse or raises TransportError.
                   If not provided, every call succeeds with an empty envelope.
        """
        self.handler = handler
        self.request_calls = []
        self.closed = False

    @property
    def request_count(self):
        """Number of requests made to this transport."""
        return len(self.request_calls)

    @property
    def calls(self):
        """Recorded (method, url) pairs, in order."""
        return [(call["method"], call["url"]) for call in self.request_calls]

    async def request(
        self,
        method: str,
        url: str,
        headers: dict | None = None,
        content: bytes | None = None,
        files: dict | None = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        """Mock request method."""
        call = {
            "method": method,
            "url": url,
            "headers": dict(headers or {}),
            "content": content,
            "files": None,
            "timeout": timeout,
        }
        if files:
            # Read now: the caller closes the file once the request returns.
            call["files"] = {
                field: (filename, fileobj.read())
                for field, (filename, fileobj) in files.items()
            }
        self.request_calls.append(call)

        if self.handler:
            return self.handler(call)
        return json_response({"success": True, "message": "OK"})

    async def close(self):
        """Mock close method."""
        self.closed = True
