"""
Logging middleware for Instamojo SDK.

This module provides LoggingMiddleware, a built-in middleware that logs
all HTTP requests and responses with timing information.

Session tokens and the credentials sent to the auth endpoint are never
written to the log.
"""

import logging
import re
import time

from instamojo_sdk.transport.base import Files
from instamojo_sdk.transport.base import UnifiedResponse

logger = logging.getLogger("instamojo_sdk.middleware.logging")

REDACTED = "***"
SENSITIVE_HEADERS = {"x-auth-token"}
# The deauth endpoint carries the token as a path segment.
TOKEN_IN_PATH = re.compile(r"(/auth/)[^/]+/")


def redact_url(url: str) -> str:
    return TOKEN_IN_PATH.sub(rf"\g<1>{REDACTED}/", url)


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    return {
        key: REDACTED if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


class LoggingMiddleware:
    """
    Middleware for logging HTTP requests and responses in InstamojoClient.
    Uses standard Python logging.
    """

    def __init__(self, level: int = logging.INFO):
        self.level = level
        self._start_time = None

    async def on_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None,
        files: Files | None,
    ):
        self._start_time = time.monotonic()
        body = f"{len(content)} bytes" if content else None
        if content and b"password=" in content:
            body = REDACTED
        uploads = sorted(files) if files else None
        logger.log(
            self.level,
            f"Request: {method} {redact_url(url)} | headers={redact_headers(headers)} | body={body} | files={uploads}",
        )

    async def on_response(self, response: UnifiedResponse):
        elapsed = (time.monotonic() - self._start_time) if self._start_time else None
        logger.log(
            self.level,
            f"Response: {response.status_code}"
            + (f" | elapsed={elapsed:.3f}s" if elapsed is not None else ""),
        )
