import json
from typing import Any
from typing import BinaryIO

# Multipart files as {field: (filename, fileobj)}.
Files = dict[str, tuple[str, BinaryIO]]


class UnifiedResponse:
    """
    Unified response wrapper that hides differences between HTTP clients.

    Transports read the whole body before returning, so the response can be
    inspected after the underlying connection is gone.
    """

    def __init__(
        self,
        status_code: int,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
    ):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.content)

    def __repr__(self) -> str:
        return f"UnifiedResponse(status_code={self.status_code}, bytes={len(self.content)})"


class BaseTransport:
    """
    Abstract transport layer interface for Instamojo SDK.
    All HTTP client backends should inherit from this class.

    Implementations execute exactly one request per call, never retry, and
    raise :class:`instamojo_sdk.exceptions.TransportError` when the server
    cannot be reached.
    """

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
        Async request method for all transports.
        Override this method in transport implementations.
        """
        raise NotImplementedError(
            "Transport implementations must override this method."
        )

    async def close(self) -> None:
        """Release any underlying client or session."""
