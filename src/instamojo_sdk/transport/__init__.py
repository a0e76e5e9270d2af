"""
Transport layer for Instamojo SDK.

This module provides a unified transport interface that abstracts different HTTP clients.
The SDK supports multiple transport backends for flexibility:

- httpx: Modern async HTTP client (default, recommended)
- aiohttp: Async HTTP client
- requests: Sync HTTP client wrapped in async interface

All transports implement the same interface, making them interchangeable.
Network-level failures are reported as TransportError regardless of backend.
"""

from .base import BaseTransport
from .base import UnifiedResponse
from .httpx import HttpxTransport

__all__ = ["BaseTransport", "HttpxTransport", "UnifiedResponse", "get_transport"]


def get_transport(name: str, timeout: float = 30.0) -> BaseTransport:
    """
    Get transport instance by name.

    Available transports:
    - httpx: Async HTTP client (default)
    - aiohttp: Async HTTP client
    - requests: Sync HTTP client (wrapped in async interface)
    """
    name = name.lower()
    if name == "httpx":
        return HttpxTransport(timeout)
    elif name == "aiohttp":
        try:
            from .aiohttp import AiohttpTransport

            return AiohttpTransport(timeout)
        except ImportError as err:
            raise ImportError(
                "aiohttp transport requires aiohttp package. Install with: pip install aiohttp"
            ) from err
    elif name == "requests":
        try:
            from .requests import RequestsTransport

            return RequestsTransport(timeout)
        except ImportError as err:
            raise ImportError(
                "requests transport requires requests package. Install with: pip install requests"
            ) from err
    else:
        raise ValueError(
            f"Unknown transport: {name}. Available: httpx, aiohttp, requests"
        )
