"""
Instamojo SDK - Async-first SDK for the Instamojo payments API.

This SDK provides:
- Async client for offers, file uploads and auth tokens
- Synchronous wrapper for sync operations
- Implicit authentication with automatic token revocation
- Multiple HTTP transport support
- Middleware support
"""

from .auth import AuthManager
from .auth import Session
from .client import InstamojoClient
from .client_sync import InstamojoClientSync
from .config import InstamojoSettings
from .decoder import decode_response
from .exceptions import AuthError
from .exceptions import InstamojoAPIError
from .exceptions import TransportError
from .middleware import Middleware
from .models import APIResponse
from .models import ArchiveResponse
from .models import AuthResponse
from .models import DeAuthResponse
from .models import FileUploadResponse
from .models import ListOffersResponse
from .models import Offer
from .models import OfferDetailsResponse

__version__ = "1.0.0"

__all__ = [
    "InstamojoClient",
    "InstamojoClientSync",
    "InstamojoSettings",
    "Session",
    "AuthManager",
    "AuthError",
    "InstamojoAPIError",
    "TransportError",
    "Middleware",
    "decode_response",
    "APIResponse",
    "ArchiveResponse",
    "AuthResponse",
    "DeAuthResponse",
    "FileUploadResponse",
    "ListOffersResponse",
    "Offer",
    "OfferDetailsResponse",
]
