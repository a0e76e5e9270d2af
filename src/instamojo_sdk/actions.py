"""
Mapping from logical action names to REST calls.

Each action resolves to an HTTP method, a URL path relative to the versioned
API root, a request body and any extra headers. Unknown actions fall back to
a GET on the action name itself.
"""

from types import MappingProxyType
from typing import Any
from typing import Mapping
from typing import NamedTuple
from urllib.parse import urlencode

AUTH = "auth"
DEAUTH = "deauth"
LIST_OFFERS = "listoffers"
OFFER_DETAILS = "offerdetails"
ARCHIVE_OFFER = "archiveoffer"
GET_FILE_UPLOAD_URL = "getfileuploadurl"

ACTIONS = (
    AUTH,
    DEAUTH,
    LIST_OFFERS,
    OFFER_DETAILS,
    ARCHIVE_OFFER,
    GET_FILE_UPLOAD_URL,
)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Route(NamedTuple):
    method: str
    path: str
    body: bytes = b""
    headers: Mapping[str, str] = MappingProxyType({})


def route(action: str, data: Any = "") -> Route:
    """
    Resolve ``action`` into a :class:`Route`.

    Args:
        action (str): Logical action name.
        data: ``(username, password)`` for ``auth`` (required), the token for
            ``deauth``, the offer slug for ``offerdetails`` / ``archiveoffer``;
            ignored otherwise.

    Returns:
        Route: method, path (always ``/``-terminated), body and extra headers.

    Raises:
        ValueError: If ``auth`` is not given a ``(username, password)`` pair.
    """
    if action == AUTH:
        if not (isinstance(data, (tuple, list)) and len(data) == 2):
            raise ValueError("The auth action needs data=(username, password).")
        username, password = data
        body = urlencode({"username": username, "password": password}).encode()
        return Route(
            "POST", "auth/", body, MappingProxyType({"Content-Type": FORM_CONTENT_TYPE})
        )
    if action == DEAUTH:
        return Route("DELETE", f"auth/{data}/")
    if action == LIST_OFFERS:
        return Route("GET", "offer/")
    if action == OFFER_DETAILS:
        return Route("GET", f"offer/{data}/")
    if action == ARCHIVE_OFFER:
        return Route("DELETE", f"offer/{data}/")
    if action == GET_FILE_UPLOAD_URL:
        return Route("GET", "offer/get_file_upload_url/")
    return Route("GET", f"{action}/")


def build_url(base_url: str, api_version: str, path: str) -> str:
    """Join the API root, version and path into a ``/``-terminated URL."""
    url = f"{base_url.rstrip('/')}/{api_version.strip('/')}/{path.lstrip('/')}"
    return url if url.endswith("/") else url + "/"
