"""
Response decoding.

Turns raw response bodies into the envelope model matching the action that
produced them. Decoding never raises: a body that is not valid JSON, or not
the expected shape, becomes a failure envelope whose message embeds the
parse error.
"""

import json
import logging

from pydantic import ValidationError

from instamojo_sdk import actions
from instamojo_sdk.models import APIResponse
from instamojo_sdk.models import ArchiveResponse
from instamojo_sdk.models import AuthResponse
from instamojo_sdk.models import DeAuthResponse
from instamojo_sdk.models import FileUploadResponse
from instamojo_sdk.models import ListOffersResponse
from instamojo_sdk.models import OfferDetailsResponse

logger = logging.getLogger("instamojo_sdk.decoder")

RESPONSE_MODELS: dict[str, type[APIResponse]] = {
    actions.AUTH: AuthResponse,
    actions.DEAUTH: DeAuthResponse,
    actions.LIST_OFFERS: ListOffersResponse,
    actions.OFFER_DETAILS: OfferDetailsResponse,
    actions.ARCHIVE_OFFER: ArchiveResponse,
    actions.GET_FILE_UPLOAD_URL: FileUploadResponse,
}


def response_model_for(action: str) -> type[APIResponse]:
    """Return the envelope model for ``action`` (plain APIResponse if unknown)."""
    return RESPONSE_MODELS.get(action, APIResponse)


def decode_response(action: str, body: str | bytes) -> APIResponse:
    """
    Decode ``body`` into the envelope for ``action``.

    Args:
        action (str): Logical action name that produced the body.
        body (str | bytes): Raw response body.

    Returns:
        APIResponse: The decoded envelope, or a failure envelope with
        ``invalid_json=True`` when the body could not be decoded.
    """
    model = response_model_for(action)
    try:
        data = json.loads(body)
        return model.model_validate(data)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as exc:
        logger.warning(f"Could not decode '{action}' response: {exc}")
        envelope = model(success=False, message=f"Invalid JSON: {exc}")
        envelope.invalid_json = True
        return envelope
