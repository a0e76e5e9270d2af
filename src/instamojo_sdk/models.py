"""
Response models for the Instamojo API.

Every response decodes to an envelope carrying ``success`` and ``message``
plus an action-specific payload. Field aliases match the JSON keys used on
the wire, so ``model_dump(by_alias=True)`` produces the wire shape.
"""

import json
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator

GENERIC_FAILURE_MESSAGE = "API call failed without a message."


def _as_text(value: Any) -> Any:
    # The API occasionally sends nulls or nested objects for text fields.
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


class Offer(BaseModel):
    """
    One offer, as returned by the listing or the details endpoint.

    The listing endpoint only fills ``short_url``, ``title``, ``slug`` and
    ``status``; the remaining fields stay empty until the offer is fetched
    with :meth:`InstamojoClient.get_offer_details`.
    """

    model_config = ConfigDict(
        populate_by_name=True, coerce_numbers_to_str=True, extra="ignore"
    )

    short_url: str = Field(default="", alias="shorturl")
    title: str = ""
    slug: str = ""
    status: str = ""
    description: str = ""
    currency: str = ""
    base_price: str = ""
    quantity: str = ""
    start_date: str = ""
    end_date: str = ""
    timezone: str = ""
    venue: str = ""
    redirect_url: str = ""
    note: str = ""
    file_upload_json: str = ""
    cover_image_json: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_text(cls, value: Any) -> Any:
        return _as_text(value)


class APIResponse(BaseModel):
    """
    Envelope shared by all responses.

    ``invalid_json`` is never read from the wire; it is set only on envelopes
    synthesized by the decoder when the body could not be decoded.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool = False
    message: str = ""
    invalid_json: bool = Field(default=False, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_invalid_json(cls, data: Any) -> Any:
        if isinstance(data, dict) and "invalid_json" in data:
            data = {key: value for key, value in data.items() if key != "invalid_json"}
        return data

    @field_validator("message", mode="before")
    @classmethod
    def _normalize_message(cls, value: Any) -> Any:
        return _as_text(value)

    @model_validator(mode="after")
    def _require_failure_message(self) -> "APIResponse":
        if not self.success and not self.message:
            self.message = GENERIC_FAILURE_MESSAGE
        return self


class ListOffersResponse(APIResponse):
    offers: list[Offer] = Field(default_factory=list)

    @field_validator("offers", mode="before")
    @classmethod
    def _null_offers(cls, value: Any) -> Any:
        return [] if value is None else value


class OfferDetailsResponse(APIResponse):
    offer: Offer = Field(default_factory=Offer)

    @field_validator("offer", mode="before")
    @classmethod
    def _null_offer(cls, value: Any) -> Any:
        return {} if value is None else value


class ArchiveResponse(APIResponse):
    pass


class AuthResponse(APIResponse):
    token: str = ""

    @field_validator("token", mode="before")
    @classmethod
    def _null_token(cls, value: Any) -> Any:
        return _as_text(value)


class DeAuthResponse(APIResponse):
    pass


class FileUploadResponse(APIResponse):
    upload_url: str = ""
    # Raw body returned by the upload URL, filled in by the upload flow.
    upload_json: str = ""
