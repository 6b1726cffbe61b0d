"""Shared Pydantic models for addresses, geocoder candidates and results."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class AddressInput(BaseModel):
    """An address as the customer typed it.

    Either ``street`` (optionally with ``house_number``) or
    ``address_line1`` carries the street line.  ``postcode`` is accepted
    as an alias-style fallback for ``postal_code``.
    """
    street: Optional[str] = Field(None, max_length=500)
    house_number: Optional[str] = Field(None, max_length=50)
    address_line1: Optional[str] = Field(None, max_length=500)
    address_line2: Optional[str] = Field(None, max_length=500)
    city: Optional[str] = Field(None, max_length=200)
    postal_code: Optional[str] = Field(None, max_length=20)
    postcode: Optional[str] = Field(None, max_length=20)
    state: Optional[str] = Field(None, max_length=200)
    country: Optional[str] = Field(None, max_length=100)

    @property
    def effective_postal_code(self) -> str:
        return self.postal_code or self.postcode or ""


class VerificationLevel(str, Enum):
    RELAXED = "relaxed"
    STANDARD = "standard"
    STRICT = "strict"


class VerificationArgs(BaseModel):
    """Per-call verification options.

    ``verification_level`` is a plain string: unknown values are accepted
    and scored with the ``standard`` weights.
    """
    require_house_number: bool = False
    require_postal_code: bool = True
    verification_level: str = VerificationLevel.STANDARD.value
    include_confidence: bool = True
    include_suggestions: bool = True
    min_confidence: float = Field(0.7, ge=0.0, le=1.0)


# ---------------------------------------------------------------------------
# Geocoder candidates (HERE Geocode v1 ``items``)
# ---------------------------------------------------------------------------

class GeocodeAddress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    label: Optional[str] = None
    street: Optional[str] = None
    houseNumber: Optional[str] = None
    postalCode: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    countryCode: Optional[str] = None
    countryName: Optional[str] = None


class GeocodeCandidate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = ""
    resultType: Optional[str] = None
    address: Optional[GeocodeAddress] = None


# ---------------------------------------------------------------------------
# Normalized components and results
# ---------------------------------------------------------------------------

class AddressComponents(BaseModel):
    street: str = ""
    house_number: str = ""
    postal_code: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    country_name: str = ""
    formatted_address: str = ""


class Suggestion(BaseModel):
    formatted_address: str
    address: AddressComponents


class VerificationResult(BaseModel):
    verified: bool
    formatted_address: str
    geocoded_address: AddressComponents
    input_address: AddressInput
    confidence: Optional[float] = None
    suggestions: Optional[list[Suggestion]] = None


# ---------------------------------------------------------------------------
# HTTP payloads
# ---------------------------------------------------------------------------

class VerifyRequest(BaseModel):
    """Accept either structured ``address`` fields *or* a ``raw`` US address.

    When both are provided, ``address`` takes precedence and ``raw`` is
    ignored.
    """
    address: Optional[AddressInput] = None
    raw: Optional[str] = Field(None, max_length=1000)
    options: Optional[VerificationArgs] = None


class ParseRequest(BaseModel):
    address: str = Field(..., max_length=1000)


class ParseResponse(BaseModel):
    input: str
    address: AddressInput
    type: str
    warning: Optional[str] = None


class AutocompleteRequest(BaseModel):
    query: str = Field(..., max_length=500)
    limit: int = Field(5, ge=1, le=20)


class AutocompleteResponse(BaseModel):
    items: list[dict[str, Any]]


class ReverseGeocodeRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    limit: int = Field(1, ge=1, le=20)


class ReverseGeocodeResponse(BaseModel):
    results: list[Suggestion]
