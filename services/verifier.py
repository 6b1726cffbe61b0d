"""Address verification: validate, geocode, score and decide.

One call runs ``validate -> query -> score -> result`` synchronously with a
single provider request.  Failures are raised as the typed errors in
:mod:`errors`; a provider failure is never turned into a low-confidence
result, and nothing is retried.
"""

import logging
from typing import Optional

from errors import ConfigurationError, MissingFieldError, NoMatchError
from models import (
    AddressInput,
    GeocodeCandidate,
    Suggestion,
    VerificationArgs,
    VerificationResult,
)
from services.confidence import score_confidence
from services.extractor import derive_house_number, extract_components
from services.geocoder import DEFAULT_RESULT_TYPES, Geocoder, HereGeocoder

logger = logging.getLogger(__name__)

# Candidates requested per verification: the best match plus alternatives
# for suggestions.
CANDIDATE_LIMIT = 3


def _validate(address: AddressInput, args: VerificationArgs) -> None:
    """Raise :class:`MissingFieldError` for the first required field missing."""
    if not address.street and not address.address_line1:
        raise MissingFieldError("street")
    if args.require_house_number and not derive_house_number(address):
        raise MissingFieldError("house_number")
    if not address.city:
        raise MissingFieldError("city")
    if not address.effective_postal_code and args.require_postal_code:
        raise MissingFieldError("postal_code")
    if not address.country:
        raise MissingFieldError("country")


def build_query(address: AddressInput) -> str:
    """Join the address into the comma-separated free-text query HERE expects."""
    parts: list[str] = []
    if address.street:
        street = address.street
        if address.house_number:
            street = f"{street} {address.house_number}"
        parts.append(street)
    elif address.address_line1:
        parts.append(address.address_line1)
        if address.address_line2:
            parts.append(address.address_line2)
    parts.extend([address.city or "", address.effective_postal_code, address.country or ""])
    return ", ".join(p.strip() for p in parts if p and p.strip())


def _suggestion(candidate: GeocodeCandidate) -> Suggestion:
    return Suggestion(
        formatted_address=candidate.title,
        address=extract_components(candidate),
    )


class AddressVerifier:
    """Verify user-entered addresses against a geocoding provider."""

    def __init__(self, geocoder: Optional[Geocoder] = None):
        self.geocoder = geocoder if geocoder is not None else HereGeocoder()

    def verify_address(
        self,
        address: AddressInput,
        args: Optional[VerificationArgs] = None,
    ) -> VerificationResult:
        """Return the verification decision for *address*.

        Raises:
            ConfigurationError: the geocoder has no credentials.
            MissingFieldError: a required field is absent (no request made).
            GeocodeError: the provider request failed.
            NoMatchError: the provider returned no candidates.
        """
        args = args or VerificationArgs()

        logger.debug("verify: validating")
        if not self.geocoder.is_configured():
            raise ConfigurationError("HERE API is not configured")
        _validate(address, args)

        query = build_query(address)
        logger.debug("verify: querying geocoder")
        candidates = self.geocoder.geocode(
            query,
            limit=CANDIDATE_LIMIT,
            result_types=DEFAULT_RESULT_TYPES,
        )
        if not candidates:
            raise NoMatchError(
                "No address matches found. Please check the address and try again."
            )

        logger.debug("verify: scoring %d candidate(s)", len(candidates))
        best = candidates[0]
        geocoded = extract_components(best)
        confidence = score_confidence(geocoded, address, args.verification_level)
        verified = confidence >= args.min_confidence

        result = VerificationResult(
            verified=verified,
            formatted_address=best.title,
            geocoded_address=geocoded,
            input_address=address,
        )
        if args.include_confidence:
            result.confidence = confidence
        if not verified and args.include_suggestions and len(candidates) > 1:
            result.suggestions = [_suggestion(c) for c in candidates[1:]]

        logger.info(
            "Address %s (confidence=%.3f, level=%s)",
            "verified" if verified else "not verified",
            confidence,
            args.verification_level,
        )
        return result


def verify_address(
    address: AddressInput,
    args: Optional[VerificationArgs] = None,
    geocoder: Optional[Geocoder] = None,
) -> VerificationResult:
    """Verify *address* with a one-off :class:`AddressVerifier`."""
    return AddressVerifier(geocoder).verify_address(address, args)
