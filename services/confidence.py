"""Weighted confidence that a geocoder candidate matches the user's address."""

import logging

from models import AddressComponents, AddressInput, VerificationLevel
from services.countries import resolve_country_code
from services.extractor import extract_input_components
from services.normalizer import normalize_string
from services.similarity import string_similarity

logger = logging.getLogger(__name__)

# Per-level component weights.  Each row sums to 1.0.
WEIGHTS: dict[str, dict[str, float]] = {
    VerificationLevel.RELAXED.value: {
        "street": 0.30,
        "house_number": 0.10,
        "postal_code": 0.25,
        "city": 0.25,
        "state": 0.05,
        "country": 0.05,
    },
    VerificationLevel.STANDARD.value: {
        "street": 0.25,
        "house_number": 0.15,
        "postal_code": 0.25,
        "city": 0.20,
        "state": 0.05,
        "country": 0.10,
    },
    VerificationLevel.STRICT.value: {
        "street": 0.25,
        "house_number": 0.20,
        "postal_code": 0.25,
        "city": 0.15,
        "state": 0.05,
        "country": 0.10,
    },
}

_TEXT_COMPONENTS = ("street", "house_number", "postal_code", "city", "state")


def get_weights(level: str) -> dict[str, float]:
    """Return the weight table for *level*; unknown levels get ``standard``."""
    if isinstance(level, VerificationLevel):
        level = level.value
    return WEIGHTS.get(level, WEIGHTS[VerificationLevel.STANDARD.value])


def _is_country_code(value: str) -> bool:
    return len(value) == 2 and value.isalpha()


def _country_similarity(typed: str, candidate: AddressComponents) -> float:
    """Compare a typed country against the candidate's ISO-2 code.

    A textual match scores 1.  Otherwise, when the candidate carries a
    code, the typed value is resolved to a code and matched categorically.
    """
    geocoded = candidate.country or candidate.country_name
    typed_norm = normalize_string(typed)
    if typed_norm == normalize_string(geocoded):
        return 1.0
    if candidate.country and _is_country_code(candidate.country):
        resolved = resolve_country_code(typed)
        return 1.0 if resolved == candidate.country.upper() else 0.0
    return string_similarity(typed_norm, normalize_string(geocoded))


def score_confidence(
    candidate: AddressComponents,
    address: AddressInput,
    level: str = VerificationLevel.STANDARD.value,
) -> float:
    """Return a confidence in [0, 1] that *candidate* is *address*.

    Only components present on both sides are compared; the score is
    normalized by the weight actually applied, so a field missing on
    either side neither helps nor hurts.  Returns 0 when nothing is
    comparable.
    """
    weights = get_weights(level)
    typed = extract_input_components(address)

    score = 0.0
    applied = 0.0
    for name in _TEXT_COMPONENTS:
        ours = getattr(typed, name)
        theirs = getattr(candidate, name)
        if not ours or not theirs:
            continue
        similarity = string_similarity(normalize_string(ours), normalize_string(theirs))
        logger.debug("component %s: %r vs %r -> %.3f", name, ours, theirs, similarity)
        score += similarity * weights[name]
        applied += weights[name]

    if typed.country and (candidate.country or candidate.country_name):
        similarity = _country_similarity(typed.country, candidate)
        logger.debug(
            "component country: %r vs %r -> %.3f",
            typed.country, candidate.country, similarity,
        )
        score += similarity * weights["country"]
        applied += weights["country"]

    if applied <= 0:
        return 0.0
    return max(0.0, min(1.0, score / applied))
