"""Split a single-line US address into verification fields using usaddress."""

import re
from typing import Optional

import usaddress

from models import AddressInput, ParseResponse

# usaddress labels that make up the street name, in output order.
_STREET_LABELS = (
    "StreetNamePreDirectional",
    "StreetNamePreModifier",
    "StreetNamePreType",
    "StreetName",
    "StreetNamePostType",
    "StreetNamePostDirectional",
    "StreetNamePostModifier",
)

_NUMBER_LABELS = ("AddressNumberPrefix", "AddressNumber", "AddressNumberSuffix")

# Secondary unit designators end up on address line 2.
_UNIT_LABELS = (
    "SubaddressType",
    "SubaddressIdentifier",
    "OccupancyType",
    "OccupancyIdentifier",
    "USPSBoxType",
    "USPSBoxID",
)


def _clean(raw: str) -> str:
    # Parenthesized text is wayfinding noise that confuses usaddress.
    cleaned = re.sub(r"\([^)]*\)", "", raw)
    cleaned = cleaned.replace("(", "").replace(")", "")
    cleaned = re.sub(r"\s+,", ",", cleaned)
    return re.sub(r"\s{2,}", " ", cleaned).strip()


def _join(tagged: dict[str, str], labels: tuple[str, ...]) -> str:
    return " ".join(
        tagged[label].strip(" ,;") for label in labels if tagged.get(label)
    ).strip()


def _tokens_to_tags(pairs: list[tuple[str, str]]) -> dict[str, str]:
    """Merge repeated labels from an ambiguous parse by concatenation."""
    tagged: dict[str, str] = {}
    for token, label in pairs:
        if label in tagged:
            tagged[label] += f" {token}"
        else:
            tagged[label] = token
    return tagged


def parse_address(raw: str, default_country: Optional[str] = "US") -> ParseResponse:
    """Parse *raw* into an :class:`AddressInput` ready for verification.

    usaddress only understands US addresses, so the country is filled with
    *default_country*.  Ambiguous input is still returned, with a warning.
    """
    cleaned = _clean(raw)
    warning = None
    try:
        tagged, addr_type = usaddress.tag(cleaned)
        tagged = dict(tagged)
    except usaddress.RepeatedLabelError as exc:
        tagged = _tokens_to_tags(exc.parsed_string)
        addr_type = "Ambiguous"
        warning = "Repeated labels detected; parse may be inaccurate."

    address = AddressInput(
        street=_join(tagged, _STREET_LABELS) or None,
        house_number=_join(tagged, _NUMBER_LABELS) or None,
        address_line2=_join(tagged, _UNIT_LABELS) or None,
        city=tagged.get("PlaceName", "").strip(" ,;") or None,
        state=tagged.get("StateName", "").strip(" ,;") or None,
        postal_code=tagged.get("ZipCode", "").strip(" ,;") or None,
        country=default_country or None,
    )
    return ParseResponse(input=raw, address=address, type=addr_type, warning=warning)
