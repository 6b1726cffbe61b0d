"""Decompose geocoder candidates and user input into comparable components."""

import re
from typing import Any, Mapping, Optional, Union

from models import AddressComponents, AddressInput, GeocodeCandidate
from services.countries import code_to_name, iso3_to_iso2

# "<street words> <number>[<anything>]" -- the number is assumed to trail
# the street name (German/Dutch style).  "12 Main St" is left unsplit.
_TRAILING_HOUSE_NUMBER = re.compile(r"^(.*?)\s+(\d+.*)$")


def split_house_number(street: str) -> tuple[str, str]:
    """Split a trailing house number off *street*.

    Returns ``(street, house_number)``; the house number is ``""`` and the
    street is returned unchanged when no trailing number is found.
    """
    if not street:
        return street or "", ""
    m = _TRAILING_HOUSE_NUMBER.match(street)
    if m is None:
        return street, ""
    return m.group(1), m.group(2)


def _country_code(raw: Optional[str]) -> str:
    """Uppercase a provider country code, converting ISO-3 to ISO-2."""
    code = (raw or "").strip().upper()
    if len(code) == 3:
        return iso3_to_iso2(code) or code
    return code


def extract_components(
    candidate: Union[GeocodeCandidate, Mapping[str, Any], None],
) -> AddressComponents:
    """Return normalized :class:`AddressComponents` for a geocoder *candidate*.

    *candidate* may be a :class:`GeocodeCandidate` or the raw item dict from
    the provider's JSON.  A candidate without an ``address`` object yields
    empty components.
    """
    if candidate is None:
        return AddressComponents()
    if not isinstance(candidate, GeocodeCandidate):
        candidate = GeocodeCandidate.model_validate(dict(candidate))

    address = candidate.address
    if address is None:
        return AddressComponents()

    street = address.street or ""
    house_number = address.houseNumber or ""
    if street and not house_number:
        street, house_number = split_house_number(street)

    country = _country_code(address.countryCode)
    return AddressComponents(
        street=street,
        house_number=house_number,
        postal_code=address.postalCode or "",
        city=address.city or "",
        state=address.state or "",
        country=country,
        country_name=address.countryName or code_to_name(country) or "",
        formatted_address=candidate.title or "",
    )


def _street_from_line(line: str) -> str:
    """Drop the last whitespace-delimited token, assumed to be the number."""
    parts = line.split()
    return " ".join(parts[:-1])


def derive_house_number(address: AddressInput) -> str:
    """Return the explicit house number, or one split off the street line."""
    if address.house_number:
        return address.house_number
    line = address.street or address.address_line1 or ""
    return split_house_number(line)[1]


def extract_input_components(address: AddressInput) -> AddressComponents:
    """Map a user :class:`AddressInput` onto :class:`AddressComponents`.

    ``street`` without a house number is split like provider streets.
    When only ``address_line1`` is given its last token is dropped to
    approximate the street name.  The country is kept as typed.
    """
    house_number = address.house_number or ""
    if address.street:
        street = address.street
        if not house_number:
            street, house_number = split_house_number(street)
    elif address.address_line1:
        street = _street_from_line(address.address_line1)
    else:
        street = ""

    country = address.country or ""
    return AddressComponents(
        street=street,
        house_number=house_number,
        postal_code=address.effective_postal_code,
        city=address.city or "",
        state=address.state or "",
        country=country,
        country_name=country,
    )
