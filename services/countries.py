"""Country name and ISO 3166-1 code resolution.

All lookups read module-level tables that are built once at import and
never mutated, so they are safe to share between concurrent requests.
"""

from typing import Optional

from country_data.common import COMMON_COUNTRY_CODES
from country_data.countries import COUNTRY_NAMES
from country_data.iso3 import ISO3_TO_ISO2

# Exact-name index over the full table, in table order.
_NAME_TO_CODE: dict[str, str] = {name: code for code, name in COUNTRY_NAMES.items()}


def name_to_code(name: str) -> Optional[str]:
    """Return the ISO-2 code for a country *name*, or ``None``.

    An exact match wins; otherwise the table is scanned ignoring case.
    """
    if not name:
        return None
    name = name.strip()
    code = _NAME_TO_CODE.get(name)
    if code is not None:
        return code
    folded = name.casefold()
    for code, candidate in COUNTRY_NAMES.items():
        if candidate.casefold() == folded:
            return code
    return None


def code_to_name(code: str) -> Optional[str]:
    """Return the English short name for an ISO-2 *code*, or ``None``."""
    if not code:
        return None
    return COUNTRY_NAMES.get(code.strip().upper())


def iso3_to_iso2(code3: str) -> Optional[str]:
    """Convert an ISO-3 code to ISO-2; input case and padding are ignored."""
    if not code3:
        return None
    return ISO3_TO_ISO2.get(code3.strip().upper())


def common_name_to_code(name: str) -> Optional[str]:
    """Look *name* up in the short list of common names and abbreviations."""
    if not name:
        return None
    return COMMON_COUNTRY_CODES.get(name.strip().upper())


def resolve_country_code(value: str) -> Optional[str]:
    """Best-effort ISO-2 code for a user-typed country *value*.

    Tries, in order: the full name table, the common-name table, an ISO-3
    code, and finally a value that already is a known ISO-2 code.
    """
    if not value or not value.strip():
        return None
    code = name_to_code(value) or common_name_to_code(value)
    if code is not None:
        return code
    cleaned = value.strip().upper()
    if len(cleaned) == 3:
        return iso3_to_iso2(cleaned)
    if len(cleaned) == 2 and cleaned in COUNTRY_NAMES:
        return cleaned
    return None
