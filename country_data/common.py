"""Common country names and abbreviations users type into checkout forms.

Keys are uppercased.  Kept apart from :mod:`country_data.countries` because
it also holds informal spellings (USA, UK) that are not ISO short names.
"""

COMMON_COUNTRY_CODES: dict[str, str] = {
    "UNITED STATES": "US", "USA": "US",
    "UNITED KINGDOM": "GB", "UK": "GB",
    "CANADA": "CA",
    "GERMANY": "DE",
    "FRANCE": "FR",
    "AUSTRALIA": "AU",
    "SPAIN": "ES",
    "ITALY": "IT",
    "NETHERLANDS": "NL",
    "SWEDEN": "SE",
    "NORWAY": "NO",
    "DENMARK": "DK",
    "FINLAND": "FI",
    "JAPAN": "JP",
    "CHINA": "CN",
    "INDIA": "IN",
    "BRAZIL": "BR",
    "MEXICO": "MX",
}
