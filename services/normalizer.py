"""Canonicalize free-text address tokens before comparison."""

import re

# English street-type words that carry no identifying information when
# two street names are compared.
STOP_WORDS: frozenset[str] = frozenset({
    "street", "st",
    "avenue", "ave",
    "road", "rd",
    "boulevard", "blvd",
    "lane", "ln",
    "drive", "dr",
})

_WHITESPACE = re.compile(r"\s+")
# Anything that is not a letter, a digit or whitespace.  ``\w`` also
# admits the underscore, which is removed explicitly.
_NON_ALNUM = re.compile(r"[^\w\s]|_")


def normalize_string(value: str) -> str:
    """Return a lowercase, punctuation-free form of *value* without stop words.

    The result is only meant for comparison and must never be shown to a
    user.  The function is idempotent.
    """
    if not value:
        return ""
    cleaned = _WHITESPACE.sub(" ", value.lower()).strip()
    cleaned = _NON_ALNUM.sub("", cleaned)
    return " ".join(
        token for token in cleaned.split() if token not in STOP_WORDS
    )
