"""Typed failures raised by address verification."""

from typing import Optional


class AddressVerificationError(Exception):
    """Base class for every failure surfaced by the verifier."""


class ConfigurationError(AddressVerificationError):
    """The geocoding provider cannot be used (e.g. no API key)."""


class MissingFieldError(AddressVerificationError):
    """A required address field is absent.  Raised before any network call."""

    def __init__(self, field: str):
        super().__init__(f"MissingField:{field}")
        self.field = field


class GeocodeError(AddressVerificationError):
    """Network failure, timeout, non-2xx or malformed provider response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NoMatchError(AddressVerificationError):
    """The provider answered successfully but returned no candidates."""
