"""
HERE Geocoding & Search v1 client.

Only the calls the verifier and the HTTP layer need are wrapped: forward
geocoding, autocomplete and reverse geocoding.  Every failure is reported
as :class:`errors.GeocodeError`; nothing is retried here.
"""

import logging
from typing import Any, Optional, Protocol

import requests
from pydantic import ValidationError

from config import Settings, get_settings
from errors import ConfigurationError, GeocodeError
from models import GeocodeCandidate

logger = logging.getLogger(__name__)

DEFAULT_RESULT_TYPES = "houseNumber,street,postalCode"


def _candidates(items: list[Any]) -> list[GeocodeCandidate]:
    try:
        return [GeocodeCandidate.model_validate(item) for item in items]
    except ValidationError as exc:
        raise GeocodeError("Malformed item in HERE API response") from exc


class Geocoder(Protocol):
    """What the verifier needs from a geocoding provider."""

    def is_configured(self) -> bool: ...

    def geocode(
        self,
        query: str,
        *,
        limit: int = 1,
        lang: Optional[str] = None,
        result_types: str = DEFAULT_RESULT_TYPES,
    ) -> list[GeocodeCandidate]: ...


class HereGeocoder:
    """
    Thin wrapper over the HERE geocode, autocomplete and revgeocode APIs.

    Example:
        ```python
        geocoder = HereGeocoder(api_key="your-api-key")
        candidates = geocoder.geocode("Hauptstraße 10, Berlin, 10115, Germany", limit=3)
        ```
    """

    GEOCODE_URL = "https://geocode.search.hereapi.com/v1/geocode"
    AUTOCOMPLETE_URL = "https://autocomplete.search.hereapi.com/v1/autocomplete"
    REVERSE_GEOCODE_URL = "https://revgeocode.search.hereapi.com/v1/revgeocode"

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings or get_settings()
        self._api_key = (
            api_key
            if api_key is not None
            else self._settings.here_api_key.get_secret_value()
        ).strip()
        self._lang = self._settings.here_lang
        self._timeout = self._settings.request_timeout

    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET *url* and return the decoded JSON body.

        Raises :class:`GeocodeError` on connection failures, timeouts,
        non-200 responses and bodies that are not a JSON object with an
        ``items`` list.
        """
        if not self.is_configured():
            raise ConfigurationError("HERE API is not configured")

        params = {**params, "apiKey": self._api_key}
        try:
            response = requests.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as exc:
            logger.error("HERE request timed out after %ss", self._timeout)
            raise GeocodeError(f"HERE API request timed out: {exc}") from exc
        except requests.exceptions.RequestException as exc:
            logger.error("HERE connection error: %s", exc)
            raise GeocodeError(f"Could not connect to HERE API: {exc}") from exc

        if response.status_code != 200:
            description = ""
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                description = body.get("error_description") or body.get("title") or ""
            logger.error("HERE error - HTTP %d: %s", response.status_code, description)
            raise GeocodeError(
                f"HERE API error (HTTP {response.status_code}): {description}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise GeocodeError("Invalid response from HERE API") from exc
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise GeocodeError("Invalid response from HERE API")
        return data

    def geocode(
        self,
        query: str,
        *,
        limit: int = 1,
        lang: Optional[str] = None,
        result_types: str = DEFAULT_RESULT_TYPES,
    ) -> list[GeocodeCandidate]:
        """Return up to *limit* ranked candidates for a free-text *query*.

        An empty list means the request succeeded but nothing matched.
        """
        if not query or not query.strip():
            raise GeocodeError("Address cannot be empty")

        logger.info("Geocoding address (limit=%d)", limit)
        data = self._get(
            self.GEOCODE_URL,
            {
                "q": query,
                "limit": limit,
                "lang": lang or self._lang,
                "resultType": result_types,
            },
        )
        items = data["items"]
        if not items:
            logger.warning("Geocoding returned no results")
        else:
            logger.info("Geocoding successful - found %d result(s)", len(items))
        return _candidates(items)

    def autocomplete(
        self,
        query: str,
        *,
        limit: int = 5,
        types: str = "address",
        lang: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Return raw HERE autocomplete items for a partial *query*."""
        if not query or not query.strip():
            raise GeocodeError("Query cannot be empty")
        data = self._get(
            self.AUTOCOMPLETE_URL,
            {
                "q": query,
                "limit": limit,
                "types": types,
                "lang": lang or self._lang,
            },
        )
        return data["items"]

    def reverse_geocode(
        self,
        latitude: float,
        longitude: float,
        *,
        limit: int = 1,
        lang: Optional[str] = None,
    ) -> list[GeocodeCandidate]:
        """Return the addresses nearest to a coordinate pair.

        Points outside +-90/+-180 and the null island point ``(0, 0)`` are
        rejected before any request is made.
        """
        latitude = float(latitude)
        longitude = float(longitude)
        if (
            not -90 <= latitude <= 90
            or not -180 <= longitude <= 180
            or (latitude == 0 and longitude == 0)
        ):
            raise GeocodeError("Invalid coordinates")
        data = self._get(
            self.REVERSE_GEOCODE_URL,
            {
                "at": f"{latitude},{longitude}",
                "limit": limit,
                "lang": lang or self._lang,
            },
        )
        return _candidates(data["items"])


def get_geocoder() -> HereGeocoder:
    """Return a HERE client built from the process settings."""
    return HereGeocoder()
