"""Lookup endpoints: address autocomplete and reverse geocoding via HERE."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from auth import require_api_key
from errors import ConfigurationError, GeocodeError
from models import (
    AutocompleteRequest,
    AutocompleteResponse,
    ReverseGeocodeRequest,
    ReverseGeocodeResponse,
    Suggestion,
)
from services.extractor import extract_components
from services.geocoder import HereGeocoder, get_geocoder

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api", tags=["geocode"], dependencies=[Depends(require_api_key)]
)


def _provider_error(exc: Exception) -> HTTPException:
    if isinstance(exc, ConfigurationError):
        logger.error("Lookup unavailable: %s", exc)
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "not_configured", "message": str(exc)},
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={"error": "geocode_failed", "message": str(exc)},
    )


@router.post("/autocomplete", response_model=AutocompleteResponse)
def autocomplete(
    req: AutocompleteRequest,
    geocoder: HereGeocoder = Depends(get_geocoder),
) -> AutocompleteResponse:
    query = req.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="query is required")
    try:
        items = geocoder.autocomplete(query, limit=req.limit)
    except (ConfigurationError, GeocodeError) as exc:
        raise _provider_error(exc) from exc
    return AutocompleteResponse(items=items)


@router.post("/reverse", response_model=ReverseGeocodeResponse)
def reverse_geocode(
    req: ReverseGeocodeRequest,
    geocoder: HereGeocoder = Depends(get_geocoder),
) -> ReverseGeocodeResponse:
    if req.latitude == 0 and req.longitude == 0:
        raise HTTPException(status_code=400, detail="Invalid coordinates")
    try:
        candidates = geocoder.reverse_geocode(
            req.latitude, req.longitude, limit=req.limit
        )
    except (ConfigurationError, GeocodeError) as exc:
        raise _provider_error(exc) from exc

    results = []
    for candidate in candidates:
        components = extract_components(candidate)
        results.append(
            Suggestion(formatted_address=components.formatted_address, address=components)
        )
    return ReverseGeocodeResponse(results=results)
