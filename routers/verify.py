"""Verify endpoint: geocode an address and score how well it matches."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from auth import require_api_key
from errors import ConfigurationError, GeocodeError, MissingFieldError, NoMatchError
from models import VerificationResult, VerifyRequest
from services.parser import parse_address
from services.geocoder import HereGeocoder, get_geocoder
from services.verifier import AddressVerifier

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api", tags=["verify"], dependencies=[Depends(require_api_key)]
)


def get_verifier(geocoder: HereGeocoder = Depends(get_geocoder)) -> AddressVerifier:
    """Build a verifier backed by the configured HERE client."""
    return AddressVerifier(geocoder)


@router.post(
    "/verify",
    response_model=VerificationResult,
    response_model_exclude_none=True,
)
def verify_address(
    req: VerifyRequest,
    verifier: AddressVerifier = Depends(get_verifier),
) -> VerificationResult:
    if req.address is not None:
        address = req.address
    elif req.raw is not None and req.raw.strip():
        address = parse_address(req.raw.strip()).address
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide 'address' (object) or 'raw' (non-empty string).",
        )

    try:
        return verifier.verify_address(address, req.options)
    except MissingFieldError as exc:
        raise HTTPException(
            status_code=422,
            detail={"error": "missing_field", "field": exc.field, "message": str(exc)},
        ) from exc
    except ConfigurationError as exc:
        logger.error("Verification unavailable: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "not_configured", "message": str(exc)},
        ) from exc
    except NoMatchError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "no_match", "message": str(exc)},
        ) from exc
    except GeocodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "geocode_failed", "message": str(exc)},
        ) from exc
