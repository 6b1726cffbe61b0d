"""Address Verifier – FastAPI application entry point."""

import logging

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import service_key
from config import get_settings
from routers import geocode, parse, verify
from services.geocoder import HereGeocoder, get_geocoder

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Address Verifier",
    description="Verify postal addresses against HERE geocoding with a weighted confidence score.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# The service key must be configured before the app is built.
service_key()

app.include_router(parse.router)
app.include_router(verify.router)
app.include_router(geocode.router)


@app.get("/healthz", tags=["health"])
def healthz(geocoder: HereGeocoder = Depends(get_geocoder)) -> dict:
    return {"status": "ok", "geocoder_configured": geocoder.is_configured()}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
