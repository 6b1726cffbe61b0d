"""
Pytest fixtures for the address verifier.

HTTP calls to HERE are mocked with ``responses``; the verifier is tested
against :class:`tests.fakes.FakeGeocoder`.
"""

import os

# main.py loads the service key at import time.
os.environ.setdefault("ADDRESS_VERIFIER_API_KEY", "test-service-key")

import pytest  # noqa: E402

from config import Settings  # noqa: E402
from models import AddressInput  # noqa: E402
from services.geocoder import HereGeocoder  # noqa: E402
from tests.fakes import HAUPTSTRASSE_ITEM, FakeGeocoder  # noqa: E402

SERVICE_KEY = os.environ["ADDRESS_VERIFIER_API_KEY"]


@pytest.fixture
def here_settings() -> Settings:
    return Settings(here_api_key="test-here-key", here_lang="en-US", request_timeout=15)


@pytest.fixture
def here_geocoder(here_settings: Settings) -> HereGeocoder:
    return HereGeocoder(settings=here_settings)


@pytest.fixture
def berlin_address() -> AddressInput:
    return AddressInput(
        street="Hauptstraße 10",
        city="Berlin",
        postal_code="10115",
        country="Germany",
    )


@pytest.fixture
def fake_geocoder() -> FakeGeocoder:
    return FakeGeocoder(items=[HAUPTSTRASSE_ITEM])
