"""Tests for component extraction from candidates and user input."""

from models import AddressComponents, AddressInput, GeocodeCandidate
from services.extractor import (
    derive_house_number,
    extract_components,
    extract_input_components,
    split_house_number,
)
from tests.fakes import HAUPTSTRASSE_ITEM


class TestSplitHouseNumber:
    def test_trailing_number_with_letter(self) -> None:
        assert split_house_number("Main Street 42B") == ("Main Street", "42B")

    def test_leading_number_is_not_split(self) -> None:
        assert split_house_number("12 Main St") == ("12 Main St", "")

    def test_no_number(self) -> None:
        assert split_house_number("Main Street") == ("Main Street", "")

    def test_empty(self) -> None:
        assert split_house_number("") == ("", "")


class TestExtractComponents:
    def test_full_here_item(self) -> None:
        components = extract_components(HAUPTSTRASSE_ITEM)

        assert components == AddressComponents(
            street="Hauptstraße",
            house_number="10",
            postal_code="10115",
            city="Berlin",
            state="Berlin",
            country="DE",
            country_name="Deutschland",
            formatted_address="Hauptstraße 10, 10115 Berlin, Deutschland",
        )

    def test_accepts_model_instances(self) -> None:
        candidate = GeocodeCandidate.model_validate(HAUPTSTRASSE_ITEM)
        assert extract_components(candidate) == extract_components(HAUPTSTRASSE_ITEM)

    def test_splits_combined_street_and_number(self) -> None:
        components = extract_components({"address": {"street": "Main Street 42B"}})

        assert components.street == "Main Street"
        assert components.house_number == "42B"

    def test_explicit_house_number_leaves_street_untouched(self) -> None:
        components = extract_components(
            {"address": {"street": "Main Street", "houseNumber": "5"}}
        )

        assert components.street == "Main Street"
        assert components.house_number == "5"

    def test_missing_address_object_yields_empty_components(self) -> None:
        assert extract_components({"title": "Somewhere"}) == AddressComponents()
        assert extract_components(None) == AddressComponents()

    def test_country_code_is_uppercased_iso2(self) -> None:
        assert extract_components({"address": {"countryCode": "deu"}}).country == "DE"
        assert extract_components({"address": {"countryCode": "fr"}}).country == "FR"

    def test_unknown_iso3_is_kept_uppercased(self) -> None:
        assert extract_components({"address": {"countryCode": "xyz"}}).country == "XYZ"

    def test_country_name_falls_back_to_code_lookup(self) -> None:
        components = extract_components({"address": {"countryCode": "FRA"}})

        assert components.country_name == "France"

    def test_unknown_code_leaves_country_name_empty(self) -> None:
        assert extract_components({"address": {"countryCode": "xyz"}}).country_name == ""

    def test_missing_fields_default_to_empty(self) -> None:
        components = extract_components({"title": "Berlin", "address": {"city": "Berlin"}})

        assert components.city == "Berlin"
        assert components.street == ""
        assert components.postal_code == ""
        assert components.formatted_address == "Berlin"


class TestExtractInputComponents:
    def test_street_with_trailing_number(self) -> None:
        components = extract_input_components(AddressInput(street="Hauptstraße 10"))

        assert components.street == "Hauptstraße"
        assert components.house_number == "10"

    def test_explicit_house_number_wins(self) -> None:
        components = extract_input_components(
            AddressInput(street="Main Street", house_number="7")
        )

        assert components.street == "Main Street"
        assert components.house_number == "7"

    def test_address_line1_drops_last_token(self) -> None:
        components = extract_input_components(AddressInput(address_line1="Main Street 42"))

        assert components.street == "Main Street"
        assert components.house_number == ""

    def test_postcode_fallback(self) -> None:
        components = extract_input_components(AddressInput(postcode="SW1A 1AA"))
        assert components.postal_code == "SW1A 1AA"

    def test_country_kept_as_typed(self) -> None:
        assert extract_input_components(AddressInput(country="Germany")).country == "Germany"


class TestDeriveHouseNumber:
    def test_explicit(self) -> None:
        assert derive_house_number(AddressInput(street="Main", house_number="3")) == "3"

    def test_from_street(self) -> None:
        assert derive_house_number(AddressInput(street="Main Street 42B")) == "42B"

    def test_from_address_line1(self) -> None:
        assert derive_house_number(AddressInput(address_line1="Hauptstraße 10")) == "10"

    def test_none_available(self) -> None:
        assert derive_house_number(AddressInput(street="Main Street")) == ""
