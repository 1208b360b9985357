"""Tests for RentalHouse models."""

import pytest
from pydantic import ValidationError

from propland.models.rental_house import Furnishing, RentalHouse, RentalHouseCreate
from tests.utils.factories import create_rental_data


@pytest.mark.unit
def test_rental_from_camel_case_fields():
    house = RentalHouse.model_validate({
        "id": "42",
        "title": "Modern 3BHK House with Garden",
        "monthlyRent": 2500,
        "deposit": 5000,
        "location": "Riverside Colony, Block C",
        "bedrooms": 3,
        "bathrooms": 2,
        "sqft": 1800,
        "furnishing": "Semi-Furnished",
        "availableFrom": "2026-02-01",
    })

    assert house.monthly_rent == 2500
    assert house.available_from == "2026-02-01"
    assert house.images == []


@pytest.mark.unit
def test_rental_available_from_may_be_empty_or_null():
    data = {**create_rental_data(), "id": "1"}

    assert RentalHouse.model_validate({**data, "available_from": ""}).available_from == ""
    assert RentalHouse.model_validate({**data, "available_from": None}).available_from == ""


@pytest.mark.unit
@pytest.mark.parametrize("field", ["monthly_rent", "deposit", "bedrooms", "bathrooms", "sqft"])
def test_rental_numeric_fields_never_negative(field):
    with pytest.raises(ValidationError):
        RentalHouse.model_validate({**create_rental_data(**{field: -1}), "id": "1"})


@pytest.mark.unit
def test_stored_rental_tolerates_unknown_furnishing():
    house = RentalHouse.model_validate({**create_rental_data(), "id": "1", "furnishing": "Partly"})

    assert house.furnishing == "Partly"


@pytest.mark.unit
def test_rental_create_validates_furnishing():
    with pytest.raises(ValidationError):
        RentalHouseCreate.model_validate(create_rental_data(furnishing="Partly"))


@pytest.mark.unit
def test_rental_create_defaults_and_row():
    data = create_rental_data()
    del data["furnishing"]

    house = RentalHouseCreate.model_validate(data)
    row = house.to_row()

    assert house.furnishing is Furnishing.UNFURNISHED
    assert row["furnishing"] == "Unfurnished"
    assert "id" not in row
    assert "monthly_rent" in row
