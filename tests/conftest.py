"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-key")
os.environ.setdefault("LOG_FORMAT", "text")

from propland.models.plot import Plot
from propland.models.rental_house import RentalHouse
from propland.services.directory import PropertyDirectory
from tests.utils.fakes import FakeListingStore


@pytest.fixture
def fake_store():
    """In-memory listing store with one admin account."""
    return FakeListingStore(users={"admin@propland.test": "secret123"})


@pytest.fixture
def directory(fake_store):
    return PropertyDirectory(fake_store)


@pytest.fixture
def sample_plots():
    """The six launch plots, newest first as the store returns them."""
    return [
        Plot(id="000006", title="Luxury Villa Plot in Palm Heights", price=350000,
             location="Palm Heights, Premium Block", size=4800, size_unit="sq ft",
             dimensions="60x80 ft", type="Residential"),
        Plot(id="000005", title="Industrial Plot in Tech Park", price=450000,
             location="Industrial Tech Park, Zone B", size=10000, size_unit="sq ft",
             dimensions="100x100 ft", type="Industrial"),
        Plot(id="000004", title="Agricultural Land with Water Source", price=180000,
             location="Riverside Farms", size=2, size_unit="acres",
             dimensions="200x435 ft", type="Agricultural"),
        Plot(id="000003", title="Affordable Plot in Sunrise Colony", price=75000,
             location="Sunrise Colony, Phase 2", size=1800, size_unit="sq ft",
             dimensions="30x60 ft", type="Residential"),
        Plot(id="000002", title="Commercial Plot Near Highway", price=285000,
             location="Highway Junction, Block A", size=5000, size_unit="sq ft",
             dimensions="50x100 ft", type="Commercial"),
        Plot(id="000001", title="Premium Residential Plot in Green Valley", price=125000,
             location="Green Valley, Sector 5", size=2400, size_unit="sq ft",
             dimensions="40x60 ft", type="Residential"),
    ]


@pytest.fixture
def sample_rentals():
    """The six launch rentals, newest first as the store returns them."""
    return [
        RentalHouse(id="000006", title="Charming Cottage with Fireplace", monthly_rent=2200,
                    deposit=4400, location="Woodland Lane, Cottage Row", bedrooms=2,
                    bathrooms=1, sqft=1400, furnishing="Semi-Furnished"),
        RentalHouse(id="000005", title="Luxury Penthouse with City Views", monthly_rent=5500,
                    deposit=11000, location="Skyline Towers, Floor 25", bedrooms=3,
                    bathrooms=2, sqft=2200, furnishing="Fully Furnished"),
        RentalHouse(id="000004", title="Studio Apartment Near University", monthly_rent=950,
                    deposit=1900, location="University Heights, Building B", bedrooms=1,
                    bathrooms=1, sqft=550, furnishing="Fully Furnished"),
        RentalHouse(id="000003", title="Spacious 4BHK Family Home", monthly_rent=3500,
                    deposit=7000, location="Oak Street, Family District", bedrooms=4,
                    bathrooms=3, sqft=2500, furnishing="Unfurnished"),
        RentalHouse(id="000002", title="Cozy 2BHK Apartment in City Center", monthly_rent=1800,
                    deposit=3600, location="Downtown Plaza, Unit 405", bedrooms=2,
                    bathrooms=1, sqft=1200, furnishing="Fully Furnished"),
        RentalHouse(id="000001", title="Modern 3BHK House with Garden", monthly_rent=2500,
                    deposit=5000, location="Riverside Colony, Block C", bedrooms=3,
                    bathrooms=2, sqft=1800, furnishing="Semi-Furnished"),
    ]


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2026-01-15 12:00:00") as frozen_time:
        yield frozen_time
