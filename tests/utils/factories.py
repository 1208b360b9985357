"""Test data factories using Faker."""

from itertools import count
from typing import Optional

from faker import Faker

from propland.models.plot import Plot, PlotType
from propland.models.rental_house import Furnishing, RentalHouse

fake = Faker()

_ids = count(1)


def next_id() -> str:
    """Zero-padded ids so text order follows creation order."""
    return f"{next(_ids):06d}"


def create_plot_data(**overrides) -> dict:
    """Create plot form data (no id)."""
    data = {
        "title": f"{fake.word().title()} Plot",
        "price": fake.random_int(min=50000, max=500000),
        "location": fake.city(),
        "size": fake.random_int(min=1000, max=10000),
        "size_unit": "sq ft",
        "dimensions": f"{fake.random_int(20, 100)}x{fake.random_int(20, 100)} ft",
        "type": fake.random_element([t.value for t in PlotType]),
        "description": fake.sentence(),
        "images": [],
        "features": ["Road Access", "Electricity"],
    }
    data.update(overrides)
    return data


def create_rental_data(**overrides) -> dict:
    """Create rental form data (no id)."""
    data = {
        "title": f"{fake.word().title()} House",
        "monthly_rent": fake.random_int(min=500, max=6000),
        "deposit": fake.random_int(min=1000, max=12000),
        "location": fake.city(),
        "bedrooms": fake.random_int(min=1, max=4),
        "bathrooms": fake.random_int(min=1, max=3),
        "sqft": fake.random_int(min=400, max=3000),
        "furnishing": fake.random_element([f.value for f in Furnishing]),
        "available_from": fake.date_between(start_date="+1d", end_date="+90d").isoformat(),
        "description": fake.sentence(),
        "images": [],
        "amenities": ["Parking"],
    }
    data.update(overrides)
    return data


def make_plot(plot_id: Optional[str] = None, **overrides) -> Plot:
    return Plot(id=plot_id or next_id(), **create_plot_data(**overrides))


def make_rental(rental_id: Optional[str] = None, **overrides) -> RentalHouse:
    return RentalHouse(id=rental_id or next_id(), **create_rental_data(**overrides))
