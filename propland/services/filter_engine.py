"""Filter and sort engine shared by plot and rental browsing.

Every function here is pure: it reads the snapshot it is given, returns a new
list and never mutates or retains its input.
"""

import math
from typing import Optional, Sequence, TypeVar, Union

from propland.models.criteria import ALL, PlotCriteria, RawValue, RentalCriteria, SortKey
from propland.models.plot import Plot
from propland.models.rental_house import RentalHouse

T = TypeVar("T", Plot, RentalHouse)

# Filter value that means "N or more" bedrooms/bathrooms.
BEDROOMS_OR_MORE = 5
BATHROOMS_OR_MORE = 4


def parse_number(value: RawValue) -> Optional[float]:
    """
    Interpret a raw criteria value as a number.

    Returns None (constraint absent) for None, empty strings, booleans,
    non-numeric text and non-finite values (including ints too large for a float).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _is_present(value: Optional[str]) -> bool:
    return value is not None and value != ""


def _within(value: float, lower: Optional[float], upper: Optional[float]) -> bool:
    # Bounds are applied independently; lower > upper simply matches nothing.
    if lower is not None and value < lower:
        return False
    if upper is not None and value > upper:
        return False
    return True


def _count_matches(actual: int, wanted: Optional[float], or_more_at: int) -> bool:
    if wanted is None:
        return True
    if wanted == or_more_at:
        return actual >= or_more_at
    return actual == wanted


def _location_matches(location: str, needle: Optional[str]) -> bool:
    if not _is_present(needle):
        return True
    return needle.lower() in (location or "").lower()


def _enum_matches(actual: str, wanted: Optional[str]) -> bool:
    if not _is_present(wanted) or wanted == ALL:
        return True
    return actual == wanted


def _newest_first(records: list[T]) -> list[T]:
    return sorted(records, key=lambda r: str(r.id), reverse=True)


def filter_plots(
    plots: Sequence[Plot],
    criteria: Optional[PlotCriteria] = None,
    sort_key: Union[SortKey, str, None] = SortKey.NEWEST,
) -> list[Plot]:
    """Return the plots matching every supplied constraint, in sort_key order."""
    criteria = criteria or PlotCriteria()
    min_price = parse_number(criteria.min_price)
    max_price = parse_number(criteria.max_price)
    min_size = parse_number(criteria.min_size)
    max_size = parse_number(criteria.max_size)

    # Size bounds compare raw numbers regardless of size_unit.
    result = [
        plot for plot in plots
        if _within(plot.price, min_price, max_price)
        and _within(plot.size, min_size, max_size)
        and _location_matches(plot.location, criteria.location)
        and _enum_matches(plot.type, criteria.type)
    ]

    key = SortKey.parse(sort_key)
    if key == SortKey.PRICE_LOW:
        result.sort(key=lambda p: p.price)
    elif key == SortKey.PRICE_HIGH:
        result.sort(key=lambda p: p.price, reverse=True)
    elif key == SortKey.SIZE:
        result.sort(key=lambda p: p.size, reverse=True)
    else:
        result = _newest_first(result)
    return result


def filter_rentals(
    houses: Sequence[RentalHouse],
    criteria: Optional[RentalCriteria] = None,
    sort_key: Union[SortKey, str, None] = SortKey.NEWEST,
) -> list[RentalHouse]:
    """Return the rentals matching every supplied constraint, in sort_key order."""
    criteria = criteria or RentalCriteria()
    min_rent = parse_number(criteria.min_rent)
    max_rent = parse_number(criteria.max_rent)
    bedrooms = parse_number(criteria.bedrooms)
    bathrooms = parse_number(criteria.bathrooms)

    result = [
        house for house in houses
        if _within(house.monthly_rent, min_rent, max_rent)
        and _count_matches(house.bedrooms, bedrooms, BEDROOMS_OR_MORE)
        and _count_matches(house.bathrooms, bathrooms, BATHROOMS_OR_MORE)
        and _location_matches(house.location, criteria.location)
        and _enum_matches(house.furnishing, criteria.furnishing)
    ]

    key = SortKey.parse(sort_key)
    if key == SortKey.PRICE_LOW:
        result.sort(key=lambda h: h.monthly_rent)
    elif key == SortKey.PRICE_HIGH:
        result.sort(key=lambda h: h.monthly_rent, reverse=True)
    elif key == SortKey.SIZE:
        result.sort(key=lambda h: h.sqft, reverse=True)
    else:
        result = _newest_first(result)
    return result


def filter_and_sort(
    collection: Sequence[T],
    criteria: Union[PlotCriteria, RentalCriteria],
    sort_key: Union[SortKey, str, None] = SortKey.NEWEST,
) -> list[T]:
    """Dispatch to the plot or rental engine based on the criteria type."""
    if isinstance(criteria, PlotCriteria):
        return filter_plots(collection, criteria, sort_key)
    if isinstance(criteria, RentalCriteria):
        return filter_rentals(collection, criteria, sort_key)
    raise TypeError(f"Unsupported criteria type: {type(criteria).__name__}")


def find_by_id(collection: Sequence[T], listing_id: str) -> Optional[T]:
    """Return the record with the given id, or None when there is no match."""
    wanted = str(listing_id)
    for record in collection:
        if str(record.id) == wanted:
            return record
    return None


def similar_plots(plots: Sequence[Plot], plot: Plot, limit: int = 3) -> list[Plot]:
    """Other plots of the same type, in collection order."""
    return [p for p in plots if p.id != plot.id and p.type == plot.type][:limit]


def similar_rentals(houses: Sequence[RentalHouse], house: RentalHouse, limit: int = 3) -> list[RentalHouse]:
    """Other rentals with the same number of bedrooms, in collection order."""
    return [h for h in houses if h.id != house.id and h.bedrooms == house.bedrooms][:limit]


def featured(collection: Sequence[T], limit: int = 6) -> list[T]:
    """The first `limit` listings as held by the directory (newest first from the store)."""
    return list(collection[:limit])
