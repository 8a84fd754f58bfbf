from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from travel_agency.core.dates import format_date
from travel_agency.models.domain import Destination, Excursion, Travel, Vacation

ALL_TYPES = "all"
NO_RESULTS = "No results."


def format_destination(destination: Destination) -> str:
    return f"{destination.kind}: location={destination.location},landmark={destination.landmark}"


def format_travel(travel: Travel) -> str:
    text = (
        f" * {travel.kind}: name={travel.name}"
        f",start-date={format_date(travel.start_date)}"
        f",end-date={format_date(travel.end_date)}"
        f",price={travel.price:.2f}"
    )
    if isinstance(travel, Vacation):
        text += f",location={travel.location}"
        if travel.accommodation:
            text += f",accommodation={travel.accommodation}"
    elif isinstance(travel, Excursion):
        if travel.transport:
            text += f",transport={travel.transport}"
        destinations = ";".join(format_destination(d) for d in travel.destinations)
        text += "\n ** Destinations: " + (destinations or "-")
    return text


def format_travels(travels: Sequence[Travel]) -> str:
    if not travels:
        return NO_RESULTS
    return "\n".join(format_travel(t) for t in travels)


def sort_travels(travels: Iterable[Travel]) -> List[Travel]:
    """Ascending by start date, ties broken by name (plain code-point order)."""
    return sorted(travels, key=lambda t: (t.start_date, t.name))


def select_travels(
    travels: Iterable[Travel],
    type_name: str,
    price_min: Optional[float] = None,
    price_max: Optional[float] = None,
) -> List[Travel]:
    wanted = type_name.lower()
    selected: List[Travel] = []
    for travel in travels:
        if wanted != ALL_TYPES:
            if travel.kind.lower() != wanted:
                continue
            if price_min is None or price_max is None:
                continue
            if not price_min <= travel.price <= price_max:
                continue
        selected.append(travel)
    return selected


def filter_travels(
    travels: Iterable[Travel],
    type_name: str,
    price_min: Optional[float] = None,
    price_max: Optional[float] = None,
) -> str:
    selected = select_travels(travels, type_name, price_min, price_max)
    return format_travels(sort_travels(selected))


def list_travels(travels: Sequence[Travel]) -> str:
    return format_travels(travels)
