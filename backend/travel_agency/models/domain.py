from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, List, Optional, TypeVar

from travel_agency.models.errors import RecordNotFoundError, ValidationError

CRUISE_TRANSPORT = "cruise liner"

T = TypeVar("T")


class RecordType(str, Enum):
    excursion = "excursion"
    vacation = "vacation"
    cruise = "cruise"
    destination = "destination"


TRAVEL_TYPES = (RecordType.excursion, RecordType.vacation, RecordType.cruise)


def require_text(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or value == "":
        raise ValidationError(f"{field_name} must be a non-empty string", field_name=field_name)
    return value


def require_optional_text(value: Optional[str], field_name: str) -> Optional[str]:
    if value is None:
        return None
    return require_text(value, field_name)


def require_price(value: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("price must be a number", field_name="price")
    if not math.isfinite(value) or value < 0:
        raise ValidationError("price must be a non-negative number", field_name="price")
    # normalizes -0.0 so it renders as 0.00
    return float(value) + 0.0


def remove_first(items: List[T], predicate: Callable[[T], bool], message: str) -> T:
    """Remove and return the first item matching predicate or raise RecordNotFoundError."""
    for index, item in enumerate(items):
        if predicate(item):
            return items.pop(index)
    raise RecordNotFoundError(message)


@dataclass(frozen=True, eq=False)
class Destination:
    location: str
    landmark: str

    def __post_init__(self) -> None:
        require_text(self.location, "location")
        require_text(self.landmark, "landmark")

    @property
    def kind(self) -> str:
        return "Destination"

    def matches(self, location: Optional[str], landmark: Optional[str]) -> bool:
        return self.location == location and self.landmark == landmark


@dataclass(frozen=True, eq=False)
class Travel(ABC):
    """
    Common fields of every bookable trip. Instances are validated once on
    construction; the variant classes below are the only concrete types.
    """

    name: str
    start_date: date
    end_date: date
    price: float

    def __post_init__(self) -> None:
        require_text(self.name, "name")
        if not isinstance(self.start_date, date):
            raise ValidationError("start-date must be a date", field_name="start-date")
        if not isinstance(self.end_date, date):
            raise ValidationError("end-date must be a date", field_name="end-date")
        if self.end_date < self.start_date:
            raise ValidationError("end-date must not be before start-date", field_name="end-date")
        object.__setattr__(self, "price", require_price(self.price))

    @property
    @abstractmethod
    def kind(self) -> str:
        ...

    @property
    def has_destinations(self) -> bool:
        return False


@dataclass(frozen=True, eq=False)
class Excursion(Travel):
    transport: str
    destinations: List[Destination] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__post_init__()
        require_text(self.transport, "transport")

    @property
    def kind(self) -> str:
        return "Excursion"

    @property
    def has_destinations(self) -> bool:
        return True

    def add_destination(self, destination: Destination) -> None:
        self.destinations.append(destination)

    def remove_destination(self, destination: Destination) -> None:
        remove_first(self.destinations, lambda d: d is destination, "No such destination!")

    def detach_destination(self, destination: Destination) -> int:
        """Drop every reference to destination; returns how many were dropped."""
        kept = [d for d in self.destinations if d is not destination]
        dropped = len(self.destinations) - len(kept)
        self.destinations[:] = kept
        return dropped


@dataclass(frozen=True, eq=False)
class Vacation(Travel):
    location: str
    accommodation: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        require_text(self.location, "location")
        require_optional_text(self.accommodation, "accommodation")

    @property
    def kind(self) -> str:
        return "Vacation"


@dataclass(frozen=True, eq=False)
class Cruise(Excursion):
    transport: str = field(default=CRUISE_TRANSPORT, init=False)
    start_dock: Optional[str] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        require_optional_text(self.start_dock, "start-dock")

    @property
    def kind(self) -> str:
        return "Cruise"
