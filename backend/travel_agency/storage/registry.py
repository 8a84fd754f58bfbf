from __future__ import annotations

import logging
from typing import List

from travel_agency.models.domain import Destination, Excursion, Travel, remove_first
from travel_agency.models.errors import RecordNotFoundError

logger = logging.getLogger(__name__)


class TravelRegistry:
    """In-memory owner of every travel and destination for one command batch."""

    def __init__(self) -> None:
        self.travels: List[Travel] = []
        self.destinations: List[Destination] = []

    def save_travel(self, travel: Travel) -> Travel:
        self.travels.append(travel)
        return travel

    def save_destination(self, destination: Destination) -> Destination:
        self.destinations.append(destination)
        return destination

    def get_travel(self, name: str) -> Travel:
        for travel in self.travels:
            if travel.name == name:
                return travel
        raise RecordNotFoundError("No travel with such name exists.", key=str(name))

    def get_destination(self, location: str, landmark: str) -> Destination:
        for destination in self.destinations:
            if destination.matches(location, landmark):
                return destination
        raise RecordNotFoundError(
            "No destination with such location and landmark exists.",
            key=f"{location}/{landmark}",
        )

    def list_travels(self) -> List[Travel]:
        return list(self.travels)

    def excursions_referencing(self, destination: Destination) -> List[Excursion]:
        return [
            t
            for t in self.travels
            if isinstance(t, Excursion) and any(d is destination for d in t.destinations)
        ]

    def delete_travel(self, travel: Travel) -> Travel:
        return remove_first(self.travels, lambda t: t is travel, "No such travel!")

    def delete_destination(self, destination: Destination) -> Destination:
        """Detach destination from every excursion, then drop it from the registry."""
        if not any(d is destination for d in self.destinations):
            raise RecordNotFoundError("No such destination!")
        for excursion in self.excursions_referencing(destination):
            dropped = excursion.detach_destination(destination)
            logger.debug("Detached %d reference(s) from %s", dropped, excursion.name)
        return remove_first(self.destinations, lambda d: d is destination, "No such destination!")
