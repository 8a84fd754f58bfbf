from __future__ import annotations

import logging
import math
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional

from travel_agency.core.dates import parse_date
from travel_agency.models.domain import (
    Cruise,
    Destination,
    Excursion,
    RecordType,
    TRAVEL_TYPES,
    Travel,
    Vacation,
)
from travel_agency.models.errors import (
    NotApplicableError,
    TravelAgencyError,
    UnsupportedActionError,
    UnsupportedTypeError,
    ValidationError,
)
from travel_agency.services import query_service
from travel_agency.services.command_parser import ParsedCommand, parse_command
from travel_agency.storage.registry import TravelRegistry

logger = logging.getLogger(__name__)

INVALID_COMMAND = "Invalid command."


def parse_price(raw: Optional[str], field_name: str = "price") -> float:
    if raw is None:
        raise ValidationError(f"{field_name} is required", field_name=field_name)
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValidationError(f"{field_name} must be a number", cause=exc, field_name=field_name) from exc
    if not math.isfinite(value):
        raise ValidationError(f"{field_name} must be finite", field_name=field_name)
    return value


def parse_required_date(raw: Optional[str], field_name: str) -> date:
    parsed = parse_date(raw)
    if parsed is None:
        raise ValidationError(f"{field_name} is required", field_name=field_name)
    return parsed


class CommandProcessor:
    """Dispatches parsed commands to registry operations and renders the result line."""

    def __init__(self, registry: TravelRegistry):
        self.registry = registry
        self.handlers: Dict[str, Callable[[ParsedCommand], str]] = {
            "insert": self.insert,
            "delete": self.delete,
            "list": self.list_travels,
            "filter": self.filter_travels,
            "add-destination": self.add_destination,
            "remove-destination": self.remove_destination,
        }

    def execute(self, line: str) -> str:
        command = parse_command(line)
        handler = self.handlers.get(command.action)
        if handler is None:
            raise UnsupportedActionError("Unsupported command.", action=command.action)
        return handler(command)

    def _record_type(self, command: ParsedCommand) -> RecordType:
        raw = command.get("type")
        try:
            return RecordType(raw)
        except ValueError as exc:
            raise UnsupportedTypeError("Invalid type.", cause=exc, type_name=str(raw)) from exc

    def _build_travel(self, record_type: RecordType, command: ParsedCommand) -> Travel:
        common = dict(
            name=command.get("name"),
            start_date=parse_required_date(command.get("start-date"), "start-date"),
            end_date=parse_required_date(command.get("end-date"), "end-date"),
            price=parse_price(command.get("price")),
        )
        if record_type is RecordType.excursion:
            return Excursion(transport=command.get("transport"), **common)
        if record_type is RecordType.vacation:
            return Vacation(
                location=command.get("location"),
                accommodation=command.get("accommodation"),
                **common,
            )
        return Cruise(start_dock=command.get("start-dock"), **common)

    def insert(self, command: ParsedCommand) -> str:
        record_type = self._record_type(command)
        if record_type is RecordType.destination:
            record = self.registry.save_destination(
                Destination(location=command.get("location"), landmark=command.get("landmark"))
            )
        else:
            record = self.registry.save_travel(self._build_travel(record_type, command))
        logger.debug("Inserted %s", record)
        return f"{record.kind} created."

    def delete(self, command: ParsedCommand) -> str:
        record_type = self._record_type(command)
        if record_type is RecordType.destination:
            destination = self.registry.get_destination(command.get("location"), command.get("landmark"))
            record = self.registry.delete_destination(destination)
        else:
            travel = self.registry.get_travel(command.get("name"))
            record = self.registry.delete_travel(travel)
        return f"{record.kind} deleted."

    def list_travels(self, command: ParsedCommand) -> str:
        return query_service.list_travels(self.registry.list_travels())

    def filter_travels(self, command: ParsedCommand) -> str:
        type_name = command.get("type")
        if not type_name:
            raise ValidationError("type is required", field_name="type")
        price_min = price_max = None
        if type_name.lower() != query_service.ALL_TYPES:
            if type_name.lower() not in {t.value for t in TRAVEL_TYPES}:
                raise UnsupportedTypeError("Invalid type.", type_name=type_name)
            price_min = parse_price(command.get("price-min"), "price-min")
            price_max = parse_price(command.get("price-max"), "price-max")
        return query_service.filter_travels(
            self.registry.list_travels(),
            type_name,
            price_min=price_min,
            price_max=price_max,
        )

    def _excursion_and_destination(self, command: ParsedCommand):
        travel = self.registry.get_travel(command.get("name"))
        if not travel.has_destinations:
            raise NotApplicableError("Travel does not have destinations.", travel_name=travel.name)
        destination = self.registry.get_destination(command.get("location"), command.get("landmark"))
        return travel, destination

    def add_destination(self, command: ParsedCommand) -> str:
        travel, destination = self._excursion_and_destination(command)
        travel.add_destination(destination)
        return f"Added destination to {travel.name}."

    def remove_destination(self, command: ParsedCommand) -> str:
        travel, destination = self._excursion_and_destination(command)
        travel.remove_destination(destination)
        return f"Removed destination from {travel.name}."


def process_lines(lines: Iterable[str], registry: Optional[TravelRegistry] = None) -> List[str]:
    """Run every non-blank line against one registry; one result per command."""
    processor = CommandProcessor(registry if registry is not None else TravelRegistry())
    results: List[str] = []
    for raw in lines:
        line = raw.rstrip()
        if not line.strip():
            continue
        try:
            results.append(processor.execute(line))
        except TravelAgencyError as exc:
            logger.info("Command %r failed (%s): %s", line, type(exc).__name__, exc)
            results.append(INVALID_COMMAND)
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected failure while processing %r", line)
            results.append(INVALID_COMMAND)
    return results


def process_commands(lines: Iterable[str]) -> str:
    return "".join(f"{result}\n" for result in process_lines(lines))
