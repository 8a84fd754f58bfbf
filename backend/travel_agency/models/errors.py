"""Typed errors for the travel agency command processor.

Every failure while processing a single command is raised as one of these
types. The command boundary turns all of them into the same user-visible
line, but tests and logs can still tell them apart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TravelAgencyError(Exception):
    """Base error for the travel agency domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ValidationError(TravelAgencyError, ValueError):
    """A field violates its constraint (empty string, bad price, end before start)."""

    field_name: str = ""


@dataclass
class DateFormatError(ValidationError):
    """Text does not round-trip through the date codec."""

    text: str = ""


@dataclass
class CommandParseError(TravelAgencyError):
    """Command line does not follow the action(key=value;...) grammar."""

    line: str = ""


@dataclass
class RecordNotFoundError(TravelAgencyError, LookupError):
    """Named travel or destination is not in the registry or on a travel."""

    key: str = ""


@dataclass
class NotApplicableError(TravelAgencyError):
    """Operation needs an excursion-family travel but got another variant."""

    travel_name: str = ""


@dataclass
class UnsupportedTypeError(TravelAgencyError):
    """Unrecognized record type."""

    type_name: str = ""


@dataclass
class UnsupportedActionError(TravelAgencyError):
    """Unrecognized command action."""

    action: str = ""
