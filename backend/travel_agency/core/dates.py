from __future__ import annotations

import re
from datetime import date
from typing import Optional

from travel_agency.models.errors import DateFormatError

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_DATE_PATTERN = re.compile(r"^(\d{1,2})-([A-Za-z]{3})-(\d{4})$")


def format_date(value: date) -> str:
    """Render a date as D-Mon-YYYY, e.g. 1-Jun-2024."""
    return f"{value.day}-{MONTH_ABBREVIATIONS[value.month - 1]}-{value.year}"


def parse_date(text: Optional[str]) -> Optional[date]:
    """
    Parse the single supported representation D-Mon-YYYY.
    Empty input means "no date" and returns None. Anything that does not
    format back to the exact same text is rejected.
    """
    if not text:
        return None

    match = _DATE_PATTERN.match(text)
    if not match:
        raise DateFormatError(f"Invalid date: {text}", text=text)

    day, month_name, year = match.groups()
    if month_name not in MONTH_ABBREVIATIONS:
        raise DateFormatError(f"Unknown month: {month_name}", text=text)

    try:
        parsed = date(int(year), MONTH_ABBREVIATIONS.index(month_name) + 1, int(day))
    except ValueError as exc:
        raise DateFormatError(f"Invalid date: {text}", cause=exc, text=text) from exc

    # rejects leading zeros and any other non-canonical spelling
    if format_date(parsed) != text:
        raise DateFormatError(f"Invalid date: {text}", text=text)
    return parsed
