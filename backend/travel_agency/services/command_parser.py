from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from travel_agency.models.errors import CommandParseError

logger = logging.getLogger(__name__)

ARGS_OPEN = "("
ARGS_CLOSE = ")"
PAIR_SEPARATOR = ";"
KEY_VALUE_SEPARATOR = "="


@dataclass
class ParsedCommand:
    action: str
    fields: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        return self.fields.get(key)


def parse_command(line: str) -> ParsedCommand:
    """
    Tokenize one command line of the form action(key1=value1;key2=value2).
    Values are raw strings; no escaping is supported.
    """
    open_index = line.find(ARGS_OPEN)
    if open_index == -1:
        raise CommandParseError("Missing '(' after action", line=line)

    action = line[:open_index]
    if not action:
        raise CommandParseError("Missing action", line=line)

    body = line[open_index + 1 :]
    if not body.endswith(ARGS_CLOSE):
        raise CommandParseError("Missing closing ')'", line=line)
    body = body[: -len(ARGS_CLOSE)]
    if ARGS_OPEN in body or ARGS_CLOSE in body:
        raise CommandParseError("Nested parentheses are not supported", line=line)

    fields: Dict[str, str] = {}
    if body:
        for segment in body.split(PAIR_SEPARATOR):
            key, separator, value = segment.partition(KEY_VALUE_SEPARATOR)
            if not separator:
                raise CommandParseError(f"Expected key=value, got '{segment}'", line=line)
            if not key:
                raise CommandParseError(f"Empty key in '{segment}'", line=line)
            if key in fields:
                logger.debug("Duplicate key %s in command, keeping last value", key)
            fields[key] = value

    return ParsedCommand(action=action, fields=fields)
