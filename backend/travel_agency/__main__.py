#!/usr/bin/env python
import sys

from travel_agency.core.logging import configure_logging
from travel_agency.services.command_service import process_commands


def main() -> None:
    configure_logging(stream=sys.stderr)
    sys.stdout.write(process_commands(sys.stdin))


if __name__ == "__main__":
    main()
