"""Argument handling for the process ring exercise."""

from __future__ import annotations

import sys
from dataclasses import dataclass

USAGE = "Uso: anillo <n> <c> <s> "


class UsageError(Exception):
    """Raised when the wrong number of arguments is given."""


@dataclass(frozen=True)
class RingConfig:
    """How many processes, the value sent round and the starting process."""

    processes: int
    value: int
    start: int

    def describe(self) -> str:
        return (
            f"Se crearán {self.processes} procesos, se enviará el caracter "
            f"{self.value} desde proceso {self.start} "
        )


def parse_args(argv: list[str]) -> RingConfig:
    """Parse ``<n> <c> <s>``; raise UsageError or ValueError on bad input."""
    if len(argv) != 3:
        raise UsageError(USAGE)
    processes, value, start = (int(arg) for arg in argv)
    return RingConfig(processes, value, start)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        config = parse_args(args)
    except UsageError:
        print(USAGE)
        return 0
    except ValueError as exc:
        print(f"invalid argument: {exc}", file=sys.stderr)
        return 1
    print(config.describe())
    return 0