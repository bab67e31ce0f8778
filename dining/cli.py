"""Command-line entry point for the dining philosophers simulation."""

from __future__ import annotations

import sys
from collections.abc import Sequence

from dining.config import ArgumentError, parse_settings
from dining.table import Table, run_single


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation with the given arguments and return an exit status.

    The arguments are: number of philosophers, time to die, time to eat,
    time to sleep and, optionally, how many meals each philosopher must eat.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (4, 5):
        sys.stderr.write("error\n")
        sys.stderr.flush()
        return 1
    try:
        settings = parse_settings(args)
    except ArgumentError as exc:
        print(exc, flush=True)
        return 1
    if settings.philosophers == 1:
        run_single(settings, sys.stdout)
        return 0
    Table(settings, sys.stdout).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())