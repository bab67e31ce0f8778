"""Parsing and validation of the simulation arguments."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

INT_MAX = 2147483647

_SIGN_MESSAGE = "please use only positive number without a sing :) "
_TOO_LONG_MESSAGE = "number is long"
_NO_PHILOSOPHERS_MESSAGE = (
    "number of philosofers is not correct please use number bigger than 0"
)
_USAGE_MESSAGE = "error"


class ArgumentError(ValueError):
    """Raised when the simulation arguments are malformed."""


@dataclass(frozen=True)
class Settings:
    """Timing and size parameters of one simulation run (times in ms)."""

    philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals: int | None = None


def parse_number(text: str) -> int:
    """Parse an unsigned decimal number no larger than INT_MAX."""
    if any(not "0" <= ch <= "9" for ch in text):
        raise ArgumentError(_SIGN_MESSAGE)
    value = 0
    for ch in text:
        value = value * 10 + (ord(ch) - ord("0"))
        if value > INT_MAX:
            raise ArgumentError(_TOO_LONG_MESSAGE)
    return value


def parse_settings(args: Sequence[str]) -> Settings:
    """Build settings from four or five positional arguments.

    The arguments are: number of philosophers, time to die, time to eat,
    time to sleep and, optionally, the number of meals each must eat.
    """
    values = list(args)
    if len(values) not in (4, 5):
        raise ArgumentError(_USAGE_MESSAGE)
    philosophers, die, eat, sleep = (parse_number(v) for v in values[:4])
    meals = parse_number(values[4]) if len(values) == 5 else None
    if philosophers == 0:
        raise ArgumentError(_NO_PHILOSOPHERS_MESSAGE)
    return Settings(
        philosophers=philosophers,
        time_to_die=die,
        time_to_eat=eat,
        time_to_sleep=sleep,
        meals=meals,
    )