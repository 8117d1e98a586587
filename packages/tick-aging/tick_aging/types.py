"""Shared type aliases and exceptions for tick-aging."""
from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Mapping

from tick_aging.calendar import calendar_year

if TYPE_CHECKING:
    from tick_aging.host import CrewMember
    from tick_aging.ledger import Ledger


@dataclass(frozen=True, slots=True)
class TickContext:
    """Per-tick view of the outside world.

    ``crew`` and ``suspended`` are snapshots taken once at the start of
    the tick; every system in the tick sees the same ones.
    """

    now: float
    last_ut: float | None
    crew: Mapping[str, CrewMember]
    suspended: frozenset[str]
    random: _random.Random

    @property
    def year(self) -> int:
        return calendar_year(self.now)


class AgingError(Exception):
    """Base class for tick-aging errors."""


class RecordDecodeError(AgingError, ValueError):
    """Raised when a persisted crew entry cannot be decoded."""

    def __init__(self, name: str | None, message: str) -> None:
        self.name = name
        super().__init__(message)


System = Callable[["Ledger", TickContext], None]
