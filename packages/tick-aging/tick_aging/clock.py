"""TickClock baseline tracking and a manually driven clock source."""
from __future__ import annotations

import random
from typing import Mapping

from tick_aging.host import ClockSource, CrewMember
from tick_aging.types import TickContext


class TickClock:
    """Remembers the last observed simulation time of an external clock."""

    def __init__(self, source: ClockSource) -> None:
        self._source = source
        self._last_ut: float | None = None
        self._tick_number = 0

    @property
    def source(self) -> ClockSource:
        return self._source

    @property
    def last_ut(self) -> float | None:
        return self._last_ut

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def read(self) -> float | None:
        """Current time, or None while the host clock is not yet valid."""
        now = self._source.now()
        if now <= 0:
            return None
        return now

    def advance(self, now: float) -> int:
        self._last_ut = now
        self._tick_number += 1
        return self._tick_number

    def context(
        self,
        now: float,
        crew: Mapping[str, CrewMember],
        suspended: frozenset[str],
        rng: random.Random,
    ) -> TickContext:
        return TickContext(
            now=now,
            last_ut=self._last_ut,
            crew=crew,
            suspended=suspended,
            random=rng,
        )

    def reset(self) -> None:
        """Forget the baseline; the next tick only re-establishes it."""
        self._last_ut = None


class ManualClock:
    """ClockSource driven by hand. Conforms to the ClockSource protocol."""

    def __init__(self, ut: float = 0.0) -> None:
        self.ut = ut

    def now(self) -> float:
        return self.ut

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("ManualClock cannot run backwards")
        self.ut += seconds
        return self.ut

    def set(self, ut: float) -> None:
        self.ut = ut
