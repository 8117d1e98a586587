"""Mortality record and death-time types."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# Sentinel stored in ``death_ut`` while no death moment is known.
UNSET_UT = -1.0


@dataclass(frozen=True, slots=True)
class Unknown:
    """Death happened, but the moment was never observed."""


@dataclass(frozen=True, slots=True)
class KnownAt:
    """Death observed at simulation time *ut*."""

    ut: float


UNKNOWN = Unknown()

DeathTime = Union[Unknown, KnownAt]


@dataclass
class MortalityRecord:
    """Aging state of one tracked crew member.

    Attributes:
        current_age: Age in calendar years.
        death_age: Age at which the member dies unless immortal.
        is_alive: False once the death adjudicator has fired.
        birthday: Day of year (1-426) on which the age increments.
        year_added: Calendar year the record was created or last rebased.
        birth_year: ``year_added - current_age``; <= 0 means born before
            calendar start.
        blessed: Lifespan carries the blessing bonus.
        immortal: Never adjudicated dead by age.
        death_ut: Death timestamp, ``UNSET_UT`` when unset.
        unknown_death: Death moment was not observed.
        unknown_birth: Birth date was never meaningfully assigned.
    """

    current_age: int
    death_age: int
    is_alive: bool = True
    birthday: int = 1
    year_added: int = 1
    birth_year: int = 0
    blessed: bool = False
    immortal: bool = False
    death_ut: float = UNSET_UT
    unknown_death: bool = False
    unknown_birth: bool = False

    @property
    def death_time(self) -> DeathTime | None:
        """None while alive, otherwise ``UNKNOWN`` or ``KnownAt(ut)``."""
        if self.is_alive:
            return None
        if self.unknown_death or self.death_ut < 0:
            return UNKNOWN
        return KnownAt(self.death_ut)

    @property
    def years_left(self) -> int:
        return self.death_age - self.current_age

    def rebase_birth_year(self) -> None:
        self.birth_year = self.year_added - self.current_age
