"""Aging ranges, settings lock, and engine configuration."""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Union

logger = logging.getLogger(__name__)

BLESSED_BONUS = 50
BLESSED_ODDS = 50  # one in fifty new records is blessed
DISCOVERED_AGE_RANGE = (23, 81)

RangeInput = Union[int, str, None]


@dataclass(frozen=True)
class AgingRanges:
    """Inclusive ranges sampled when a record is created.

    Attributes:
        start_age_min: Youngest starting age.
        start_age_max: Oldest starting age.
        death_age_min: Shortest lifespan.
        death_age_max: Longest lifespan (before any blessing bonus).
    """

    start_age_min: int = 22
    start_age_max: int = 35
    death_age_min: int = 300
    death_age_max: int = 330

    def __post_init__(self) -> None:
        if self.start_age_min < 0:
            raise ValueError(f"start_age_min must be >= 0, got {self.start_age_min}")
        if self.start_age_max < self.start_age_min:
            raise ValueError("start_age_max must be >= start_age_min")
        if self.death_age_max < self.death_age_min:
            raise ValueError("death_age_max must be >= death_age_min")

    @classmethod
    def clamped(cls, start_min: int, start_max: int,
                death_min: int, death_max: int) -> AgingRanges:
        """Build ranges, raising each max up to its min when inverted."""
        start_min = max(0, start_min)
        return cls(
            start_age_min=start_min,
            start_age_max=max(start_max, start_min),
            death_age_min=death_min,
            death_age_max=max(death_max, death_min),
        )

    def updated(self, start_min: RangeInput = None, start_max: RangeInput = None,
                death_min: RangeInput = None, death_max: RangeInput = None) -> AgingRanges:
        """Apply raw settings input; fields that do not parse keep their value."""
        return AgingRanges.clamped(
            _parse_field("start_age_min", start_min, self.start_age_min),
            _parse_field("start_age_max", start_max, self.start_age_max),
            _parse_field("death_age_min", death_min, self.death_age_min),
            _parse_field("death_age_max", death_max, self.death_age_max),
        )


def _parse_field(field: str, raw: RangeInput, current: int) -> int:
    if raw is None:
        return current
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    logger.info("Ignoring non-numeric %s input %r", field, raw)
    return current


class AgingSettings:
    """Mutable holder for the live ranges and the one-way lock."""

    def __init__(self, ranges: AgingRanges | None = None, locked: bool = False) -> None:
        self.ranges: AgingRanges = ranges if ranges is not None else AgingRanges()
        self._locked = locked

    @property
    def locked(self) -> bool:
        return self._locked

    def lock(self) -> None:
        if not self._locked:
            logger.info("Aging settings locked")
        self._locked = True

    def restore(self, other: AgingSettings) -> None:
        """Take over another settings object's state, e.g. after a load."""
        self.ranges = other.ranges
        self._locked = other.locked

    def __repr__(self) -> str:
        return f"AgingSettings(ranges={self.ranges!r}, locked={self._locked})"


@dataclass(frozen=True)
class AgingConfig:
    """Engine-level options that are not persisted with a save.

    Attributes:
        excluded_traits: Crew traits that are never tracked.
        reconcile_interval: Minimum simulated seconds between roster
            reconciliation passes. 0 reconciles on every tick.
    """

    excluded_traits: tuple[str, ...] = ("Tourist",)
    reconcile_interval: float = 0.0

    def __post_init__(self) -> None:
        if self.reconcile_interval < 0:
            raise ValueError(
                f"reconcile_interval must be >= 0, got {self.reconcile_interval}"
            )

    def with_excluded(self, *traits: str) -> AgingConfig:
        return dataclasses.replace(self, excluded_traits=tuple(traits))
