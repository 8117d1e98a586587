"""Manual edits from a settings or debug surface.

Every edit takes the engine lock so it lands between ticks, and every
edit is refused once the settings are locked.
"""
from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from tick_aging.calendar import calendar_year
from tick_aging.config import BLESSED_BONUS
from tick_aging.reconciler import sample_lifespan

if TYPE_CHECKING:
    from tick_aging.adjudicator import DeathAdjudicator
    from tick_aging.config import AgingSettings, RangeInput
    from tick_aging.host import ClockSource
    from tick_aging.ledger import Ledger
    from tick_aging.reconciler import Sampler
    from tick_aging.records import MortalityRecord

logger = logging.getLogger(__name__)


class CrewOverrides:
    def __init__(
        self,
        ledger: Ledger,
        adjudicator: DeathAdjudicator,
        settings: AgingSettings,
        clock: ClockSource,
        rng: Sampler,
        lock: threading.RLock | None = None,
    ) -> None:
        self._ledger = ledger
        self._adjudicator = adjudicator
        self._settings = settings
        self._clock = clock
        self._rng = rng
        self._lock = lock if lock is not None else threading.RLock()

    def _editable(self, name: str) -> MortalityRecord | None:
        if self._settings.locked:
            logger.warning("Settings are locked; ignoring edit to %s", name)
            return None
        record = self._ledger.get(name)
        if record is None or not record.is_alive:
            logger.warning("%s is not a living tracked crew member", name)
            return None
        return record

    def _check_threshold(self, name: str, record: MortalityRecord) -> None:
        if record.current_age >= record.death_age and not record.immortal:
            self._adjudicator.mark_dead(name, known=True, now=self._clock.now())

    def set_age(self, name: str, age: int) -> bool:
        """Set the current age. Lowering it rebases the record to this year."""
        with self._lock:
            record = self._editable(name)
            if record is None:
                return False
            if age < record.current_age:
                record.year_added = calendar_year(self._clock.now())
            record.current_age = max(0, age)
            record.rebase_birth_year()
            self._check_threshold(name, record)
            return True

    def add_frozen_years(self, name: str, years: int) -> bool:
        """Take *years* off the current age for time spent frozen."""
        with self._lock:
            record = self._editable(name)
            if record is None:
                return False
            record.current_age = max(0, record.current_age - years)
            self._check_threshold(name, record)
            return True

    def set_blessed(self, name: str, blessed: bool) -> bool:
        with self._lock:
            record = self._editable(name)
            if record is None:
                return False
            if blessed == record.blessed:
                return True
            record.blessed = blessed
            if blessed:
                record.death_age += BLESSED_BONUS
            else:
                record.death_age = max(
                    record.death_age - BLESSED_BONUS, record.current_age + 1
                )
            return True

    def set_immortal(self, name: str, immortal: bool) -> bool:
        with self._lock:
            record = self._editable(name)
            if record is None:
                return False
            record.immortal = immortal
            self._check_threshold(name, record)
            return True

    def apply_ranges(
        self,
        start_min: RangeInput = None,
        start_max: RangeInput = None,
        death_min: RangeInput = None,
        death_max: RangeInput = None,
    ) -> bool:
        """Update the aging ranges and resample every living lifespan.

        Inputs may be raw strings from a text field; a field that does not
        parse keeps its current value.
        """
        with self._lock:
            if self._settings.locked:
                logger.warning("Settings are locked; ignoring range change")
                return False
            ranges = self._settings.ranges.updated(start_min, start_max, death_min, death_max)
            self._settings.ranges = ranges
            logger.info("Aging ranges now %s", ranges)
            for name, record in self._ledger.items():
                if not record.is_alive:
                    continue
                record.death_age = sample_lifespan(ranges, self._rng, record.blessed)
                self._check_threshold(name, record)
            return True

    def lock(self) -> None:
        """Lock ranges and edits for the rest of the save. Irreversible."""
        with self._lock:
            self._settings.lock()
