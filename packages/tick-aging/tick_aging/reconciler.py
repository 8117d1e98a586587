"""Lifecycle reconciliation against the host roster and freeze tracker."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from tick_aging.calendar import DAYS_PER_YEAR
from tick_aging.config import BLESSED_BONUS, BLESSED_ODDS, DISCOVERED_AGE_RANGE
from tick_aging.host import RosterStatus
from tick_aging.records import UNSET_UT, MortalityRecord

if TYPE_CHECKING:
    from tick_aging.adjudicator import DeathAdjudicator
    from tick_aging.config import AgingConfig, AgingRanges, AgingSettings
    from tick_aging.ledger import Ledger
    from tick_aging.types import System, TickContext

logger = logging.getLogger(__name__)


class Sampler(Protocol):
    """The slice of ``random.Random`` used for sampling new records."""

    def randint(self, a: int, b: int) -> int: ...

    def randrange(self, stop: int) -> int: ...


def sample_lifespan(ranges: AgingRanges, rng: Sampler, blessed: bool) -> int:
    death_age = rng.randint(ranges.death_age_min, ranges.death_age_max)
    return death_age + BLESSED_BONUS if blessed else death_age


def new_living_record(ranges: AgingRanges, rng: Sampler, year: int) -> MortalityRecord:
    """Sample a fresh alive record from *ranges* in calendar *year*."""
    birthday = rng.randint(1, DAYS_PER_YEAR)
    start_age = rng.randint(ranges.start_age_min, ranges.start_age_max)
    blessed = rng.randrange(BLESSED_ODDS) == 0
    return MortalityRecord(
        current_age=start_age,
        death_age=sample_lifespan(ranges, rng, blessed),
        is_alive=True,
        birthday=birthday,
        year_added=year,
        birth_year=year - start_age,
        blessed=blessed,
    )


def new_discovered_record(rng: Sampler, year: int) -> MortalityRecord:
    """Record for a member first seen already dead; birth and death unknown."""
    birthday = rng.randint(1, DAYS_PER_YEAR)
    age = rng.randint(*DISCOVERED_AGE_RANGE)
    return MortalityRecord(
        current_age=age,
        death_age=age,
        is_alive=False,
        birthday=birthday,
        year_added=year,
        birth_year=year - age,
        death_ut=UNSET_UT,
        unknown_death=True,
        unknown_birth=True,
    )


def reanimate(record: MortalityRecord, ranges: AgingRanges, rng: Sampler) -> bool:
    """Bring a dead record back for a member the host reports frozen.

    A frozen member is alive by definition, so a dead record for one is a
    stale inference. The lifespan is resampled and kept above the current
    age. No-op on an alive record. Returns True if the record changed.
    """
    if record.is_alive:
        return False
    record.is_alive = True
    record.death_ut = UNSET_UT
    record.unknown_death = False
    record.death_age = max(
        sample_lifespan(ranges, rng, record.blessed), record.current_age + 1
    )
    return True


def make_reconcile_system(
    adjudicator: DeathAdjudicator,
    settings: AgingSettings,
    config: AgingConfig,
) -> System:
    """Return a system that syncs the ledger with the tick's roster snapshot.

    Pass order: drop ineligible records, create records for newly seen
    members, then correct records that contradict the roster.
    """
    excluded = config.excluded_traits
    next_due: float | None = None

    def reconcile_system(ledger: Ledger, ctx: TickContext) -> None:
        nonlocal next_due
        if next_due is not None and ctx.last_ut is not None and ctx.now < next_due:
            return
        next_due = ctx.now + config.reconcile_interval

        for name in ledger:
            member = ctx.crew.get(name)
            if member is not None and not member.is_trackable(excluded):
                ledger.remove(name)
                logger.info("Stopped tracking %s (%s)", name, member.trait)

        for name, member in ctx.crew.items():
            if not member.is_trackable(excluded):
                continue
            frozen = name in ctx.suspended
            record = ledger.get(name)

            if record is None:
                if not frozen and member.status is RosterStatus.DEAD:
                    record = new_discovered_record(ctx.random, ctx.year)
                    logger.info("Tracking %s, found already dead", name)
                else:
                    record = new_living_record(settings.ranges, ctx.random, ctx.year)
                    logger.info(
                        "Tracking %s: age %d, lifespan %d%s",
                        name, record.current_age, record.death_age,
                        " (blessed)" if record.blessed else "",
                    )
                ledger.create(name, record)
                continue

            if record.is_alive and member.status is RosterStatus.DEAD and not frozen:
                record.death_age = record.current_age
                adjudicator.mark_dead(name, known=False, now=ctx.now, suspended=ctx.suspended)
            elif frozen and reanimate(record, settings.ranges, ctx.random):
                logger.info("Reanimated frozen crew member %s", name)

    return reconcile_system
