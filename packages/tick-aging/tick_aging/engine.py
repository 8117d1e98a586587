"""AgingEngine - tick entry point, collaborator wiring, and persistence hooks."""
from __future__ import annotations

import logging
import os
import random
import threading
from typing import Callable

from tick_aging.accounting import make_aging_system
from tick_aging.adjudicator import DeathAdjudicator
from tick_aging.clock import TickClock
from tick_aging.config import AgingConfig, AgingSettings
from tick_aging.host import (
    ClockSource,
    Roster,
    RosterStatus,
    SuspensionSet,
    guarded_is_suspended,
)
from tick_aging.ledger import Ledger, Predicate, SortKey
from tick_aging.overrides import CrewOverrides
from tick_aging.persistence import TreeStore, load_state, save_state
from tick_aging.reconciler import make_reconcile_system
from tick_aging.records import MortalityRecord
from tick_aging.types import System

logger = logging.getLogger(__name__)


class AgingEngine:
    """Runs reconciliation and aging once per host tick.

    All public entry points hold one re-entrant lock, so ticks, status
    callbacks, overrides and save/load never interleave even when the host
    calls in from several threads.
    """

    def __init__(
        self,
        clock: ClockSource,
        roster: Roster,
        suspension: SuspensionSet | None = None,
        config: AgingConfig | None = None,
        settings: AgingSettings | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config: AgingConfig = config if config is not None else AgingConfig()
        self._clock = TickClock(clock)
        self._roster = roster
        self._suspension = suspension
        self._ledger = Ledger()
        self._settings = settings if settings is not None else AgingSettings()
        self._lock = threading.RLock()

        if rng is None:
            if seed is None:
                seed = int.from_bytes(os.urandom(8))
            rng = random.Random(seed)
        self._seed = seed
        self._rng = rng

        self._adjudicator = DeathAdjudicator(
            self._ledger, roster, suspension, self.config.excluded_traits
        )
        self._overrides = CrewOverrides(
            self._ledger, self._adjudicator, self._settings, clock, self._rng, self._lock
        )
        self._systems: list[System] = [
            make_reconcile_system(self._adjudicator, self._settings, self.config),
            make_aging_system(self._adjudicator),
        ]

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def settings(self) -> AgingSettings:
        return self._settings

    @property
    def overrides(self) -> CrewOverrides:
        return self._overrides

    @property
    def adjudicator(self) -> DeathAdjudicator:
        return self._adjudicator

    @property
    def clock(self) -> TickClock:
        return self._clock

    @property
    def last_ut(self) -> float | None:
        return self._clock.last_ut

    @property
    def seed(self) -> int | None:
        return self._seed

    def add_system(self, system: System) -> None:
        """Append a system that runs after reconciliation and aging."""
        with self._lock:
            self._systems.append(system)

    def on_death(self, cb: Callable[[str, MortalityRecord], None]) -> None:
        self._adjudicator.on_death(cb)

    def is_suspended(self, name: str) -> bool:
        return guarded_is_suspended(self._suspension, name)

    # -- Host entry points --

    def on_tick(self) -> bool:
        """Run one tick. Returns False while the host clock is not valid."""
        with self._lock:
            now = self._clock.read()
            if now is None:
                return False
            crew = {member.name: member for member in self._roster.members()}
            suspended = frozenset(name for name in crew if self.is_suspended(name))
            ctx = self._clock.context(now, crew, suspended, self._rng)
            if ctx.last_ut is None:
                logger.debug("Aging baseline set at UT %.1f", now)
            for system in self._systems:
                system(self._ledger, ctx)
            self._clock.advance(now)
            return True

    def on_external_status_changed(
        self, name: str, previous: RosterStatus, new: RosterStatus
    ) -> bool:
        """Adjudicate a death the host reports as it happens.

        Only transitions into DEAD matter. Returns True if the record was
        marked dead with a known time.
        """
        if new is not RosterStatus.DEAD or previous is RosterStatus.DEAD:
            return False
        with self._lock:
            now = self._clock.read()
            if now is None:
                return False
            record = self._ledger.get(name)
            if record is None or not record.is_alive:
                return False
            member = self._roster.get(name)
            if member is not None and not member.is_trackable(self.config.excluded_traits):
                return False
            if self.is_suspended(name):
                logger.warning("Ignoring death report for frozen crew member %s", name)
                return False
            age_limit = record.death_age
            record.death_age = record.current_age
            if not self._adjudicator.mark_dead(name, known=True, now=now):
                record.death_age = age_limit
                return False
            return True

    def load(self, tree: TreeStore) -> None:
        """Replace the ledger and settings with what *tree* holds."""
        with self._lock:
            now = self._clock.source.now()
            ledger, settings = load_state(tree, now)
            self._ledger.clear()
            for name, record in ledger.items():
                self._ledger.create(name, record)
            self._settings.restore(settings)
            self._clock.reset()
            logger.info("Loaded aging data for %d crew member(s)", len(self._ledger))

    def save(self, tree: TreeStore) -> None:
        with self._lock:
            save_state(tree, self._ledger, self._settings)

    # -- Read side --

    def records(
        self,
        where: Predicate | None = None,
        order_by: SortKey | None = None,
        reverse: bool = False,
    ) -> list[tuple[str, MortalityRecord]]:
        with self._lock:
            return self._ledger.records(where, order_by, reverse)
