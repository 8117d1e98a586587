"""DeathAdjudicator - the single path from alive to dead."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Collection

from tick_aging.host import RosterStatus, guarded_is_suspended
from tick_aging.records import UNSET_UT

if TYPE_CHECKING:
    from tick_aging.host import Roster, SuspensionSet
    from tick_aging.ledger import Ledger
    from tick_aging.records import MortalityRecord

logger = logging.getLogger(__name__)

DeathCallback = Callable[[str, "MortalityRecord"], None]


class DeathAdjudicator:
    """Flips records to dead and pushes the death out to the roster.

    Callers are expected to call ``mark_dead`` once per transition; a
    second call on an already-dead record does nothing.
    """

    def __init__(
        self,
        ledger: Ledger,
        roster: Roster,
        suspension: SuspensionSet | None = None,
        excluded_traits: Collection[str] = ("Tourist",),
    ) -> None:
        self._ledger = ledger
        self._roster = roster
        self._suspension = suspension
        self._excluded = tuple(excluded_traits)
        self._on_death: list[DeathCallback] = []

    def on_death(self, cb: DeathCallback) -> None:
        """Register an observer called as ``cb(name, record)`` after a death."""
        self._on_death.append(cb)

    def is_suspended(self, name: str, suspended: Collection[str] | None = None) -> bool:
        if suspended is not None:
            return name in suspended
        return guarded_is_suspended(self._suspension, name)

    def mark_dead(
        self,
        name: str,
        *,
        known: bool,
        now: float,
        suspended: Collection[str] | None = None,
    ) -> bool:
        """Adjudicate the death of *name*. Returns True if the record changed.

        With ``known`` the death is stamped at *now*; otherwise the moment
        is recorded as unknown. *suspended* is the tick's frozen-set
        snapshot; outside a tick it is omitted and the freeze tracker is
        asked directly.
        """
        record = self._ledger.get(name)
        if record is None:
            logger.debug("No record for %s; nothing to adjudicate", name)
            return False
        if not record.is_alive:
            return False

        member = self._roster.get(name)
        if member is not None and not member.is_trackable(self._excluded):
            logger.warning("Refusing to mark untracked crew member %s dead", name)
            return False
        if self.is_suspended(name, suspended):
            logger.warning("Refusing to mark frozen crew member %s dead", name)
            return False

        if member is not None:
            if member.status is RosterStatus.ASSIGNED:
                self._roster.detach(name)
            if member.status is not RosterStatus.DEAD:
                self._roster.set_status(name, RosterStatus.DEAD)

        record.is_alive = False
        if known:
            record.unknown_death = False
            record.death_ut = now
        else:
            record.unknown_death = True
            record.death_ut = UNSET_UT

        logger.info(
            "%s died at age %d (%s)",
            name, record.current_age, "known" if known else "discovered",
        )
        for cb in self._on_death:
            cb(name, record)
        return True
