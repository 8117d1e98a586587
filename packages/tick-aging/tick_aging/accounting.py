"""Time accounting - age every living record by the birthdays elapsed."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Collection

from tick_aging.calendar import count_birthdays_between

if TYPE_CHECKING:
    from tick_aging.adjudicator import DeathAdjudicator
    from tick_aging.ledger import Ledger
    from tick_aging.types import System, TickContext

logger = logging.getLogger(__name__)


def advance_ages(
    ledger: Ledger,
    adjudicator: DeathAdjudicator,
    last_ut: float,
    now: float,
    suspended: Collection[str] = frozenset(),
) -> list[str]:
    """Age every living, unfrozen record over ``(last_ut, now]``.

    Records at or past their death age afterwards are adjudicated dead
    with a known time of *now*, unless immortal. Returns the names that
    died.
    """
    if now > last_ut:
        for name, record in ledger.items():
            if not record.is_alive or name in suspended:
                continue
            birthdays = count_birthdays_between(record.birthday, last_ut, now)
            if birthdays:
                record.current_age += birthdays
                logger.debug("%s aged %d year(s) to %d", name, birthdays, record.current_age)
    return resolve_thresholds(ledger, adjudicator, now, suspended)


def resolve_thresholds(
    ledger: Ledger,
    adjudicator: DeathAdjudicator,
    now: float,
    suspended: Collection[str] = frozenset(),
) -> list[str]:
    """Adjudicate every living mortal at or past its death age, at *now*."""
    died: list[str] = []
    for name, record in ledger.items():
        if not record.is_alive or record.immortal or name in suspended:
            continue
        if record.current_age >= record.death_age:
            if adjudicator.mark_dead(name, known=True, now=now, suspended=suspended):
                died.append(name)
    return died


def make_aging_system(adjudicator: DeathAdjudicator) -> System:
    """Return a system that runs ``advance_ages`` over the tick's interval.

    The first tick has no previous time, so nothing ages, but records
    already at their death age are still resolved.
    """

    def aging_system(ledger: Ledger, ctx: TickContext) -> None:
        if ctx.last_ut is None:
            resolve_thresholds(ledger, adjudicator, ctx.now, ctx.suspended)
            return
        advance_ages(ledger, adjudicator, ctx.last_ut, ctx.now, ctx.suspended)

    return aging_system
