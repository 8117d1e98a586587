"""Read-side helpers for presentation layers: filters, sort orders, labels.

Everything here takes ``(name, record)`` pairs and never mutates a record,
so it plugs straight into ``Ledger.records(where=..., order_by=...)``.
"""
from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Collection

from tick_aging.calendar import death_day
from tick_aging.records import KnownAt

if TYPE_CHECKING:
    from tick_aging.host import Roster
    from tick_aging.ledger import Predicate, SortKey
    from tick_aging.records import MortalityRecord

CRITICAL_YEARS = 4
WARNING_YEARS = 10


class SortMode(enum.Enum):
    OLDEST_FIRST = "Oldest First"
    YOUNGEST_FIRST = "Youngest First"
    A_TO_Z = "A to Z"
    Z_TO_A = "Z to A"

    def next(self) -> SortMode:
        modes = list(SortMode)
        return modes[(modes.index(self) + 1) % len(modes)]


def _oldest_key(name: str, rec: MortalityRecord) -> tuple[Any, ...]:
    # Births before calendar start count days backwards.
    day = -rec.birthday if rec.birth_year <= 0 else rec.birthday
    return (-rec.current_age, rec.birth_year, day, name)


def _youngest_key(name: str, rec: MortalityRecord) -> tuple[Any, ...]:
    day = rec.birthday if rec.birth_year <= 0 else -rec.birthday
    return (rec.current_age, -rec.birth_year, day, name)


def sort_key(mode: SortMode) -> tuple[SortKey, bool]:
    """Return ``(key, reverse)`` for ``Ledger.records`` in *mode*."""
    if mode is SortMode.OLDEST_FIRST:
        return _oldest_key, False
    if mode is SortMode.YOUNGEST_FIRST:
        return _youngest_key, False
    if mode is SortMode.A_TO_Z:
        return (lambda name, rec: name), False
    return (lambda name, rec: name), True


# --- Filters ---

def alive_filter(show_alive: bool) -> Predicate:
    return lambda name, rec: rec.is_alive == show_alive


def search_filter(text: str) -> Predicate:
    needle = text.strip().lower()
    return lambda name, rec: needle in name.lower()


def frozen_filter(suspended: Collection[str]) -> Predicate:
    return lambda name, rec: name in suspended


def trait_filter(roster: Roster, trait: str) -> Predicate:
    wanted = trait.lower()

    def matches(name: str, rec: MortalityRecord) -> bool:
        member = roster.get(name)
        return member is not None and member.trait.lower() == wanted

    return matches


def all_of(*predicates: Predicate) -> Predicate:
    return lambda name, rec: all(p(name, rec) for p in predicates)


# --- Labels ---

def birth_label(record: MortalityRecord) -> str:
    if not record.is_alive and record.unknown_birth:
        return "UNKNOWN"
    if record.birth_year <= 0:
        return f"Y{1 - record.birth_year} B.S.C. DAY {record.birthday}"
    return f"Y{record.birth_year}, DAY {record.birthday}"


def death_label(record: MortalityRecord) -> str:
    when = record.death_time
    if not isinstance(when, KnownAt):
        return "UNKNOWN" if when is not None else ""
    year, day = death_day(when.ut)
    return f"Y{year}, DAY{day}"


def warning_level(record: MortalityRecord) -> str | None:
    """Urgency of a living mortal's remaining lifespan, or None."""
    if not record.is_alive or record.immortal:
        return None
    if record.years_left <= CRITICAL_YEARS:
        return "critical"
    if record.years_left <= WARNING_YEARS:
        return "warning"
    return None
