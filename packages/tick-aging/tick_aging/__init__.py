"""tick-aging - Crew aging and mortality on an external simulation clock."""
from __future__ import annotations

from tick_aging.accounting import advance_ages, make_aging_system, resolve_thresholds
from tick_aging.adjudicator import DeathAdjudicator
from tick_aging.calendar import (
    DAY_SECONDS,
    DAYS_PER_YEAR,
    YEAR_SECONDS,
    calendar_year,
    count_birthdays_between,
    death_day,
    year_index_of,
)
from tick_aging.clock import ManualClock, TickClock
from tick_aging.config import AgingConfig, AgingRanges, AgingSettings
from tick_aging.engine import AgingEngine
from tick_aging.host import (
    ClockSource,
    CrewMember,
    MemoryRoster,
    MemorySuspensionSet,
    Roster,
    RosterStatus,
    SuspensionSet,
)
from tick_aging.ledger import Ledger
from tick_aging.overrides import CrewOverrides
from tick_aging.persistence import TreeNode, TreeStore, load_state, save_state
from tick_aging.reconciler import make_reconcile_system, reanimate
from tick_aging.records import UNKNOWN, UNSET_UT, DeathTime, KnownAt, MortalityRecord, Unknown
from tick_aging.types import AgingError, RecordDecodeError, TickContext

__all__ = [
    "AgingEngine",
    "Ledger",
    "MortalityRecord",
    "DeathTime",
    "KnownAt",
    "Unknown",
    "UNKNOWN",
    "UNSET_UT",
    "DeathAdjudicator",
    "CrewOverrides",
    "AgingConfig",
    "AgingRanges",
    "AgingSettings",
    "TickClock",
    "ManualClock",
    "TickContext",
    "ClockSource",
    "Roster",
    "SuspensionSet",
    "CrewMember",
    "RosterStatus",
    "MemoryRoster",
    "MemorySuspensionSet",
    "TreeNode",
    "TreeStore",
    "save_state",
    "load_state",
    "advance_ages",
    "resolve_thresholds",
    "make_aging_system",
    "make_reconcile_system",
    "reanimate",
    "count_birthdays_between",
    "year_index_of",
    "calendar_year",
    "death_day",
    "YEAR_SECONDS",
    "DAY_SECONDS",
    "DAYS_PER_YEAR",
    "AgingError",
    "RecordDecodeError",
]
