"""Shared fixtures for tick-aging tests."""
from __future__ import annotations

import random

import pytest

from tick_aging.adjudicator import DeathAdjudicator
from tick_aging.host import CrewMember, MemoryRoster, MemorySuspensionSet, RosterStatus
from tick_aging.ledger import Ledger
from tick_aging.records import MortalityRecord


class ScriptedRandom(random.Random):
    """Deterministic sampler pinned to the low or high end of every range.

    ``bless`` controls the one-in-fifty blessing roll.
    """

    def __init__(self, pick: str = "low", bless: bool = False) -> None:
        super().__init__(0)
        self.pick = pick
        self.bless = bless
        self.ranges: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.ranges.append((a, b))
        return a if self.pick == "low" else b

    def randrange(self, start, stop=None, step=1):
        return 0 if self.bless else 1


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def ledger():
    return Ledger()


@pytest.fixture
def roster():
    return MemoryRoster([
        CrewMember("Jebediah", "Pilot"),
        CrewMember("Bill", "Engineer", RosterStatus.ASSIGNED),
        CrewMember("Bob", "Scientist"),
    ])


@pytest.fixture
def freezer():
    return MemorySuspensionSet()


@pytest.fixture
def adjudicator(ledger, roster, freezer):
    return DeathAdjudicator(ledger, roster, freezer)


@pytest.fixture
def make_record():
    def _make(**fields) -> MortalityRecord:
        base = dict(
            current_age=30,
            death_age=300,
            is_alive=True,
            birthday=100,
            year_added=1,
            birth_year=-29,
        )
        base.update(fields)
        return MortalityRecord(**base)
    return _make
