"""Simulated host: a clock, a roster, a freeze tracker, and random incidents."""
from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass, field
from pathlib import Path

from tick_aging import (
    AgingEngine,
    CrewMember,
    ManualClock,
    MemoryRoster,
    MemorySuspensionSet,
    MortalityRecord,
    RosterStatus,
    TreeNode,
)
from tick_aging.calendar import DAY_SECONDS

logger = logging.getLogger(__name__)

NAMES = ["Jebediah", "Bill", "Bob", "Valentina", "Gene", "Wernher", "Lodan",
         "Mitchell", "Ludwig", "Hanbus", "Sigrid", "Agasel", "Tedlong", "Samantha"]
TRAITS = ["Pilot", "Engineer", "Scientist"]
APPLICANTS = ["Kirrim", "Dudster", "Rodbro", "Shelny", "Camwise", "Erdon"]

# Per simulated day.
MISSION_ODDS = 0.02
RETURN_ODDS = 0.05
ACCIDENT_ODDS = 0.0005
FREEZE_ODDS = 0.003
THAW_ODDS = 0.01
HIRE_ODDS = 0.004
TOURIST_ODDS = 0.002


@dataclass
class HostState:
    """Everything the demo owns besides the aging engine itself."""
    clock: ManualClock
    roster: MemoryRoster
    freezer: MemorySuspensionSet
    engine: AgingEngine
    rng: random.Random
    events: list[tuple[str, str]] = field(default_factory=list)
    applicants: list[str] = field(default_factory=list)
    tourists: int = 0
    day_budget: float = 0.0


def build_host(seed: int, crew: int, start_ut: float) -> HostState:
    rng = random.Random(seed)
    clock = ManualClock(start_ut)
    roster = MemoryRoster(
        CrewMember(name, rng.choice(TRAITS)) for name in NAMES[:crew]
    )
    for name in APPLICANTS:
        roster.add(CrewMember(name, rng.choice(TRAITS), applicant=True))
    freezer = MemorySuspensionSet()
    engine = AgingEngine(clock, roster, freezer, seed=seed)
    state = HostState(clock, roster, freezer, engine, rng, applicants=list(APPLICANTS))

    def _on_death(name: str, record: MortalityRecord) -> None:
        how = "found dead" if record.unknown_death else "died"
        state.events.append((f"{name} {how} at {record.current_age}", "death"))

    engine.on_death(_on_death)
    return state


def advance(state: HostState, seconds: float) -> None:
    """Move the host clock forward and roll incidents for each whole day."""
    state.clock.advance(seconds)
    state.day_budget += seconds / DAY_SECONDS
    while state.day_budget >= 1.0:
        state.day_budget -= 1.0
        _roll_day(state)
    state.engine.on_tick()


def _roll_day(state: HostState) -> None:
    rng = state.rng
    for member in state.roster.members():
        if member.applicant or member.status is RosterStatus.DEAD:
            continue
        frozen = member.name in state.freezer
        if frozen:
            if rng.random() < THAW_ODDS:
                state.freezer.thaw(member.name)
                state.events.append((f"{member.name} thawed", "thaw"))
            continue
        if member.status is RosterStatus.AVAILABLE:
            if rng.random() < MISSION_ODDS:
                state.roster.set_status(member.name, RosterStatus.ASSIGNED)
            elif rng.random() < FREEZE_ODDS:
                state.freezer.freeze(member.name)
                state.events.append((f"{member.name} frozen", "freeze"))
        elif rng.random() < RETURN_ODDS:
            state.roster.set_status(member.name, RosterStatus.AVAILABLE)
        elif rng.random() < ACCIDENT_ODDS:
            _accident(state, member)

    if state.applicants and rng.random() < HIRE_ODDS:
        name = state.applicants.pop(0)
        state.roster.update(name, applicant=False)
        state.events.append((f"Hired {name}", "hire"))
    if rng.random() < TOURIST_ODDS:
        state.tourists += 1
        state.roster.add(CrewMember(f"Tourist {state.tourists}", "Tourist"))


def _accident(state: HostState, member: CrewMember) -> None:
    previous = member.status
    state.roster.set_status(member.name, RosterStatus.DEAD)
    state.engine.on_external_status_changed(member.name, previous, RosterStatus.DEAD)


def save(state: HostState, path: Path) -> None:
    tree = TreeNode()
    state.engine.save(tree)
    path.write_text(json.dumps(tree.to_dict(), indent=2))
    logger.info("Saved aging data to %s", path)


def load(state: HostState, path: Path) -> bool:
    if not path.exists():
        return False
    tree = TreeNode.from_dict(json.loads(path.read_text()))
    state.engine.load(tree)
    return True
