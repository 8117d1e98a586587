"""Collaborator protocols consumed from the host, plus in-memory versions.

The host owns the roster, the freeze tracker, and the save tree. The
in-memory implementations here back the tests and the demos; a real host
adapts its own objects to the same protocols.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from typing import Iterable, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class RosterStatus(enum.Enum):
    AVAILABLE = "Available"
    ASSIGNED = "Assigned"
    DEAD = "Dead"


@dataclass(frozen=True)
class CrewMember:
    """One roster entry as reported by the host.

    Attributes:
        name: Stable identity; the ledger key.
        trait: Role, e.g. "Pilot". Some traits are never tracked.
        status: External roster status.
        applicant: Still in the hiring pool, not on the active roster.
    """

    name: str
    trait: str
    status: RosterStatus = RosterStatus.AVAILABLE
    applicant: bool = False

    def is_trackable(self, excluded_traits: Iterable[str]) -> bool:
        return not self.applicant and self.trait not in excluded_traits


@runtime_checkable
class ClockSource(Protocol):
    """Host simulation clock, seconds-equivalent, non-decreasing."""

    def now(self) -> float:
        """Current simulation time. Values <= 0 mean "not yet valid"."""
        ...


@runtime_checkable
class Roster(Protocol):
    """Host crew roster."""

    def members(self) -> Iterable[CrewMember]:
        """Enumerate every roster entry, applicants included."""
        ...

    def get(self, name: str) -> CrewMember | None:
        """Look up one entry; None when the host does not know the name."""
        ...

    def detach(self, name: str) -> None:
        """Remove an assigned member from its current placement."""
        ...

    def set_status(self, name: str, status: RosterStatus) -> None:
        """Change the externally visible status of a member."""
        ...


@runtime_checkable
class SuspensionSet(Protocol):
    """Read side of the host's freeze tracker.

    Implementations may raise when the providing subsystem is missing or
    not ready; callers go through ``guarded_is_suspended``.
    """

    def is_suspended(self, name: str) -> bool:
        ...


def guarded_is_suspended(suspension: SuspensionSet | None, name: str) -> bool:
    """Suspension lookup that degrades to "not suspended" on any failure."""
    if suspension is None:
        return False
    try:
        return bool(suspension.is_suspended(name))
    except Exception as exc:
        logger.debug("Suspension lookup for %s failed: %s", name, exc)
        return False


class MemoryRoster:
    """Dict-backed roster. Conforms to the Roster protocol."""

    def __init__(self, members: Iterable[CrewMember] = ()) -> None:
        self._members: dict[str, CrewMember] = {}
        self.detached: list[str] = []
        for member in members:
            self.add(member)

    def add(self, member: CrewMember) -> None:
        self._members[member.name] = member

    def remove(self, name: str) -> None:
        self._members.pop(name, None)

    def update(self, name: str, **changes: object) -> CrewMember:
        member = replace(self._members[name], **changes)
        self._members[name] = member
        return member

    def members(self) -> list[CrewMember]:
        return list(self._members.values())

    def get(self, name: str) -> CrewMember | None:
        return self._members.get(name)

    def detach(self, name: str) -> None:
        member = self._members.get(name)
        if member is not None and member.status is RosterStatus.ASSIGNED:
            self._members[name] = replace(member, status=RosterStatus.AVAILABLE)
            self.detached.append(name)

    def set_status(self, name: str, status: RosterStatus) -> None:
        member = self._members.get(name)
        if member is not None:
            self._members[name] = replace(member, status=status)

    def __len__(self) -> int:
        return len(self._members)


class MemorySuspensionSet:
    """Set-backed freeze tracker. Conforms to the SuspensionSet protocol.

    Setting ``available = False`` makes every lookup raise, the way a
    missing freeze subsystem would.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._names: set[str] = set(names)
        self.available = True

    def freeze(self, name: str) -> None:
        self._names.add(name)

    def thaw(self, name: str) -> None:
        self._names.discard(name)

    def is_suspended(self, name: str) -> bool:
        if not self.available:
            raise RuntimeError("freeze tracker unavailable")
        return name in self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names
