"""Persistence codec for the ledger and aging settings.

The host hands over a hierarchical tree of string values and named child
nodes. Each record becomes one ``CREW`` node under ``CREW_AGE_DATA``;
the ranges and lock flag sit on the root. ``TreeNode`` is an in-memory
tree with the same surface, convertible to and from JSON-ready dicts.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from tick_aging.calendar import DAYS_PER_YEAR, calendar_year
from tick_aging.config import AgingRanges, AgingSettings
from tick_aging.ledger import Ledger
from tick_aging.records import UNSET_UT, MortalityRecord
from tick_aging.types import RecordDecodeError

logger = logging.getLogger(__name__)

DATA_NODE = "CREW_AGE_DATA"
RECORD_NODE = "CREW"

T = TypeVar("T")


@runtime_checkable
class TreeStore(Protocol):
    """Hierarchical key/value store the host persists saves with."""

    def add_value(self, key: str, value: Any) -> None: ...

    def get_value(self, key: str) -> str | None: ...

    def has_value(self, key: str) -> bool: ...

    def remove_values(self, key: str) -> None: ...

    def add_node(self, name: str) -> TreeStore: ...

    def get_node(self, name: str) -> TreeStore | None: ...

    def get_nodes(self, name: str) -> list[TreeStore]: ...

    def has_node(self, name: str) -> bool: ...

    def remove_nodes(self, name: str) -> None: ...


class TreeNode:
    """In-memory TreeStore. Values are stored as strings, in order."""

    def __init__(self, name: str = "root") -> None:
        self.name = name
        self._values: list[tuple[str, str]] = []
        self._nodes: list[TreeNode] = []

    def add_value(self, key: str, value: Any) -> None:
        self._values.append((key, _to_text(value)))

    def get_value(self, key: str) -> str | None:
        for k, v in self._values:
            if k == key:
                return v
        return None

    def has_value(self, key: str) -> bool:
        return any(k == key for k, _ in self._values)

    def remove_values(self, key: str) -> None:
        self._values = [(k, v) for k, v in self._values if k != key]

    def add_node(self, name: str) -> TreeNode:
        node = TreeNode(name)
        self._nodes.append(node)
        return node

    def get_node(self, name: str) -> TreeNode | None:
        for node in self._nodes:
            if node.name == name:
                return node
        return None

    def get_nodes(self, name: str) -> list[TreeNode]:
        return [node for node in self._nodes if node.name == name]

    def has_node(self, name: str) -> bool:
        return self.get_node(name) is not None

    def remove_nodes(self, name: str) -> None:
        self._nodes = [node for node in self._nodes if node.name != name]

    def clear(self) -> None:
        self._values.clear()
        self._nodes.clear()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "values": [[k, v] for k, v in self._values],
            "nodes": [node.to_dict() for node in self._nodes],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TreeNode:
        node = cls(data.get("name", "root"))
        for key, value in data.get("values", []):
            node._values.append((key, str(value)))
        for child in data.get("nodes", []):
            node._nodes.append(cls.from_dict(child))
        return node

    def __repr__(self) -> str:
        return f"TreeNode({self.name!r}, values={len(self._values)}, nodes={len(self._nodes)})"


def _to_text(value: Any) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


# --- Field parsers ---

def _parse_int(text: str) -> int:
    return int(text.strip())


def _parse_birthday(text: str) -> int:
    day = _parse_int(text)
    if not 1 <= day <= DAYS_PER_YEAR:
        raise ValueError(f"day of year out of range: {day}")
    return day


def _parse_float(text: str) -> float:
    return float(text.strip())


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _required(node: TreeStore, name: str | None, key: str, parse: Callable[[str], T]) -> T:
    raw = node.get_value(key)
    if raw is None:
        raise RecordDecodeError(name, f"missing {key}")
    try:
        return parse(raw)
    except ValueError as exc:
        raise RecordDecodeError(name, f"bad {key} {raw!r}") from exc


def _optional(node: TreeStore, key: str, parse: Callable[[str], T], default: T) -> T:
    raw = node.get_value(key)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError:
        logger.debug("Defaulting unparsable %s %r", key, raw)
        return default


# --- Records ---

def encode_record(node: TreeStore, name: str, record: MortalityRecord) -> None:
    node.add_value("name", name)
    node.add_value("currentAge", record.current_age)
    node.add_value("deathAge", record.death_age)
    node.add_value("isAlive", record.is_alive)
    node.add_value("birthday", record.birthday)
    node.add_value("yearAdded", record.year_added)
    node.add_value("birthYear", record.birth_year)
    node.add_value("blessed", record.blessed)
    node.add_value("immortal", record.immortal)
    node.add_value("deathUT", float(record.death_ut))
    node.add_value("unknownDeath", record.unknown_death)
    node.add_value("unknownBirth", record.unknown_birth)


def decode_record(node: TreeStore, now: float) -> tuple[str, MortalityRecord]:
    """Decode one ``CREW`` node. Raises RecordDecodeError on bad mandatory fields."""
    name = node.get_value("name")
    if not name:
        raise RecordDecodeError(None, "missing name")
    current_age = _required(node, name, "currentAge", _parse_int)
    year_added = _optional(node, "yearAdded", _parse_int, calendar_year(now))
    record = MortalityRecord(
        current_age=current_age,
        death_age=_required(node, name, "deathAge", _parse_int),
        is_alive=_required(node, name, "isAlive", _parse_bool),
        birthday=_optional(node, "birthday", _parse_birthday, 1),
        year_added=year_added,
        birth_year=_optional(node, "birthYear", _parse_int, year_added - current_age),
        blessed=_optional(node, "blessed", _parse_bool, False),
        immortal=_optional(node, "immortal", _parse_bool, False),
        death_ut=_optional(node, "deathUT", _parse_float, UNSET_UT),
        unknown_death=_optional(node, "unknownDeath", _parse_bool, False),
        unknown_birth=_optional(node, "unknownBirth", _parse_bool, False),
    )
    return name, record


# --- Whole state ---

def save_state(tree: TreeStore, ledger: Ledger, settings: AgingSettings) -> None:
    """Write the ledger and settings into *tree*, replacing earlier data."""
    tree.remove_nodes(DATA_NODE)
    data = tree.add_node(DATA_NODE)
    for name, record in ledger.items():
        encode_record(data.add_node(RECORD_NODE), name, record)
    ranges = settings.ranges
    for key, value in (
        ("startAgeMin", ranges.start_age_min),
        ("startAgeMax", ranges.start_age_max),
        ("deathAgeMin", ranges.death_age_min),
        ("deathAgeMax", ranges.death_age_max),
        ("settingsLocked", settings.locked),
    ):
        tree.remove_values(key)
        tree.add_value(key, value)
    logger.debug("Saved %d crew record(s)", len(ledger))


def load_state(tree: TreeStore, now: float) -> tuple[Ledger, AgingSettings]:
    """Read a ledger and settings from *tree*.

    *now* supplies the default ``yearAdded`` for entries written before
    that field existed. Entries that fail to decode are skipped.
    """
    ledger = Ledger()
    data = tree.get_node(DATA_NODE)
    if data is not None:
        for node in data.get_nodes(RECORD_NODE):
            try:
                name, record = decode_record(node, now)
            except RecordDecodeError as exc:
                logger.warning("Skipping saved crew entry %s: %s", exc.name or "?", exc)
                continue
            if ledger.has(name):
                logger.warning("Skipping duplicate saved crew entry %s", name)
                continue
            ledger.create(name, record)

    defaults = AgingRanges()
    ranges = AgingRanges.clamped(
        _optional(tree, "startAgeMin", _parse_int, defaults.start_age_min),
        _optional(tree, "startAgeMax", _parse_int, defaults.start_age_max),
        _optional(tree, "deathAgeMin", _parse_int, defaults.death_age_min),
        _optional(tree, "deathAgeMax", _parse_int, defaults.death_age_max),
    )
    locked = _optional(tree, "settingsLocked", _parse_bool, False)
    logger.debug("Loaded %d crew record(s)", len(ledger))
    return ledger, AgingSettings(ranges, locked=locked)
