"""Ledger - the authoritative name -> MortalityRecord store."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Iterator

from tick_aging.records import MortalityRecord

Predicate = Callable[[str, MortalityRecord], bool]
SortKey = Callable[[str, MortalityRecord], Any]


class Ledger:
    def __init__(self) -> None:
        self._records: dict[str, MortalityRecord] = {}

    def create(self, name: str, record: MortalityRecord) -> MortalityRecord:
        if name in self._records:
            raise KeyError(f"Record for {name!r} already exists")
        self._records[name] = record
        return record

    def get(self, name: str) -> MortalityRecord | None:
        return self._records.get(name)

    def require(self, name: str) -> MortalityRecord:
        record = self._records.get(name)
        if record is None:
            raise KeyError(f"No record for {name!r}")
        return record

    def has(self, name: str) -> bool:
        return name in self._records

    def remove(self, name: str) -> MortalityRecord | None:
        return self._records.pop(name, None)

    def clear(self) -> None:
        self._records.clear()

    def names(self) -> list[str]:
        return list(self._records)

    def items(self) -> list[tuple[str, MortalityRecord]]:
        """Live (name, record) pairs, safe to iterate while removing."""
        return list(self._records.items())

    def records(
        self,
        where: Predicate | None = None,
        order_by: SortKey | None = None,
        reverse: bool = False,
    ) -> list[tuple[str, MortalityRecord]]:
        """Copies of matching records for read-only consumers.

        *where* and *order_by* receive ``(name, record)``. Mutating the
        returned records does not touch the ledger.
        """
        result = [
            (name, dataclasses.replace(rec))
            for name, rec in self._records.items()
            if where is None or where(name, rec)
        ]
        if order_by is not None:
            result.sort(key=lambda pair: order_by(pair[0], pair[1]), reverse=reverse)
        return result

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._records))

    def __len__(self) -> int:
        return len(self._records)
