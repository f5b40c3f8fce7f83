"""
Record store adapter.

The engines talk to persistence only through ``RecordStore``. Every method
touches a single record and is atomic on its own: ``push`` and ``pull`` are
safe under concurrent use on the same record, while a read followed by
``set_fields`` is not (callers accept that race for full-array rewrites).
"""

from __future__ import annotations

import copy
import dataclasses
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from .models import Board, BoardList, Card, Record
from .utils import now_utc

BOARDS = "boards"
LISTS = "lists"
CARDS = "cards"

RECORD_TYPES: Dict[str, Type[Any]] = {
    BOARDS: Board,
    LISTS: BoardList,
    CARDS: Card,
}


class RecordStore(ABC):
    """Document store addressed by collection and id."""

    @abstractmethod
    def get(self, collection: str, record_id: str) -> Optional[Record]:
        ...

    @abstractmethod
    def find(self, collection: str, field: str, value: Any) -> List[Record]:
        """Return records whose ``field`` equals ``value``, oldest first."""

    @abstractmethod
    def insert(self, collection: str, record: Record) -> Record:
        ...

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> bool:
        ...

    @abstractmethod
    def set_fields(self, collection: str, record_id: str, **values: Any) -> Optional[Record]:
        """Overwrite the given fields; returns the updated record or None if absent."""

    @abstractmethod
    def push(self, collection: str, record_id: str, field: str, value: Any) -> Optional[Record]:
        """Append ``value`` to the array ``field``."""

    @abstractmethod
    def pull(self, collection: str, record_id: str, field: str, value: Any) -> Optional[Record]:
        """Remove every element equal to ``value`` from the array ``field``."""


class MemoryStore(RecordStore):
    """In-memory store for boards, lists and cards.

    Records are copied on the way in and out so no caller ever holds a
    reference into stored state.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Dict[str, Dict[str, Record]] = {name: {} for name in RECORD_TYPES}

    def _collection(self, collection: str) -> Dict[str, Record]:
        try:
            return self._data[collection]
        except KeyError:
            raise ValueError(f"unknown collection {collection!r}") from None

    def get(self, collection: str, record_id: str) -> Optional[Record]:
        with self._lock:
            record = self._collection(collection).get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def find(self, collection: str, field: str, value: Any) -> List[Record]:
        with self._lock:
            found = [
                copy.deepcopy(r)
                for r in self._collection(collection).values()
                if getattr(r, field) == value
            ]
        # stable sort keeps insertion order for equal timestamps
        return sorted(found, key=lambda r: r.created_at)

    def insert(self, collection: str, record: Record) -> Record:
        with self._lock:
            records = self._collection(collection)
            if record.id in records:
                raise ValueError(f"duplicate id {record.id} in {collection}")
            records[record.id] = copy.deepcopy(record)
        return copy.deepcopy(record)

    def delete(self, collection: str, record_id: str) -> bool:
        with self._lock:
            return self._collection(collection).pop(record_id, None) is not None

    def _update(self, collection: str, record_id: str, changes: Dict[str, Any]) -> Optional[Record]:
        records = self._collection(collection)
        record = records.get(record_id)
        if record is None:
            return None
        updated = dataclasses.replace(record, updated_at=now_utc(), **changes)
        records[record_id] = updated
        return copy.deepcopy(updated)

    def set_fields(self, collection: str, record_id: str, **values: Any) -> Optional[Record]:
        with self._lock:
            return self._update(collection, record_id, copy.deepcopy(values))

    def push(self, collection: str, record_id: str, field: str, value: Any) -> Optional[Record]:
        with self._lock:
            record = self._collection(collection).get(record_id)
            if record is None:
                return None
            return self._update(collection, record_id, {field: getattr(record, field) + [value]})

    def pull(self, collection: str, record_id: str, field: str, value: Any) -> Optional[Record]:
        with self._lock:
            record = self._collection(collection).get(record_id)
            if record is None:
                return None
            kept = [v for v in getattr(record, field) if v != value]
            return self._update(collection, record_id, {field: kept})
