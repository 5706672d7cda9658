"""
Bounded in-memory record store keyed by integer code.

Records keep insertion order. Deleting a record shifts every later record one
slot to the left, so the occupied entries stay dense and in order.

Expected outcomes (store full, code not found) are returned as StoreError
values. Misuse (duplicate codes, writing identity fields) raises ValueError.
"""

from enum import Enum
from typing import Any, FrozenSet, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from crm.core.logging import get_logger

logger = get_logger("crm.records")

T = TypeVar("T")


class StoreError(str, Enum):
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    NOT_FOUND = "NOT_FOUND"


class RecordStore(Generic[T]):
    """
    Fixed-capacity, insertion-ordered collection of records.

    Every record must expose an integer ``code`` attribute. ``code`` plus any
    names passed as ``immutable_fields`` can never be changed through update().
    """

    def __init__(
        self,
        capacity: int,
        name: str = "records",
        immutable_fields: Iterable[str] = (),
    ) -> None:
        if capacity < 1:
            raise ValueError(f"Store capacity must be positive, got {capacity}")
        self.name = name
        self._capacity = capacity
        self._entries: List[T] = []
        self._immutable: FrozenSet[str] = frozenset(immutable_fields) | {"code"}

    # -------- Size --------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        return len(self._entries)

    @property
    def is_full(self) -> bool:
        return self.count >= self._capacity

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[T]:
        return iter(self.list())

    # -------- Lookup --------

    def find_index(self, code: int) -> Optional[int]:
        """Linear scan for the first entry with this code."""
        for index, record in enumerate(self._entries):
            if record.code == code:
                return index
        return None

    def find(self, code: int) -> Optional[T]:
        index = self.find_index(code)
        return None if index is None else self._entries[index]

    def contains(self, code: int) -> bool:
        return self.find_index(code) is not None

    def list(self) -> Tuple[T, ...]:
        """Snapshot of the occupied entries in current order."""
        return tuple(self._entries)

    # -------- Mutations --------

    def add(self, record: T) -> Optional[StoreError]:
        """
        Append a record.

        Returns StoreError.CAPACITY_EXCEEDED (store unchanged) when full.
        Raises ValueError if the record's code is already stored.
        """
        if self.is_full:
            logger.info("%s: rejected %s, capacity %d reached", self.name, record.code, self._capacity)
            return StoreError.CAPACITY_EXCEEDED
        if self.contains(record.code):
            raise ValueError(f"{self.name}: code {record.code} is already in use")

        self._entries.append(record)
        logger.info("%s: added %s (%d/%d)", self.name, record.code, self.count, self._capacity)
        return None

    def update(self, code: int, **fields: Any) -> Optional[StoreError]:
        """
        Write final field values onto the record with this code.

        All fields are checked before any is written, so a rejected update
        leaves the record untouched.
        """
        locked = self._immutable.intersection(fields)
        if locked:
            raise ValueError(f"{self.name}: cannot update identity field(s) {sorted(locked)}")

        record = self.find(code)
        if record is None:
            logger.info("%s: update of %s skipped, not found", self.name, code)
            return StoreError.NOT_FOUND

        unknown = [name for name in fields if not _writable(record, name)]
        if unknown:
            raise ValueError(f"{self.name}: unknown or read-only field(s) {sorted(unknown)}")

        for name, value in fields.items():
            setattr(record, name, value)
        logger.info("%s: updated %s (%s)", self.name, code, ", ".join(sorted(fields)) or "no fields")
        return None

    def delete(self, code: int) -> Optional[StoreError]:
        """Remove the record with this code, shifting later records left."""
        index = self.find_index(code)
        if index is None:
            logger.info("%s: delete of %s skipped, not found", self.name, code)
            return StoreError.NOT_FOUND

        last = self.count - 1
        for i in range(index, last):
            self._entries[i] = self._entries[i + 1]
        del self._entries[last]

        logger.info("%s: deleted %s (%d/%d)", self.name, code, self.count, self._capacity)
        return None


def _writable(record: Any, name: str) -> bool:
    """A plain attribute of the record, not a method or computed property."""
    if isinstance(getattr(type(record), name, None), property):
        return False
    return name in getattr(record, "__dict__", {})
