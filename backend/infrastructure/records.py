"""Infrastructure layer for record persistence."""
from __future__ import annotations

from typing import Callable, Generic, Iterable, Protocol, TypeVar

from backend.core.schema import RecordModel

ModelT = TypeVar("ModelT", bound=RecordModel)


class RecordRepository(Protocol[ModelT]):
    """Persistence contract for one record collection."""

    def list(self) -> list[ModelT]: ...

    def get(self, record_id: str) -> ModelT | None: ...

    def add(self, record: ModelT) -> None: ...

    def replace(self, record: ModelT) -> bool: ...

    def remove(self, record_id: str) -> bool: ...

    def reset(self) -> None: ...


class InMemoryRecordRepository(Generic[ModelT]):
    """Process-local list of records kept in insertion order.

    There is no locking: concurrent writers on the same id resolve as last
    write wins.  ``reset`` restores the seed records.
    """

    def __init__(self, seed: Callable[[], Iterable[ModelT]] | None = None) -> None:
        self._seed = seed
        self._records: list[ModelT] = []
        self.reset()

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------
    def _index_of(self, record_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return -1

    # ------------------------------------------------------------------
    # CRUD operations
    # ------------------------------------------------------------------
    def list(self) -> list[ModelT]:
        return list(self._records)

    def get(self, record_id: str) -> ModelT | None:
        index = self._index_of(record_id)
        return self._records[index] if index >= 0 else None

    def add(self, record: ModelT) -> None:
        self._records.append(record)

    def replace(self, record: ModelT) -> bool:
        index = self._index_of(record.id)
        if index < 0:
            return False
        self._records[index] = record
        return True

    def remove(self, record_id: str) -> bool:
        index = self._index_of(record_id)
        if index < 0:
            return False
        del self._records[index]
        return True

    def reset(self) -> None:
        self._records = list(self._seed()) if self._seed else []
