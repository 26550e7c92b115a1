import datetime as dt
import threading
from collections.abc import Callable
from typing import ClassVar

from loguru import logger

from healthrecords.records.ports import AbstractRecordService, RecordRepositoryProtocol, RecordT
from healthrecords.storage.ids import next_id

Clock = Callable[[], dt.date]


class RecordService(AbstractRecordService[RecordT]):
    """Authoritative in-memory collection for one entity kind.

    The collection is loaded once at construction. Every mutation builds the
    new collection, overwrites the backing store with it, and only then
    publishes it, so a failed write leaves memory untouched. Mutations are
    serialised by a per-service lock.
    """

    kind: ClassVar[str]
    prefix: ClassVar[str]
    case_insensitive_ids: ClassVar[bool] = False

    def __init__(
        self,
        repository: RecordRepositoryProtocol[RecordT],
        clock: Clock = dt.date.today,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._lock = threading.RLock()
        self._records: list[RecordT] = list(repository.load_all())
        logger.info("Loaded {} {} record(s)", len(self._records), self.kind.lower())

    @property
    def repository(self) -> RecordRepositoryProtocol[RecordT]:
        return self._repository

    def list_all(self) -> tuple[RecordT, ...]:
        return tuple(self._records)

    def get(self, record_id: str) -> RecordT | None:
        index = self._index_of(record_id)
        return None if index is None else self._records[index]

    def delete(self, record_id: str) -> bool:
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                logger.warning("{} not found for deletion: id={}", self.kind, record_id)
                return False
            self._commit(self._records[:index] + self._records[index + 1 :])

        logger.info("{} deleted: id={}", self.kind, record_id)
        return True

    def _insert(self, build: Callable[[str], RecordT]) -> RecordT:
        """Append the record ``build`` makes from the next free identifier."""
        with self._lock:
            new_id = next_id(self.prefix, (record.record_id for record in self._records))
            record = build(new_id)
            self._commit([*self._records, record])

        logger.info("{} created: id={}", self.kind, record.record_id)
        return record

    def _update(self, record_id: str, **changes: str) -> RecordT | None:
        """Replace the matching record with a copy carrying ``changes``."""
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                return None
            updated = self._records[index].model_copy(update=changes)
            records = list(self._records)
            records[index] = updated
            self._commit(records)

        return updated

    def _commit(self, records: list[RecordT]) -> None:
        self._repository.save_all(records)
        self._records = records

    def _index_of(self, record_id: str) -> int | None:
        wanted = record_id.lower() if self.case_insensitive_ids else record_id
        for index, record in enumerate(self._records):
            current = record.record_id.lower() if self.case_insensitive_ids else record.record_id
            if current == wanted:
                return index
        return None

    def _today(self) -> str:
        return self._clock().isoformat()
