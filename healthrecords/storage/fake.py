from collections.abc import Sequence
from typing import Generic, TypeVar

from healthrecords.domain.models import Record

RecordT = TypeVar("RecordT", bound=Record)


class FakeRecordRepository(Generic[RecordT]):
    """In-memory test double for the RecordRepositoryProtocol protocol.

    Pre-load ``records`` to control what ``load_all`` returns.  Set
    ``load_error`` or ``save_error`` to make the corresponding method raise.

    After calls, inspect ``saves`` to see every collection that was passed to
    ``save_all``, in order.
    """

    def __init__(self, records: Sequence[RecordT] = ()) -> None:
        self.records: list[RecordT] = list(records)
        self.saves: list[list[RecordT]] = []

        self.load_error: Exception | None = None
        self.save_error: Exception | None = None

    def load_all(self) -> list[RecordT]:
        if self.load_error:
            raise self.load_error
        return list(self.records)

    def save_all(self, records: Sequence[RecordT]) -> None:
        if self.save_error:
            raise self.save_error
        self.records = list(records)
        self.saves.append(list(records))
