from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, Protocol, TypeVar

from healthrecords.domain.models import Record

RecordT = TypeVar("RecordT", bound=Record)


class RecordRepositoryProtocol(Protocol[RecordT]):
    """Low-level interface for loading and overwriting one kind's records."""

    def load_all(self) -> list[RecordT]:
        """Load every stored record in storage order."""
        ...

    def save_all(self, records: Sequence[RecordT]) -> None:
        """Replace the stored collection with ``records``."""
        ...


class AbstractRecordService(ABC, Generic[RecordT]):
    """Abstract base class for the authoritative collection of one entity kind."""

    @abstractmethod
    def list_all(self) -> tuple[RecordT, ...]:
        """Return the current collection.

        Returns:
            A snapshot of every record in insertion order. Two calls with no
            mutation in between return equal tuples.
        """

    @abstractmethod
    def get(self, record_id: str) -> RecordT | None:
        """Look up a record by identifier.

        Args:
            record_id: The record's identifier, e.g. ``P007``.

        Returns:
            The matching record, or None if there is none.
        """

    @abstractmethod
    def delete(self, record_id: str) -> bool:
        """Permanently remove a record and persist the remaining collection.

        Args:
            record_id: The record's identifier.

        Returns:
            True if a record was removed, False if none matched.

        Raises:
            StorageError: If the remaining collection cannot be persisted.
        """
