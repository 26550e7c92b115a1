from collections.abc import Sequence
from pathlib import Path
from typing import Generic, TypeVar

from loguru import logger

from healthrecords.domain.exceptions import StorageError
from healthrecords.domain.models import Record
from healthrecords.storage.codec import read_rows, write_lines

RecordT = TypeVar("RecordT", bound=Record)


class FlatFileRepository(Generic[RecordT]):
    """Loads and overwrites one entity kind's records in a delimited flat file.

    Every save rewrites the whole file, so callers must always pass the
    complete collection.
    """

    def __init__(self, path: Path, record_type: type[RecordT]) -> None:
        self._path = Path(path)
        self._record_type = record_type

    @property
    def path(self) -> Path:
        return self._path

    @property
    def record_type(self) -> type[RecordT]:
        return self._record_type

    def load_all(self) -> list[RecordT]:
        """Read every record in file order.

        Raises:
            StorageError: If the file cannot be read.
            MalformedRecordError: If a row is narrower than the record type.
        """
        rows = read_rows(self._path)
        records = [
            # Line 1 is the header.
            self._record_type.from_row(row, line_number=index + 2, path=self._path)
            for index, row in enumerate(rows)
        ]
        logger.debug("Loaded {} {} record(s) from {}", len(records), self._kind, self._path)
        return records

    def save_all(self, records: Sequence[RecordT]) -> None:
        """Overwrite the file with ``records``.

        Raises:
            StorageError: If the file cannot be written.
        """
        write_lines(
            self._path,
            self._record_type.header(),
            [record.to_line() for record in records],
        )
        logger.debug("Saved {} {} record(s) to {}", len(records), self._kind, self._path)

    def ensure_exists(self) -> bool:
        """Create a header-only file if the backing file is missing.

        Returns:
            True if a new file was created.
        """
        if self._path.exists():
            return False

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(self._path, f"cannot create directory: {exc}") from exc
        write_lines(self._path, self._record_type.header(), [])
        logger.info("Created empty {} file at {}", self._kind, self._path)
        return True

    @property
    def _kind(self) -> str:
        return self._record_type.__name__.lower()
