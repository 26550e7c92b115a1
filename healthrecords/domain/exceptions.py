from pathlib import Path


class RecordStoreError(Exception):
    """Base exception for all record store errors."""


class StorageError(RecordStoreError):
    """Raised when a backing file cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Storage failure for {path}: {reason}")


class MalformedRecordError(RecordStoreError):
    """Raised when a stored row has fewer fields than its record type expects."""

    def __init__(self, path: Path | None, line_number: int, expected: int, actual: int) -> None:
        self.path = path
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Malformed record at {path or '<memory>'}:{line_number}: "
            f"expected {expected} fields, got {actual}"
        )


class RecordNotFoundError(RecordStoreError):
    """Raised when an operation targets an identifier that does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} ID not found: {record_id}")
