import re
from collections.abc import Iterable

_NUMERIC_SUFFIX = re.compile(r"[0-9]+")


def next_id(prefix: str, existing_ids: Iterable[str | None], width: int = 3) -> str:
    """Return the next sequential identifier for ``prefix``.

    ``next_id("RX", ["RX001", "RX0099", "RXold"])`` → ``RX100``.

    Identifiers with another prefix or a non-numeric suffix are ignored.
    ``width`` is a minimum: ``P999`` is followed by ``P1000``.
    """
    highest = 0
    for existing in existing_ids:
        if existing is None or not existing.startswith(prefix):
            continue
        suffix = existing[len(prefix) :]
        if not _NUMERIC_SUFFIX.fullmatch(suffix):
            continue
        highest = max(highest, int(suffix))

    return f"{prefix}{highest + 1:0{width}d}"
