"""Line-oriented flat-file primitives shared by every repository.

Files hold one header line followed by one comma-delimited line per record.
There is no quoting: a delimiter or line break inside a value is replaced
with a space before writing, so such values do not survive a round trip.
"""

import contextlib
import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path

from healthrecords.domain.exceptions import StorageError

DELIMITER = ","

_UNSAFE_CHARACTERS = (DELIMITER, "\n", "\r")


def sanitize_field(value: str | None) -> str:
    """Return ``value`` made safe for a single delimited line.

    ``None`` becomes ``""``; every delimiter and line-break character is
    replaced by one space.
    """
    if value is None:
        return ""
    for character in _UNSAFE_CHARACTERS:
        value = value.replace(character, " ")
    return value


def read_rows(path: Path) -> list[list[str]]:
    """Read every data row of ``path``, skipping the header line.

    Empty fields, including trailing ones, are preserved.

    Raises:
        StorageError: If the file cannot be opened, read or decoded.
    """
    rows: list[list[str]] = []
    try:
        with open(path, encoding="utf-8") as handle:
            next(handle, None)
            for line in handle:
                if line.endswith("\n"):
                    line = line[:-1]
                rows.append(line.split(DELIMITER))
    except (OSError, UnicodeError) as exc:
        raise StorageError(path, f"read failed: {exc}") from exc

    return rows


def write_lines(path: Path, header: str, lines: Iterable[str]) -> None:
    """Replace ``path`` with ``header`` followed by ``lines``.

    The content is written to a temporary file in the same directory and
    renamed over the target, so readers never observe a partial file. The
    target keeps its permission bits; a new file gets the umask default.
    On failure the target is left as it was.

    Raises:
        StorageError: If the file cannot be written or encoded.
    """
    tmp_name: str | None = None
    replaced = False
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="\n",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(header + "\n")
            for line in lines:
                handle.write(line + "\n")
        _apply_target_mode(path, tmp_name)
        os.replace(tmp_name, path)
        replaced = True
    except (OSError, UnicodeError) as exc:
        raise StorageError(path, f"write failed: {exc}") from exc
    finally:
        if tmp_name is not None and not replaced:
            with contextlib.suppress(OSError):
                Path(tmp_name).unlink(missing_ok=True)


def _apply_target_mode(path: Path, tmp_name: str) -> None:
    # NamedTemporaryFile always creates files as 0600.
    if path.exists():
        shutil.copymode(path, tmp_name)
        return
    umask = os.umask(0)
    os.umask(umask)
    os.chmod(tmp_name, 0o666 & ~umask)
