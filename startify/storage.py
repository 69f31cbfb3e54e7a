"""Line-oriented list files shared by the recents and bookmark stores."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterable

ENCODING = "utf-8"


class StorageError(RuntimeError):
    """Raised when a list file cannot be read, written or replaced."""


def read_lines(path: Path) -> list[str]:
    """Return the non-empty lines of ``path``.

    A missing file yields an empty list. Any other failure, including content
    that is not valid UTF-8, raises :class:`StorageError`.
    """

    try:
        text = path.read_text(encoding=ENCODING)
    except FileNotFoundError:
        return []
    except UnicodeDecodeError as exc:
        raise StorageError(f"Corrupt list file {path}: {exc}") from exc
    except OSError as exc:
        raise StorageError(f"Failed to read {path}: {exc}") from exc

    if "\x00" in text:
        raise StorageError(f"Corrupt list file {path}: contains NUL bytes")

    # Only "\n" separates entries; other Unicode line boundaries are valid in
    # file names.
    lines = (line.removesuffix("\r") for line in text.split("\n"))
    return [line for line in lines if line]


def write_lines(path: Path, lines: Iterable[str]) -> None:
    """Atomically replace ``path`` with ``lines``, one per line.

    The content goes to a temporary file in the same directory which is then
    renamed over the target, so readers see either the old or the new file.
    """

    payload = "".join(f"{line}\n" for line in lines)
    directory = path.parent

    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=directory, prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as exc:
        raise StorageError(f"Failed to write {path}: {exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding=ENCODING) as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException as exc:
        _discard(tmp_name)
        if isinstance(exc, OSError):
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        raise


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass
