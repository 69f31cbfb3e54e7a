"""Recently opened paths, most recent first."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterator

from .config import DEFAULT_MAX_RECENTS
from .storage import read_lines, write_lines


@dataclass(frozen=True, slots=True)
class RecentsList:
    """Ordered, deduplicated and bounded sequence of absolute paths."""

    entries: tuple[str, ...] = ()
    max_length: int = DEFAULT_MAX_RECENTS

    def __post_init__(self) -> None:
        if self.max_length < 1:
            raise ValueError("max_length must be at least 1")
        if len(self.entries) > self.max_length:
            raise ValueError(
                f"{len(self.entries)} entries exceed max_length {self.max_length}"
            )

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, path: object) -> bool:
        return path in self.entries


def normalize_path(path: str | os.PathLike[str], *, resolve_symlinks: bool = True) -> str:
    """Return the absolute, canonical form of ``path``.

    With ``resolve_symlinks`` the path is resolved through the filesystem
    (non-existent tails are kept as given); otherwise ``.`` and ``..`` are
    collapsed lexically.
    """

    raw = os.fspath(path)
    if not raw:
        raise ValueError("path must not be empty")
    if "\n" in raw or "\r" in raw:
        raise ValueError("path must not contain line breaks")
    expanded = Path(raw).expanduser()
    if resolve_symlinks:
        return str(expanded.resolve())
    return os.path.abspath(expanded)


def record(
    recents: RecentsList,
    path: str | os.PathLike[str],
    *,
    resolve_symlinks: bool = True,
) -> RecentsList:
    """Move ``path`` to the front of ``recents``, evicting from the tail."""

    normalized = normalize_path(path, resolve_symlinks=resolve_symlinks)
    remaining = [entry for entry in recents.entries if entry != normalized]
    entries = (normalized, *remaining)[: recents.max_length]
    return replace(recents, entries=entries)


def remove(recents: RecentsList, index: int) -> RecentsList:
    """Return ``recents`` without the entry at ``index``."""

    if not 0 <= index < len(recents.entries):
        raise IndexError(f"No recent entry at position {index}")
    entries = recents.entries[:index] + recents.entries[index + 1 :]
    return replace(recents, entries=entries)


class RecentsStore:
    """Persist a :class:`RecentsList` in a line-oriented text file."""

    def __init__(
        self,
        path: Path | str,
        *,
        max_length: int = DEFAULT_MAX_RECENTS,
        resolve_symlinks: bool = True,
    ) -> None:
        self.path = Path(path)
        self.max_length = max_length
        self.resolve_symlinks = resolve_symlinks

    def load(self) -> RecentsList:
        lines = read_lines(self.path)
        entries: list[str] = []
        for line in lines:
            if line not in entries:
                entries.append(line)
        return RecentsList(tuple(entries[: self.max_length]), self.max_length)

    def record(self, recents: RecentsList, path: str | os.PathLike[str]) -> RecentsList:
        return record(recents, path, resolve_symlinks=self.resolve_symlinks)

    def save(self, recents: RecentsList) -> None:
        write_lines(self.path, recents.entries)
