"""Pinned paths listed after the recents on the start screen."""

from __future__ import annotations

import os
from pathlib import Path

from .config import DEFAULT_MAX_BOOKMARKS
from .recents import normalize_path
from .storage import read_lines, write_lines


class BookmarkError(RuntimeError):
    """Raised when a bookmark cannot be added or removed."""


class BookmarkStore:
    """Bounded, insertion-ordered bookmark list stored one path per line."""

    def __init__(
        self,
        path: Path | str,
        *,
        max_length: int = DEFAULT_MAX_BOOKMARKS,
        resolve_symlinks: bool = True,
    ) -> None:
        self.path = Path(path)
        self.max_length = max_length
        self.resolve_symlinks = resolve_symlinks

    def load(self) -> tuple[str, ...]:
        entries: list[str] = []
        for line in read_lines(self.path):
            if line not in entries:
                entries.append(line)
        return tuple(entries)

    def add(self, path: str | os.PathLike[str]) -> str:
        """Append ``path`` unless it is already bookmarked; return the stored form.

        Raises :class:`BookmarkError` when the list is full.
        """

        bookmarks = self.load()
        normalized = normalize_path(path, resolve_symlinks=self.resolve_symlinks)
        if normalized in bookmarks:
            return normalized
        if len(bookmarks) >= self.max_length:
            raise BookmarkError(
                f"Bookmark list is full ({self.max_length} entries); "
                "delete one before adding another."
            )
        write_lines(self.path, (*bookmarks, normalized))
        return normalized

    def remove(self, index: int) -> str:
        """Delete the bookmark at ``index`` and return its path."""

        bookmarks = self.load()
        if not 0 <= index < len(bookmarks):
            raise BookmarkError(f"No bookmark at position {index}")
        removed = bookmarks[index]
        write_lines(self.path, bookmarks[:index] + bookmarks[index + 1 :])
        return removed
