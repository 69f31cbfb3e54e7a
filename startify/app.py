"""Application bootstrap and context container for Startify."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .bookmarks import BookmarkStore
from .config import StartifyConfig, load_config
from .recents import RecentsStore


@dataclass(slots=True)
class AppContext:
    """Aggregates the configuration and list stores for one invocation."""

    config: StartifyConfig
    recents: RecentsStore
    bookmarks: BookmarkStore


def build_context(config: StartifyConfig) -> AppContext:
    recents = RecentsStore(
        config.recents_path,
        max_length=config.max_recents,
        resolve_symlinks=config.resolve_symlinks,
    )
    bookmarks = BookmarkStore(
        config.bookmarks_path,
        max_length=config.max_bookmarks,
        resolve_symlinks=config.resolve_symlinks,
    )
    return AppContext(config=config, recents=recents, bookmarks=bookmarks)


def bootstrap(config_path: Path | None = None) -> AppContext:
    """Load configuration and wire up the stores."""

    # Defer error mapping to the CLI, which knows how to present messages.
    return build_context(load_config(config_path))
