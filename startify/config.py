"""Configuration management for Startify."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

APP_NAME = "startify"
DATA_DIRNAME = "helix-startify"
DEFAULT_EDITOR = "hx"
DEFAULT_MAX_RECENTS = 10
DEFAULT_MAX_BOOKMARKS = 6


def default_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return ``$XDG_CONFIG_HOME/startify`` or ``~/.config/startify``."""

    env = os.environ if environ is None else environ
    base = env.get("XDG_CONFIG_HOME", "").strip()
    root = Path(base) if base else Path("~/.config")
    return (root / APP_NAME).expanduser()


def default_data_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return ``$XDG_DATA_HOME/helix-startify`` or ``~/.local/share/helix-startify``."""

    env = os.environ if environ is None else environ
    base = env.get("XDG_DATA_HOME", "").strip()
    root = Path(base) if base else Path("~/.local/share")
    return (root / DATA_DIRNAME).expanduser()


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    return default_config_dir(environ) / "config.toml"


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class InvalidConfigError(ConfigError):
    """Raised when the configuration file is malformed or holds bad values."""


@dataclass(slots=True)
class StartifyConfig:
    """In-memory representation of the Startify configuration."""

    data_dir: Path
    editor: str = DEFAULT_EDITOR
    max_recents: int = DEFAULT_MAX_RECENTS
    max_bookmarks: int = DEFAULT_MAX_BOOKMARKS
    resolve_symlinks: bool = True
    source_path: Path | None = None

    @property
    def recents_path(self) -> Path:
        return self.data_dir / "recents"

    @property
    def bookmarks_path(self) -> Path:
        return self.data_dir / "bookmarks"


def load_config(
    path: Path | None = None, *, environ: Mapping[str, str] | None = None
) -> StartifyConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the configuration file. When ``None`` the default
        path (``$XDG_CONFIG_HOME/startify/config.toml``) is used.
    environ:
        Environment used to derive default directories. Defaults to
        ``os.environ``.

    Unlike an explicitly selected file, a missing default file is not an
    error: every setting falls back to its default.

    Raises
    ------
    ConfigError
        If an explicitly selected file does not exist.
    InvalidConfigError
        If the file cannot be parsed or holds values of the wrong type.
    """

    config_path = (path or default_config_path(environ)).expanduser()
    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Configuration file not found at {config_path}")
        return StartifyConfig(data_dir=default_data_dir(environ))

    try:
        with config_path.open("rb") as fh:
            raw = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfigError(f"Invalid TOML in {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {config_path}: {exc}") from exc

    section = raw.get(APP_NAME, {})
    if not isinstance(section, dict):
        raise InvalidConfigError(f"'{APP_NAME}' section must be a table")

    config_dir = config_path.parent

    # Relative data directories are resolved against the configuration
    # directory.
    data_dir_raw = section.get("data_dir")
    if data_dir_raw is None:
        data_dir = default_data_dir(environ)
    elif isinstance(data_dir_raw, str) and data_dir_raw.strip():
        dd = Path(data_dir_raw.strip()).expanduser()
        data_dir = (dd if dd.is_absolute() else (config_dir / dd)).resolve()
    else:
        raise InvalidConfigError("'data_dir' must be a non-empty string when provided")

    editor = section.get("editor", DEFAULT_EDITOR)
    if not isinstance(editor, str) or not editor.strip():
        raise InvalidConfigError("'editor' must be a non-empty string when provided")

    max_recents = _read_int(section, "max_recents", DEFAULT_MAX_RECENTS, minimum=1)
    max_bookmarks = _read_int(
        section, "max_bookmarks", DEFAULT_MAX_BOOKMARKS, minimum=0
    )

    resolve_symlinks = section.get("resolve_symlinks", True)
    if not isinstance(resolve_symlinks, bool):
        raise InvalidConfigError("'resolve_symlinks' must be a boolean")

    return StartifyConfig(
        data_dir=data_dir,
        editor=editor.strip(),
        max_recents=max_recents,
        max_bookmarks=max_bookmarks,
        resolve_symlinks=resolve_symlinks,
        source_path=config_path,
    )


def _read_int(section: dict[str, Any], key: str, default: int, *, minimum: int) -> int:
    value = section.get(key, default)
    # bool is a subclass of int; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(f"'{key}' must be an integer")
    if value < minimum:
        raise InvalidConfigError(f"'{key}' must be at least {minimum}")
    return value


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    default_content = (
        f"[{APP_NAME}]\n"
        f'editor = "{DEFAULT_EDITOR}"\n'
        f"max_recents = {DEFAULT_MAX_RECENTS}\n"
        f"max_bookmarks = {DEFAULT_MAX_BOOKMARKS}\n"
        "resolve_symlinks = true\n"
    )
    path.write_text(default_content, encoding="utf-8")
    return True
