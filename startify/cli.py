"""Click-based command-line interface for Startify."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import click
import yaml

from .app import AppContext, bootstrap
from .bookmarks import BookmarkError
from .config import (
    ConfigError,
    StartifyConfig,
    bootstrap_config_file,
    default_config_path,
)
from .editor import LaunchError, launch_editor
from .recents import RecentsList, remove
from .storage import StorageError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}


class StartifyCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("path", required=False)
@click.option(
    "-b",
    "--bookmark",
    "bookmark_path",
    metavar="PATH",
    default=None,
    help="Add PATH to the bookmarks instead of opening it.",
)
@click.option(
    "-d",
    "--delete",
    "delete_key",
    metavar="KEY",
    default=None,
    help="Delete the recent or bookmarked entry listed under KEY.",
)
@click.option(
    "-l", "--list", "list_entries", is_flag=True, help="List recents and bookmarks."
)
@click.option(
    "--info", "show_info", is_flag=True, help="Show storage locations and settings."
)
@click.option(
    "--edit-config",
    is_flag=True,
    help="Create the configuration file if needed and open it in the editor.",
)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to configuration TOML file.",
)
@click.option(
    "-e",
    "--editor",
    "editor_opt",
    metavar="CMD",
    default=None,
    help="Editor command to launch, overriding the configuration.",
)
def cli(
    path: str | None,
    bookmark_path: str | None,
    delete_key: str | None,
    list_entries: bool,
    show_info: bool,
    edit_config: bool,
    config_path_opt: Path | None,
    editor_opt: str | None,
) -> None:
    """Record PATH as recently opened and open it in the editor.

    Without PATH the editor is started on its own start screen.
    """

    actions = [
        name
        for name, selected in (
            ("--bookmark", bookmark_path is not None),
            ("--delete", delete_key is not None),
            ("--list", list_entries),
            ("--info", show_info),
            ("--edit-config", edit_config),
        )
        if selected
    ]
    if len(actions) > 1:
        raise click.UsageError(f"Use only one of {', '.join(actions)}.")
    if actions and path is not None:
        raise click.UsageError(f"PATH cannot be combined with {actions[0]}.")
    if path == "":
        raise click.UsageError("PATH must not be empty.")
    if bookmark_path == "":
        raise click.UsageError("Bookmark PATH must not be empty.")

    if edit_config:
        _edit_config(config_path_opt, editor_opt)
        return

    app = _bootstrap(config_path_opt)

    if bookmark_path is not None:
        _add_bookmark(app, bookmark_path)
    elif delete_key is not None:
        _delete_entry(app, delete_key)
    elif list_entries:
        _list_entries(app)
    elif show_info:
        _show_info(app)
    else:
        _open(app, path, editor_opt or app.config.editor)


def _bootstrap(config_path: Path | None) -> AppContext:
    try:
        return bootstrap(config_path)
    except ConfigError as exc:
        raise StartifyCliError(str(exc)) from exc


def _load_recents(app: AppContext) -> RecentsList:
    try:
        return app.recents.load()
    except StorageError as exc:
        raise StartifyCliError(str(exc)) from exc


def _load_bookmarks(app: AppContext) -> tuple[str, ...]:
    try:
        return app.bookmarks.load()
    except StorageError as exc:
        raise StartifyCliError(str(exc)) from exc


def _open(app: AppContext, path: str | None, editor: str) -> None:
    # Load even when nothing gets recorded so a corrupt store is reported
    # before the editor takes over the terminal.
    recents = _load_recents(app)

    target: str | None = None
    if path is not None:
        try:
            updated = app.recents.record(recents, path)
        except ValueError as exc:
            raise click.UsageError(str(exc)) from exc
        target = updated.entries[0]
        try:
            app.recents.save(updated)
        except StorageError as exc:
            # Handoff still proceeds without the history update.
            click.echo(f"Warning: {exc}", err=True)

    try:
        launch_editor(editor, target)
    except LaunchError as exc:
        raise StartifyCliError(str(exc)) from exc


def _add_bookmark(app: AppContext, path: str) -> None:
    try:
        stored = app.bookmarks.add(path)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    except (BookmarkError, StorageError) as exc:
        raise StartifyCliError(str(exc)) from exc
    click.echo(f"Bookmarked {stored}")


def _delete_entry(app: AppContext, key: str) -> None:
    try:
        index = int(key, 16)
    except ValueError:
        raise click.UsageError(f"Invalid key '{key}'; expected a hexadecimal key.") from None
    if index < 0:
        raise click.UsageError(f"Invalid key '{key}'; expected a hexadecimal key.")

    recents = _load_recents(app)
    try:
        if index < len(recents):
            removed = recents.entries[index]
            app.recents.save(remove(recents, index))
        else:
            removed = app.bookmarks.remove(index - len(recents))
    except BookmarkError:
        raise click.UsageError(f"No entry listed under key '{key}'.") from None
    except StorageError as exc:
        raise StartifyCliError(str(exc)) from exc

    click.echo(f"Deleted {removed}")


def _list_entries(app: AppContext) -> None:
    recents = _load_recents(app)
    bookmarks = _load_bookmarks(app)

    click.echo("Recents\n")
    _echo_keyed(recents.entries, start=0)
    click.echo("\nBookmarks\n")
    _echo_keyed(bookmarks, start=len(recents))


def _echo_keyed(entries: Sequence[str], *, start: int) -> None:
    if not entries:
        click.echo("  (none)")
        return
    for offset, entry in enumerate(entries):
        click.echo(f"  [{start + offset:x}]  {entry}")


def _show_info(app: AppContext) -> None:
    config = app.config
    recents = _load_recents(app)
    bookmarks = _load_bookmarks(app)
    source = str(config.source_path) if config.source_path else "(defaults)"

    click.echo("Startify info:\n")
    click.echo(f"  Config file    : {source}")
    click.echo(f"  Recents file   : {app.recents.path}")
    click.echo(f"  Recents        : {len(recents)}/{config.max_recents}")
    click.echo(f"  Bookmarks file : {app.bookmarks.path}")
    click.echo(f"  Bookmarks      : {len(bookmarks)}/{config.max_bookmarks}")
    click.echo("\nConfiguration:\n")
    click.echo(_format_config(config))


def _format_config(config: StartifyConfig) -> str:
    data: dict[str, Any] = {
        "editor": config.editor,
        "data_dir": str(config.data_dir),
        "max_recents": config.max_recents,
        "max_bookmarks": config.max_bookmarks,
        "resolve_symlinks": config.resolve_symlinks,
    }

    return yaml.safe_dump(data, sort_keys=False).strip()


def _edit_config(config_path: Path | None, editor: str | None) -> None:
    effective_path = config_path or default_config_path()

    try:
        created = bootstrap_config_file(effective_path)
    except OSError as exc:
        raise StartifyCliError(f"Failed to create configuration: {exc}") from exc

    if editor is None:
        editor = _bootstrap(effective_path).config.editor

    try:
        click.edit(filename=str(effective_path), editor=editor)
    except click.ClickException as exc:
        raise StartifyCliError(f"Failed to launch editor: {exc.message}") from exc

    if created:
        click.echo(f"Created configuration at {effective_path}")
    click.echo(f"Opened configuration at {effective_path}")


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        return cli.main(args=args, prog_name="startify", standalone_mode=False) or 0
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except SystemExit as exc:
        return int(exc.code or 0)
