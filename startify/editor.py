"""Hand control of the terminal over to the external editor."""

from __future__ import annotations

import os
import shlex
import signal
import subprocess
import sys
from typing import Callable, Sequence

ExecFunc = Callable[[str, Sequence[str]], None]


class LaunchError(RuntimeError):
    """Raised when the editor cannot be located or executed."""


def build_command(editor: str, path: str | None = None) -> list[str]:
    """Split the editor command line and append ``path`` when given."""

    try:
        argv = shlex.split(editor)
    except ValueError as exc:
        raise LaunchError(f"Invalid editor command {editor!r}: {exc}") from exc
    if not argv:
        raise LaunchError("No editor command configured.")
    if path is not None:
        argv.append(path)
    return argv


def supports_exec() -> bool:
    # os.execvp exists on Windows but spawns a detached process instead of
    # replacing the current one.
    return os.name == "posix"


def launch_editor(
    editor: str,
    path: str | None = None,
    *,
    exec_fn: ExecFunc | None = None,
) -> None:
    """Replace the current process with ``editor`` opened on ``path``.

    Where process replacement is unavailable the editor runs as a child and
    the interpreter exits with its return code.
    """

    argv = build_command(editor, path)

    if supports_exec():
        exec_fn = exec_fn or os.execvp
        # Buffered output is lost once the process image is replaced.
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            exec_fn(argv[0], argv)
        except OSError as exc:
            raise LaunchError(f"Failed to launch editor '{argv[0]}': {exc}") from exc
        return

    sys.exit(_spawn_and_wait(argv))


def _spawn_and_wait(argv: list[str]) -> int:
    # The child shares the console and receives Ctrl-C itself.
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        completed = subprocess.run(argv, check=False)
    except OSError as exc:
        raise LaunchError(f"Failed to launch editor '{argv[0]}': {exc}") from exc
    finally:
        signal.signal(signal.SIGINT, previous)
    return completed.returncode
