from __future__ import annotations

import shlex
import subprocess
from pathlib import Path

from runtests.core import logging
from runtests.exceptions import MissingToolError


def render_command(cmd: list[str]) -> str:
    return " ".join(shlex.quote(part) for part in cmd)


def exit_status(returncode: int) -> int:
    # A child killed by signal N reports -N; shells report 128 + N.
    if returncode < 0:
        return 128 - returncode
    return returncode


def run_command(
    cmd: list[str],
    *,
    cwd: Path | str | None = None,
    quiet: bool = False,
) -> subprocess.CompletedProcess[str]:
    if not cmd:
        raise RuntimeError("command is empty")
    output = subprocess.DEVNULL if quiet else None
    logging.debug(f"$ {render_command(cmd)}")
    try:
        return subprocess.run(
            cmd,
            cwd=None if cwd is None else str(cwd),
            stdout=output,
            stderr=output,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise MissingToolError(cmd[0]) from exc
