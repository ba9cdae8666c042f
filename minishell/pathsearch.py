"""Locating commands on ``$PATH``."""

from __future__ import annotations

import os
import stat

from minishell.environment import Environment
from minishell.errors import print_error

_MAX_DIR = 1023


def join_path(directory: str, name: str) -> str:
    """Join a directory and a command name; an empty name gives an empty path."""
    if not name:
        return ""
    return f"{directory}/{name}"


def check_if_folder(path: str, env: Environment) -> bool:
    """Report whether ``path`` is a directory, updating the last status.

    A missing path sets the status to 1; a directory prints an error and sets 126.
    """
    try:
        info = os.stat(path)
    except OSError:
        env.status = 1
        return False
    if stat.S_ISDIR(info.st_mode):
        print_error(path, ": is a directory")
        env.status = 126
        return True
    return False


def _path_segments(path_env: str) -> list[str]:
    segments = path_env.split(":")
    if segments and segments[-1] == "":
        segments.pop()
    return [segment[:_MAX_DIR] for segment in segments]


def search_command(name: str, env: Environment) -> str | None:
    """Return an executable path for ``name``, or ``None`` when none is found."""
    if "/" in name:
        return name if os.access(name, os.X_OK) else None
    path_env = env.get("PATH")
    if path_env is None:
        return None
    for directory in _path_segments(path_env):
        candidate = join_path(directory, name)
        if candidate and os.access(candidate, os.X_OK):
            return candidate
    return None