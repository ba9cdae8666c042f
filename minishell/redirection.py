"""File redirections of standard input and output."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from minishell.builtins import ShellExit
from minishell.errors import print_error

HEREDOC_FILE = "/tmp/minihell_heredoc"

_INPUT_FLAGS = os.O_RDONLY
_OUTPUT_FLAGS = os.O_WRONLY | os.O_CREAT


class RedirectionError(Exception):
    """Raised when a redirection target cannot be opened or attached."""


def _open_each(files: Iterable[str], flags: int) -> int:
    """Open every file in turn, keep only the last descriptor and return it."""
    fd = -1
    for name in files:
        if fd != -1:
            os.close(fd)
            fd = -1
        try:
            fd = os.open(name, flags, 0o644)
        except OSError as exc:
            print_error(name, ": No such file or directory")
            raise RedirectionError(name) from exc
    if fd == -1:
        raise RedirectionError("no redirection target")
    return fd


def open_last_input(files: Iterable[str]) -> int:
    """Open each input file for reading and return a descriptor for the last one."""
    return _open_each(files, _INPUT_FLAGS)


def open_last_output(files: Iterable[str], append: bool) -> int:
    """Create or open each output file, truncating or appending, and return the last."""
    flags = _OUTPUT_FLAGS | (os.O_APPEND if append else os.O_TRUNC)
    return _open_each(files, flags)


def _attach(fd: int, target: int, what: str) -> None:
    try:
        os.dup2(fd, target)
    except OSError as exc:
        print_error(f"dup2 {what} file")
        raise RedirectionError(what) from exc
    finally:
        os.close(fd)


def redirect_input(files: Iterable[str]) -> None:
    """Make the last of ``files`` the process's standard input."""
    _attach(open_last_input(files), 0, "input")


def redirect_output(files: Iterable[str], append: bool) -> None:
    """Make the last of ``files`` the process's standard output."""
    _attach(open_last_output(files, append), 1, "output")


def _prompted_lines(source: TextIO | Iterable[str]) -> Iterator[str]:
    readline = getattr(source, "readline", None)
    lines = iter(readline, "") if readline is not None else iter(source)
    while True:
        sys.stdout.write("> ")
        sys.stdout.flush()
        line = next(lines, None)
        if line is None:
            return
        yield line


def handle_heredoc(delimiter: str, source: TextIO | Iterable[str] | None = None) -> None:
    """Read lines up to ``delimiter`` into the heredoc file and read stdin from it."""
    stream = sys.stdin if source is None else source
    try:
        fd = os.open(HEREDOC_FILE, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    except OSError as exc:
        sys.stderr.write(f"heredoc temp file: {exc.strerror}\n")
        raise ShellExit(1) from exc
    terminator = delimiter + "\n"
    with os.fdopen(fd, "w") as out:
        for line in _prompted_lines(stream):
            if line == terminator:
                break
            out.write(line)
    try:
        fd = os.open(HEREDOC_FILE, os.O_RDONLY)
    except OSError as exc:
        sys.stderr.write(f"reopen heredoc file: {exc.strerror}\n")
        raise ShellExit(1) from exc
    os.dup2(fd, 0)
    os.close(fd)