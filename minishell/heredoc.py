"""Collection of heredoc bodies into temporary files before execution."""

from __future__ import annotations

import itertools
import os
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from minishell.ast import AstNode, Command, NodeType
from minishell.builtins import ShellExit
from minishell.environment import Environment
from minishell.errors import print_error
from minishell.expander import expand_env_vars
from minishell.quotes import is_quoted_delimiter, remove_quotes

HEREDOC_PREFIX = "/tmp/minihell_heredoc_"

_counter = itertools.count()


def _as_lines(source: TextIO | Iterable[str] | None) -> Iterator[str]:
    stream = sys.stdin if source is None else source
    readline = getattr(stream, "readline", None)
    if readline is not None:
        return iter(readline, "")
    return iter(stream)


def _prompted(lines: Iterator[str]) -> Iterator[str]:
    while True:
        sys.stdout.write("> ")
        sys.stdout.flush()
        line = next(lines, None)
        if line is None:
            return
        yield line


def read_heredoc_body(
    lines: Iterable[str], delimiter: str, expand: bool, env: Environment
) -> str:
    """Gather lines up to the one that is exactly ``delimiter``, expanding if asked."""
    terminator = delimiter + "\n"
    parts: list[str] = []
    for line in lines:
        if line == terminator:
            break
        if expand:
            parts.append(expand_env_vars(line, env) or "")
        else:
            parts.append(line)
    return "".join(parts)


def _write_entry(delimiter: str, env: Environment, lines: Iterator[str]) -> str:
    filename = f"{HEREDOC_PREFIX}{next(_counter)}"
    try:
        fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    except OSError as exc:
        print_error("heredoc temp file")
        raise ShellExit(1) from exc
    body = read_heredoc_body(
        _prompted(lines),
        remove_quotes(delimiter),
        not is_quoted_delimiter(delimiter),
        env,
    )
    with os.fdopen(fd, "w") as out:
        out.write(body)
    return filename


def collect_heredoc(
    command: Command, env: Environment, source: TextIO | Iterable[str] | None = None
) -> None:
    """Read each heredoc of ``command`` into a file and replace its delimiter by the file name."""
    lines = _as_lines(source)
    command.heredocs[:] = [_write_entry(d, env, lines) for d in command.heredocs]


def prepare_heredocs(
    node: AstNode | None, env: Environment, source: TextIO | Iterable[str] | None = None
) -> None:
    """Collect the heredocs of every command in the tree, in tree order."""
    if node is None:
        return
    lines = _as_lines(source)
    for current in node.walk():
        if current.type == NodeType.COMMAND and current.command and current.command.heredocs:
            collect_heredoc(current.command, env, lines)


def apply_heredocs(command: Command) -> None:
    """Make standard input read from the last existing heredoc file of ``command``."""
    for name in command.heredocs:
        if not os.path.exists(name):
            continue
        try:
            fd = os.open(name, os.O_RDONLY)
        except OSError as exc:
            print_error("open", name)
            raise ShellExit(1) from exc
        os.dup2(fd, 0)
        os.close(fd)