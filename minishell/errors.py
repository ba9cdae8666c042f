"""Error messages in the shell's ``bash: ...`` style."""

from __future__ import annotations

import sys

PREFIX = "bash: "


def format_error(*args: str) -> str:
    """Join the message parts behind the shell prefix."""
    return PREFIX + "".join(args)


def print_error(*args: str) -> None:
    """Write the message parts, prefixed and newline-terminated, to standard error."""
    sys.stderr.write(format_error(*args) + "\n")
    sys.stderr.flush()