"""Expansion of ``*`` patterns against the entries of a directory."""

from __future__ import annotations

import os
import re


def match_pattern(pattern: str, name: str) -> bool:
    """Match ``name`` against ``pattern`` where ``*`` stands for any run of characters."""
    p = s = 0
    star = -1
    mark = 0
    while s < len(name):
        if p < len(pattern) and pattern[p] == "*":
            star = p
            mark = s
            p += 1
        elif p < len(pattern) and pattern[p] == name[s]:
            p += 1
            s += 1
        elif star != -1:
            p = star + 1
            mark += 1
            s = mark
        else:
            return False
    while p < len(pattern) and pattern[p] == "*":
        p += 1
    return p == len(pattern)


def expand_wildcard(pattern: str, directory: str | os.PathLike[str] | None = None) -> list[str]:
    """Return the directory entries that match ``pattern``, in directory order."""
    try:
        entries = os.listdir(directory if directory is not None else ".")
    except OSError:
        return []
    return [entry for entry in entries if match_pattern(pattern, entry)]


def expand_token(token: str, directory: str | os.PathLike[str] | None = None) -> str:
    """Replace a pattern with its space-joined matches; keep it when nothing matches."""
    if "*" not in token:
        return token
    matches = expand_wildcard(token, directory)
    if not matches:
        return token
    return " ".join(matches)


def expand_line(line: str | None, directory: str | os.PathLike[str] | None = None) -> str | None:
    """Expand every blank-separated word; a line with no words gives ``None``."""
    if line is None:
        return None
    tokens = [t for t in re.split(r"[ \t]+", line) if t]
    if not tokens:
        return None
    return " ".join(expand_token(token, directory) for token in tokens)