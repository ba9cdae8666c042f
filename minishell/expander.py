"""Expansion of ``$NAME`` and ``$?`` in command text."""

from __future__ import annotations

from minishell.environment import Environment


def _is_name_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def _expand_dollar(text: str, i: int, env: Environment) -> tuple[str, int]:
    """Expand what follows a ``$`` at ``i``; return the replacement and the next index."""
    if i < len(text) and text[i] == "?":
        return env.status_text(), i + 1
    if i < len(text) and _is_name_char(text[i]):
        end = i
        while end < len(text) and _is_name_char(text[end]):
            end += 1
        value = env.get(text[i:end])
        return value or "", end
    return "$", i


def expand_env_vars(text: str | None, env: Environment) -> str | None:
    """Expand variables outside single quotes; an empty result becomes ``None``."""
    if text is None:
        return None
    out: list[str] = []
    in_single = False
    in_double = False
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "'" and not in_double:
            in_single = not in_single
        if ch == '"' and not in_single:
            in_double = not in_double
        if ch == "$" and not in_single:
            piece, i = _expand_dollar(text, i + 1, env)
            out.append(piece)
        else:
            out.append(ch)
            i += 1
    result = "".join(out)
    return result or None


def split_quotes(text: str) -> list[str]:
    """Split at spaces outside quotes, dropping the quote characters."""
    words: list[str] = []
    word: list[str] = []
    in_quotes = False
    for ch in text:
        if ch in "'\"":
            in_quotes = not in_quotes
        elif ch == " " and not in_quotes:
            words.append("".join(word))
            word = []
        else:
            word.append(ch)
    if word:
        words.append("".join(word))
    return words


def expand_args(args: list[str] | None, env: Environment) -> list[str] | None:
    """Expand each argument and split the results into words at spaces."""
    if args is None:
        return None
    result: list[str] = []
    for arg in args:
        expanded = expand_env_vars(arg, env)
        if expanded is None:
            continue
        for word in expanded.split(" "):
            if not word:
                continue
            if " " in word:
                result.extend(split_quotes(word))
            else:
                result.append(word)
    return result