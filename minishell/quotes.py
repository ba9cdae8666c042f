"""Helpers that strip quote characters from words."""

from __future__ import annotations

QUOTES = "'\""


def remove_all_quotes(text: str) -> str:
    """Drop every single and double quote character."""
    return "".join(ch for ch in text if ch not in QUOTES)


def remove_quotes(text: str) -> str:
    """Remove one pair of matching quotes around the whole text, if present."""
    if len(text) >= 2 and text[0] in QUOTES and text[0] == text[-1]:
        return text[1:-1]
    return text


def _unquote_rest(text: str, start: int) -> str:
    """Copy text from ``start``, removing quote pairs but keeping their contents."""
    out: list[str] = []
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in QUOTES:
            end = text.find(ch, i + 1)
            if end == -1:
                out.append(text[i + 1:])
                break
            out.append(text[i + 1:end])
            i = end + 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def remove_first_layer_quotes(text: str) -> str:
    """Remove the outer layer of quotes from a word.

    A word that is a single quoted span reaching to its end is returned
    unchanged; otherwise each quoted span loses its surrounding quotes.
    """
    if len(text) < 2:
        return text
    prefix = ""
    start = 0
    if text[0] in QUOTES:
        close = text.find(text[0], 1)
        if close == -1 or close + 1 >= len(text):
            return text
        prefix = text[1:close]
        start = close + 1
    return prefix + _unquote_rest(text, start)


def get_first_word(text: str) -> str:
    """Return the text up to the first space."""
    return text.split(" ", 1)[0]


def is_quoted_delimiter(delimiter: str | None) -> bool:
    """Tell whether a heredoc delimiter starts with a quote."""
    return bool(delimiter) and delimiter[0] in QUOTES


def strip_matching_quotes(text: str) -> str:
    """Strip a quote pair around an argument unless it opens with an empty pair."""
    if not text:
        return text
    quote = text[0]
    if quote not in QUOTES:
        return text
    if len(text) > 1 and text[1] != quote and text[-1] == quote:
        return text[1:-1]
    return text


def normalize_quoted_args(args: list[str]) -> list[str]:
    """Unquote argument words; an empty quoted command name becomes empty."""
    if not args:
        return []
    result = list(args)
    if result[0] in ('""', "''"):
        result[0] = ""
    return [strip_matching_quotes(arg) for arg in result]