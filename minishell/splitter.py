"""Split an input line into words and operators."""

from __future__ import annotations

from collections.abc import Iterator

from minishell.textutils import is_operator_char

_QUOTES = "'\""


def _skip_quoted(text: str, i: int) -> int:
    """Index just past the quoted run starting at ``i``, or the end of ``text``."""
    quote = text[i]
    i += 1
    while i < len(text) and text[i] != quote:
        i += 1
    if i < len(text):
        i += 1
    return i


def _spans(text: str) -> Iterator[tuple[int, int]]:
    """Start and end of each token in ``text``."""
    i = 0
    n = len(text)
    while True:
        while i < n and text[i] == " ":
            i += 1
        if i >= n:
            return
        start = i
        if is_operator_char(text[i]):
            i += 2 if i + 1 < n and text[i + 1] == text[i] else 1
        else:
            while i < n and text[i] != " " and not is_operator_char(text[i]):
                if text[i] in _QUOTES:
                    i = _skip_quoted(text, i)
                else:
                    i += 1
        yield start, i


def count_tokens(text: str) -> int:
    """Number of tokens :func:`split_mini` would produce."""
    return sum(1 for _ in _spans(text))


def split_mini(text: str) -> list[str]:
    """Split ``text`` at spaces and around ``|``, ``<``, ``>``, ``<<``, ``>>``.

    Quoted runs stay inside their word, quotes included.
    """
    return [text[start:end] for start, end in _spans(text)]