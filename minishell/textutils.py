"""Small string helpers shared by the lexer, the builtins and the executor."""

from __future__ import annotations

_WHITESPACE = frozenset(" \t\n\v\f\r")
_OPERATOR_CHARS = frozenset("|<>")


def _code(text: str, index: int) -> int:
    """Character code at ``index``, or 0 past the end of ``text``."""
    return ord(text[index]) if index < len(text) else 0


def split_on(text: str, sep: str) -> list[str]:
    """Split ``text`` on the single character ``sep``, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def strncmp(a: str | None, b: str | None, n: int) -> int:
    """Compare at most ``n`` characters of ``a`` and ``b``.

    Returns the difference of the first differing character codes, or 0.
    A missing string or a non-positive ``n`` compares equal.
    """
    if a is None or b is None or n < 1:
        return 0
    i = 0
    limit = n - 1
    while i < len(a) and i < len(b) and a[i] == b[i] and i < limit:
        i += 1
    return _code(a, i) - _code(b, i)


def strcmp(a: str | None, b: str | None) -> int:
    """Compare ``a`` and ``b``; a missing string compares equal."""
    if a is None or b is None:
        return 0
    i = 0
    while i < len(a) and i < len(b) and a[i] == b[i]:
        i += 1
    return _code(a, i) - _code(b, i)


def atoi(text: str | None) -> int:
    """Parse a leading decimal integer after optional whitespace and one sign."""
    if not text:
        return 0
    i = 0
    while i < len(text) and text[i] in _WHITESPACE:
        i += 1
    sign = 1
    if i < len(text) and text[i] in "+-":
        if text[i] == "-":
            sign = -1
        i += 1
    value = 0
    while i < len(text) and "0" <= text[i] <= "9":
        value = value * 10 + (ord(text[i]) - ord("0"))
        i += 1
    return sign * value


def is_name_char(ch: str) -> bool:
    """True for ASCII letters, digits and underscore."""
    return len(ch) == 1 and (ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ("0" <= ch <= "9"))


def strtrim(text: str, chars: str) -> str:
    """Strip every character of ``chars`` from both ends of ``text``."""
    return text.strip(chars)


def is_operator_char(ch: str) -> bool:
    """True for the shell operator characters ``|``, ``<`` and ``>``."""
    return ch in _OPERATOR_CHARS and len(ch) == 1