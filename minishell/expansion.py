"""Expansion of ``$NAME`` and ``$?`` in an input line."""

from __future__ import annotations

from minishell.environment import Environment
from minishell.textutils import is_name_char

_QUOTES = "'\""


def replace_range(text: str, start: int, end: int, replacement: str) -> str:
    """``text`` with the characters from ``start`` up to ``end`` replaced."""
    return text[:start] + replacement + text[end:]


def _expand_variable(text: str, dollar: int, env: Environment) -> tuple[str, int]:
    """Expand the variable whose ``$`` sits at ``dollar``.

    Returns the new text and the index where scanning resumes. When the
    value is longer than the name it replaces, scanning resumes inside the
    value, where the name used to end.
    """
    name_start = dollar + 1
    i = name_start
    while i < len(text) and is_name_char(text[i]):
        i += 1
    if i == name_start:
        return text, i
    value = env.get(text[name_start:i]) or ""
    result = text[:dollar] + value + text[i:]
    if len(result) < len(text):
        i -= len(text) - len(result)
    return result, i


def expand(text: str, env: Environment, exit_status: int) -> str:
    """Replace ``$?`` and ``$NAME`` outside single quotes.

    ``$?`` becomes ``exit_status``; a variable that is unset or has no value
    expands to nothing; a ``$`` not followed by a name is left alone.
    """
    i = 0
    quote: str | None = None
    while i < len(text):
        ch = text[i]
        if ch in _QUOTES and quote is None:
            quote = ch
        elif ch == quote:
            quote = None
        elif ch == "$" and quote != "'":
            if text[i + 1 : i + 2] == "?":
                status = str(exit_status)
                text = replace_range(text, i, i + 2, status)
                i += len(status) - 1
            else:
                text, i = _expand_variable(text, i, env)
            continue
        i += 1
    return text