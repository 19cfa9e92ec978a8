"""Checks run on a raw input line before it is tokenized."""

from __future__ import annotations

_QUOTES = "'\""
_FORBIDDEN_AFTER_REDIRECTION = "<|>"


class ShellSyntaxError(Exception):
    """Raised for a line the shell refuses to run."""

    exit_status = 2

    def __init__(self, label: str, message: str) -> None:
        super().__init__(message)
        self.label = label


def has_unclosed_quote(text: str) -> bool:
    """True when a quote in ``text`` is never closed."""
    quote = None
    for ch in text:
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
    return quote is not None


def _skip_spaces(text: str, i: int) -> int:
    while i < len(text) and text[i] == " ":
        i += 1
    return i


def is_valid_pipe(text: str) -> bool:
    """``text`` starts at a pipe; it must be followed by something other than a pipe."""
    i = _skip_spaces(text, 1)
    return i < len(text) and text[i] != "|"


def is_valid_redirection(text: str, symbol: str) -> bool:
    """``text`` starts at ``symbol`` (``<`` or ``>``).

    At most two symbols in a row, followed by a word rather than another
    operator or the end of the line.
    """
    if symbol not in ("<", ">"):
        raise ValueError(f"not a redirection symbol: {symbol!r}")
    i = 1
    count = 1
    while i < len(text) and text[i] == symbol:
        count += 1
        i += 1
    i = _skip_spaces(text, i)
    if i >= len(text) or text[i] in _FORBIDDEN_AFTER_REDIRECTION:
        return False
    return count <= 2


def operators_valid(text: str) -> bool:
    """True when every operator outside quotes is well placed."""
    quote = None
    for i, ch in enumerate(text):
        if ch in _QUOTES:
            if quote is None:
                quote = ch
            elif ch == quote:
                quote = None
            continue
        if quote is not None:
            continue
        if ch == "|":
            ok = is_valid_pipe(text[i:])
        elif ch in "<>":
            ok = is_valid_redirection(text[i:], ch)
        else:
            continue
        if not ok:
            return False
    return True


def check_input(text: str) -> None:
    """Raise ShellSyntaxError when ``text`` has an unclosed quote or a bad operator."""
    if has_unclosed_quote(text):
        raise ShellSyntaxError("Syntax", "unclosed quote")
    if not operators_valid(text):
        raise ShellSyntaxError("OPE", "invalid operator")