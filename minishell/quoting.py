"""Quote handling for words produced by the lexer."""

from __future__ import annotations

_QUOTES = "\"'"
_BLANKS = " \t"


def is_quote(ch: str) -> bool:
    """True for a single or double quote character."""
    return len(ch) == 1 and ch in _QUOTES


def _wrapped(text: str) -> bool:
    """True when ``text`` starts and ends with the same quote character."""
    return len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]


def remove_outer_quotes(text: str | None) -> str | None:
    """Drop every quote that opens or closes a quoted run.

    A quote of the other kind inside a quoted run is kept.
    """
    if not text:
        return text
    out = []
    current = None
    for ch in text:
        if ch in _QUOTES:
            if current is None:
                current = ch
                continue
            if ch == current:
                current = None
                continue
        out.append(ch)
    return "".join(out)


def should_trim_quotes(text: str | None) -> bool:
    """True when ``text`` is quoted and holds more than blanks."""
    if text is None or not _wrapped(text):
        return False
    return any(ch not in _BLANKS for ch in text[1:-1])


def has_attached_quotes(text: str) -> bool:
    """True when some quote touches a character other than a space."""
    for i, ch in enumerate(text):
        if ch not in _QUOTES:
            continue
        before = i > 0 and text[i - 1] != " "
        after = i + 1 < len(text) and text[i + 1] != " "
        if before or after:
            return True
    return False


def clean_word(text: str) -> str:
    """``text`` with every quote character removed."""
    return "".join(ch for ch in text if ch not in _QUOTES)


def is_empty_or_quoted_empty(text: str | None) -> bool:
    """True for an empty word, blanks only, or quotes around blanks only.

    A single character, even a blank, does not count as empty.
    """
    if not text:
        return True
    if len(text) < 2:
        return False
    inner = text[1:-1] if _wrapped(text) else text
    return all(ch in _BLANKS for ch in inner)


def clean_export_value(text: str) -> str:
    """Tidy the value part of a ``KEY=VALUE`` export argument.

    Matching outer quotes around the value are dropped, then every double
    quote in it. Text without ``=`` is returned unchanged.
    """
    key, sep, value = text.partition("=")
    if not sep:
        return text
    if value and value[0] in _QUOTES and value[-1] == value[0]:
        value = value[1:-1]
    return f"{key}={value.replace(chr(34), '')}"


def wrap_export_quotes(text: str) -> str:
    """Turn surrounding single quotes into double quotes, adding any missing."""
    if text[:1] == "'":
        text = text[1:]
    if text[:1] != '"':
        text = '"' + text
    if text[-1] == "'":
        text = text[:-1]
    if text[-1] != '"':
        text += '"'
    return text


def has_empty_quotes_at_start(text: str) -> bool:
    """True when ``text`` begins with two identical quote characters."""
    return len(text) >= 2 and text[0] == text[1] and text[0] in _QUOTES