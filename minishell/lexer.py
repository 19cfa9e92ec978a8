"""Turn an input line into the tokens the executor runs."""

from __future__ import annotations

from dataclasses import replace

from minishell.environment import Environment
from minishell.expansion import expand
from minishell.quoting import (
    clean_export_value,
    clean_word,
    has_attached_quotes,
    is_empty_or_quoted_empty,
    remove_outer_quotes,
    should_trim_quotes,
    wrap_export_quotes,
)
from minishell.splitter import split_mini
from minishell.syntax import ShellSyntaxError, check_input
from minishell.tokens import CommandState, OperatorKind, Token, kind_for

_QUOTES = "'\""


def is_command_word(text: str | None, name: str) -> bool:
    """True when ``text`` spells ``name`` once its quotes are removed."""
    if text is None:
        return False
    return clean_word(remove_outer_quotes(text)) == name


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into word and operator tokens.

    Empty words are kept: the token list records no link back to the
    previous token, so every token counts as one that must be preserved.
    """
    return [Token(word, kind_for(word)) for word in split_mini(text)]


def drop_empty_tokens(tokens: list[Token]) -> list[Token]:
    """Drop empty words that follow another word.

    The first token, and empty words right after an operator, are kept.
    """
    kept: list[Token] = []
    for token in tokens:
        if kept and kept[-1].kind is OperatorKind.NONE and is_empty_or_quoted_empty(token.value):
            continue
        kept.append(token)
    return kept


def trim_export_word(value: str) -> str:
    """Tidy one argument of ``export`` and wrap it in double quotes."""
    value = clean_export_value(value)
    seen_equals = False
    i = 0
    while i + 1 < len(value):
        if value[i] == "=":
            seen_equals = True
        if seen_equals and value[i] == "'" and value[i + 1] == "'":
            value = value[: i + 1] + value[i + 2 :]
        i += 1
    return wrap_export_quotes(value)


def trim_all(tokens: list[Token]) -> list[Token]:
    """Strip quotes from words; arguments of ``export`` are tidied instead."""
    result: list[Token] = []
    in_export = False
    for token in tokens:
        value = token.value
        if is_command_word(value, "export"):
            value = clean_word(value)
            in_export = True
        elif token.kind is OperatorKind.PIPE:
            in_export = False
        elif in_export:
            value = trim_export_word(value)
        elif has_attached_quotes(value) or should_trim_quotes(value):
            value = remove_outer_quotes(value)
        result.append(replace(token, value=value))
    return result


def _quote(token: Token) -> Token:
    if token.kind is OperatorKind.NONE and token.value[:1] not in _QUOTES:
        return replace(token, value=f'"{token.value}"')
    return token


def quote_arguments(tokens: list[Token]) -> list[Token]:
    """Wrap in double quotes the word after ``cat``, ``ls`` and ``<``,
    and after ``>`` unless the command is ``echo``."""
    result = list(tokens)
    in_echo = False
    for index, token in enumerate(result):
        value = token.value
        has_next = index + 1 < len(result)
        if value == "echo":
            in_echo = True
        if has_next and (value in ("cat", "ls", "<") or (value == ">" and not in_echo)):
            result[index + 1] = _quote(result[index + 1])
        if value == "|":
            in_echo = False
    return result


def merge_commands(tokens: list[Token]) -> list[Token]:
    """Join the words of each command into one token, keeping pipes apart.

    Once an ``echo`` word is seen, the words of that command stay separate
    tokens so that ``echo`` can handle its own redirections.
    """
    if not tokens:
        return []
    result: list[Token] = []
    start = 0
    in_echo = False
    last = len(tokens) - 1
    for index, token in enumerate(tokens):
        if is_command_word(token.value, "echo"):
            in_echo = True
        is_pipe = token.kind is OperatorKind.PIPE
        if is_pipe or (index == last and not in_echo):
            if not in_echo:
                command = ""
                for position in range(start, index):
                    if position != 0:
                        command += " "
                    command += tokens[position].value
                if index == last and not is_pipe:
                    if start != 0 or command:
                        command += " "
                    command += token.value
                result.append(Token(command, OperatorKind.NONE))
            if is_pipe:
                result.append(Token("|", OperatorKind.PIPE))
            start = index + 1
            in_echo = False
        elif in_echo:
            result.append(Token(token.value, token.kind))
            start = index + 1
    return result or list(tokens)


def lex(text: str, env: Environment, state: CommandState) -> list[Token]:
    """Check, expand and tokenize one input line.

    Raises ShellSyntaxError for an unclosed quote or a misplaced operator,
    after setting the state's exit status to 2.
    """
    try:
        check_input(text)
    except ShellSyntaxError as exc:
        state.exit_status = exc.exit_status
        raise
    expanded = expand(text, env, state.exit_status)
    tokens = tokenize(expanded)
    tokens = trim_all(tokens)
    tokens = quote_arguments(tokens)
    return merge_commands(tokens)