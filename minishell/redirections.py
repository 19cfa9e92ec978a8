"""Input and output redirection, here-documents included."""

from __future__ import annotations

import itertools
import os
import sys
import tempfile
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager, suppress

from minishell.quoting import remove_outer_quotes
from minishell.tokens import CommandState, OperatorKind, Token

Reader = Callable[[str], "str | None"]

_REDIRECTION_WORDS = frozenset({"<", ">", ">>", "<<"})
_heredoc_counter = itertools.count()


class RedirectionError(Exception):
    """Raised when a redirection cannot be set up; the message is shell-ready."""


def _read_line(prompt: str) -> str | None:
    """Read one line from the terminal, or None at end of input."""
    try:
        return input(prompt)
    except EOFError:
        return None


def _report(exc: RedirectionError) -> None:
    sys.stderr.write(f"{exc}\n")


def redirect_output(filename: str, append: bool) -> None:
    """Point standard output at ``filename``, truncating unless ``append``."""
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    try:
        fd = os.open(filename, flags, 0o644)
    except OSError as exc:
        raise RedirectionError(f"minishell: {filename}: {exc.strerror}") from exc
    try:
        sys.stdout.flush()
        os.dup2(fd, 1)
    except OSError as exc:
        raise RedirectionError(f"minishell: {exc.strerror}") from exc
    finally:
        os.close(fd)


def redirect_input(filename: str) -> None:
    """Point standard input at ``filename``."""
    try:
        fd = os.open(filename, os.O_RDONLY)
    except OSError as exc:
        raise RedirectionError(f"minishell: {filename}: {exc.strerror}") from exc
    try:
        os.dup2(fd, 0)
    except OSError as exc:
        raise RedirectionError(f"minishell: {exc.strerror}") from exc
    finally:
        os.close(fd)


def temp_heredoc_name() -> str:
    """A fresh path for a here-document's temporary file."""
    return os.path.join(tempfile.gettempdir(), f"minishell_heredoc_{next(_heredoc_counter)}")


def heredoc(delimiter: str, reader: Reader | None = None) -> None:
    """Read lines up to ``delimiter`` and make them standard input.

    ``reader`` is called with the prompt and returns a line, or None at end
    of input, which ends the document with a warning.
    """
    reader = _read_line if reader is None else reader
    if not delimiter:
        raise RedirectionError("minishell: heredoc: delimiter cannot be empty")
    filename = temp_heredoc_name()
    try:
        fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    except OSError as exc:
        raise RedirectionError(f"minishell: heredoc: {exc.strerror}") from exc
    try:
        try:
            with open(fd, "w", encoding="utf-8") as document:
                while True:
                    line = reader("> ")
                    if line is None:
                        sys.stderr.write("minishell: warning: here-document delimited by EOF\n")
                        break
                    if line == delimiter:
                        break
                    document.write(f"{line}\n")
        except OSError as exc:
            raise RedirectionError(f"minishell: heredoc: write error: {exc.strerror}") from exc
        try:
            redirect_input(filename)
        except RedirectionError as exc:
            raise RedirectionError(f"minishell: heredoc: failed to redirect input: {exc}") from exc
    finally:
        with suppress(OSError):
            os.unlink(filename)


def _input_from_words(parts: Sequence[str], i: int, state: CommandState) -> None:
    j = i + 1
    while j < len(parts) and parts[j] not in _REDIRECTION_WORDS:
        j += 1
    target = parts[j - 1]
    state.input_file = target
    redirect_input(remove_outer_quotes(target))


def _append_from_words(target: str, state: CommandState) -> None:
    try:
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o644)
    except OSError as exc:
        raise RedirectionError(f"minishell: {target}: Permission denied") from exc
    os.close(fd)
    state.output_file = target
    redirect_output(target, True)


def _process_word(parts: Sequence[str], i: int, state: CommandState, reader: Reader | None) -> None:
    word = parts[i]
    if word not in _REDIRECTION_WORDS or i + 1 >= len(parts):
        return
    target = parts[i + 1]
    if word == "<":
        _input_from_words(parts, i, state)
    elif word == "<<":
        state.delimiter = target
        state.heredoc_flag = True
        heredoc(target, reader)
    elif word == ">":
        state.output_file = remove_outer_quotes(target)
        redirect_output(state.output_file, False)
    else:
        _append_from_words(target, state)


def apply_word_redirections(
    parts: Sequence[str], state: CommandState, reader: Reader | None = None
) -> bool:
    """Apply every redirection among the words of a command.

    Returns whether the command should still run. When a redirection fails
    the exit status becomes 1 and the result is true only if the failing
    word comes right after ``>`` or ``>>``.
    """
    for i in range(len(parts)):
        try:
            _process_word(parts, i, state, reader)
        except RedirectionError as exc:
            _report(exc)
            state.exit_status = 1
            return i > 0 and parts[i - 1] in (">", ">>")
    return True


def _process_token(token: Token, target: Token, state: CommandState, reader: Reader | None) -> None:
    if token.kind is OperatorKind.REDIR_RIGHT:
        state.output_file = target.value
        redirect_output(target.value, False)
    elif token.kind is OperatorKind.REDIR_2RIGHT:
        state.output_file = target.value
        redirect_output(target.value, True)
    elif token.kind is OperatorKind.REDIR_LEFT:
        state.input_file = target.value
        target.value = remove_outer_quotes(target.value)
        redirect_input(target.value)
    elif token.kind is OperatorKind.REDIR_2LEFT:
        state.delimiter = target.value
        state.heredoc_flag = True
        heredoc(target.value, reader)


def apply_token_redirections(
    tokens: Sequence[Token], state: CommandState, reader: Reader | None = None
) -> bool:
    """Apply the redirection tokens of a command.

    The word after ``<`` loses its quotes in place. Returns false, with the
    exit status set to 1, when a redirection fails.
    """
    for token, target in zip(tokens, tokens[1:]):
        try:
            _process_token(token, target, state, reader)
        except RedirectionError as exc:
            _report(exc)
            state.exit_status = 1
            return False
    return True


@contextmanager
def saved_std_streams() -> Iterator[None]:
    """Restore standard input and output on leaving the block."""
    sys.stdout.flush()
    saved_out = os.dup(1)
    saved_in = os.dup(0)
    try:
        yield
    finally:
        with suppress(OSError, ValueError):
            sys.stdout.flush()
        os.dup2(saved_out, 1)
        os.dup2(saved_in, 0)
        os.close(saved_out)
        os.close(saved_in)