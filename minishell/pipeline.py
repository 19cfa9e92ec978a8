"""Running commands joined by pipes, each in its own process."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from contextlib import suppress
from typing import NoReturn

from minishell.builtins import ShellExit
from minishell.execution import execute_command
from minishell.tokens import CommandState, OperatorKind, Token


def count_commands(tokens: Sequence[Token]) -> int:
    """One more than the number of pipe tokens."""
    return 1 + sum(1 for token in tokens if token.kind is OperatorKind.PIPE)


def command_segments(tokens: Sequence[Token]) -> list[list[Token]]:
    """The tokens of each command between pipes.

    Nothing after a trailing pipe counts as a command.
    """
    segments: list[list[Token]] = [[]]
    for token in tokens:
        if token.kind is OperatorKind.PIPE:
            segments.append([])
        else:
            segments[-1].append(token)
    if len(segments) > 1 and not segments[-1]:
        segments.pop()
    return segments


def _close_all(pipes: Sequence[tuple[int, int]]) -> None:
    for read_end, write_end in pipes:
        with suppress(OSError):
            os.close(read_end)
        with suppress(OSError):
            os.close(write_end)


def _run_child(
    index: int,
    segment: Sequence[Token],
    pipes: Sequence[tuple[int, int]],
    state: CommandState,
) -> NoReturn:
    status = 1
    try:
        if index > 0:
            os.dup2(pipes[index - 1][0], 0)
        if index < len(pipes):
            os.dup2(pipes[index][1], 1)
        _close_all(pipes)
        try:
            execute_command(segment, state)
            status = state.exit_status
        except ShellExit as exc:
            status = exc.status
    finally:
        with suppress(Exception):
            sys.stdout.flush()
            sys.stderr.flush()
        os._exit(status)


def _status_of(wait_status: int) -> int | None:
    if os.WIFEXITED(wait_status):
        return os.WEXITSTATUS(wait_status)
    if os.WIFSIGNALED(wait_status):
        return 128 + os.WTERMSIG(wait_status)
    return None


def execute_pipeline(tokens: Sequence[Token], state: CommandState) -> None:
    """Run each command in a child process, chained by pipes.

    The exit status becomes that of the last command: its exit code, or
    128 plus the signal number when a signal ended it.
    """
    segments = command_segments(tokens)
    pipe_count = count_commands(tokens) - 1
    pipes: list[tuple[int, int]] = []
    try:
        for _ in range(pipe_count):
            pipes.append(os.pipe())
    except OSError as exc:
        _close_all(pipes)
        sys.stderr.write(f"pipe: {exc.strerror}\n")
        sys.stderr.write("minishell: memory allocation error\n")
        return
    sys.stdout.flush()
    sys.stderr.flush()
    pids: list[int] = []
    for index, segment in enumerate(segments):
        try:
            pid = os.fork()
        except OSError as exc:
            sys.stderr.write(f"fork: {exc.strerror}\n")
            break
        if pid == 0:
            _run_child(index, segment, pipes, state)
        pids.append(pid)
    _close_all(pipes)
    last = len(segments) - 1
    for index, pid in enumerate(pids):
        _, wait_status = os.waitpid(pid, 0)
        if index == last:
            status = _status_of(wait_status)
            if status is not None:
                state.exit_status = status