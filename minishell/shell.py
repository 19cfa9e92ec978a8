"""The interactive loop of the shell."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Sequence
from contextlib import suppress
from typing import Any

from minishell.builtins import ShellExit
from minishell.environment import Environment
from minishell.execution import execute_command
from minishell.lexer import lex
from minishell.pipeline import execute_pipeline
from minishell.syntax import ShellSyntaxError
from minishell.tokens import CommandState, OperatorKind, Token

with suppress(ImportError):
    import readline  # noqa: F401  (line editing and history for input())

PROMPT = "minishell> "
ERROR = "\033[31mERROR\033[0m"

signal_received = 0


def _handle_sigint(signum: int, frame: Any) -> None:
    global signal_received
    signal_received = signum
    raise KeyboardInterrupt


def setup_signals() -> dict[int, Any]:
    """Interrupt the current line on SIGINT; ignore SIGQUIT and SIGTSTP.

    Returns the handlers that were installed before.
    """
    previous = {}
    for signum, handler in (
        (signal.SIGINT, _handle_sigint),
        (signal.SIGQUIT, signal.SIG_IGN),
        (signal.SIGTSTP, signal.SIG_IGN),
    ):
        previous[signum] = signal.signal(signum, handler)
    return previous


def handle_command_line(tokens: Sequence[Token], state: CommandState) -> None:
    """Run ``tokens`` as a pipeline when they hold a pipe, else as one command."""
    if any(token.kind is OperatorKind.PIPE for token in tokens):
        execute_pipeline(tokens, state)
    else:
        execute_command(tokens, state)


def run_line(line: str, state: CommandState) -> None:
    """Lex and run one input line; a syntax error is reported, not raised."""
    if not line:
        return
    try:
        tokens = lex(line, state.env, state)
    except ShellSyntaxError as exc:
        print(f"{exc.label} {ERROR} !")
        return
    if tokens:
        handle_command_line(tokens, state)


def main(argv: Sequence[str] | None = None) -> int:
    """Read and run lines until end of input or ``exit``; returns the exit status."""
    env = Environment.from_strings(f"{key}={value}" for key, value in os.environ.items())
    setup_signals()
    state = CommandState(env=env)
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            return 0
        except KeyboardInterrupt:
            sys.stdout.write("\n")
            continue
        try:
            run_line(line, state)
        except ShellExit as exc:
            return exc.status
        except KeyboardInterrupt:
            sys.stdout.write("\n")