"""Running one command: builtins, redirections and external programs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from minishell.builtins import cd, echo, exit_shell, print_env, pwd, unset
from minishell.commands import run_external, split_outside_quotes
from minishell.export import export
from minishell.lexer import is_command_word
from minishell.redirections import (
    apply_token_redirections,
    apply_word_redirections,
    saved_std_streams,
)
from minishell.textutils import split_on, strncmp
from minishell.tokens import CommandState, Token

# Builtin names and how many leading characters of a command are compared.
_BUILTINS = (
    ("cd", 2),
    ("pwd", 3),
    ("echo", 4),
    ("env", 3),
    ("exit", 4),
    ("export", 6),
    ("unset", 5),
)
_REDIRECTION_WORDS = frozenset({">", ">>", "<", "<<"})


def _builtin_name(cmd: str | None) -> str | None:
    """Name of the builtin ``cmd`` selects, matched on its leading characters."""
    if cmd is None:
        return None
    for name, length in _BUILTINS:
        if strncmp(cmd, name, length) == 0:
            return name
    return None


def is_builtin(cmd: str | None) -> bool:
    """True when ``cmd`` starts with the name of a builtin."""
    return _builtin_name(cmd) is not None


def run_builtin(
    cmd: str | None,
    tokens: Sequence[Token],
    state: CommandState,
    out: TextIO | None = None,
) -> None:
    """Run the builtin selected by ``cmd``.

    ``echo`` receives the whole token list; every other builtin reads its
    arguments from the value of the first token.
    """
    name = _builtin_name(cmd)
    if name is None:
        return
    line = tokens[0].value if tokens else ""
    if name == "cd":
        cd(line, state)
    elif name == "pwd":
        pwd(out)
    elif name == "echo":
        echo(tokens, out)
    elif name == "env":
        print_env(state.env, out)
    elif name == "exit":
        exit_shell(line, state, out)
    elif name == "export":
        export(line, state, out)
    else:
        unset(line, state)


def build_command_string(parts: Sequence[str]) -> str:
    """The words of ``parts`` before the first redirection, joined by spaces."""
    words = []
    for part in parts:
        if part in _REDIRECTION_WORDS:
            break
        words.append(part)
    return " ".join(words)


def _reset(state: CommandState) -> None:
    state.input_file = None
    state.output_file = None
    state.delimiter = None
    state.heredoc_flag = False
    state.exit_status = 0


def execute_command(tokens: Sequence[Token], state: CommandState) -> None:
    """Run one command, applying its redirections for its duration only.

    The state's redirection details and exit status are cleared first; the
    exit status is then set by the command that runs.
    """
    _reset(state)
    if not tokens:
        return
    with saved_std_streams():
        first = tokens[0].value
        if is_command_word(first, "cat"):
            parts = split_on(first, " ")
        else:
            parts = split_outside_quotes(first, " ")
        if parts and parts[0] == "echo":
            if apply_token_redirections(tokens, state):
                run_builtin(parts[0], tokens, state)
            return
        if not apply_word_redirections(parts, state):
            return
        command = Token(build_command_string(parts))
        cmd = parts[0] if parts else None
        if is_builtin(cmd):
            run_builtin(cmd, [command], state)
        else:
            state.exit_status = run_external(command.value, state)