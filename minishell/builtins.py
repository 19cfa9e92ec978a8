"""Commands the shell runs itself: cd, echo, env, exit, pwd and unset."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO

from minishell.environment import Environment
from minishell.textutils import atoi, is_name_char, split_on
from minishell.tokens import REDIRECTION_KINDS, CommandState, Token


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status: int) -> None:
        super().__init__(f"exit {status}")
        self.status = status


def _stdout(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def _error(message: str) -> None:
    sys.stderr.write(message)


def _update_pwd(env: Environment) -> None:
    """Record the old working directory in OLDPWD and the new one in PWD."""
    old = env.get("PWD")
    if old is not None:
        env.set("OLDPWD", old, front=True)
    try:
        cwd = os.getcwd()
    except OSError:
        return
    env.set("PWD", cwd, front=True)


def cd(line: str, state: CommandState) -> None:
    """Change directory to the single argument of ``line``, or to HOME."""
    env: Environment = state.env
    args = split_on(line, " ")
    if len(args) > 2:
        _error("cd: too many arguments\n")
        state.exit_status = 1
        return
    if len(args) > 1:
        target = args[1]
    else:
        target = env.get("HOME")
        if target is None:
            _error("cd: HOME not set\n")
            state.exit_status = 1
            return
    try:
        os.chdir(target)
    except OSError as exc:
        _error(f"cd: {exc.strerror}\n")
        state.exit_status = 1
        return
    _update_pwd(env)
    state.exit_status = 0


def _is_n_flag(value: str | None) -> bool:
    """True for ``-n``, ``-nn``, ``-nnn`` and so on."""
    return bool(value) and value.startswith("-n") and set(value[1:]) == {"n"}


def echo(tokens: Sequence[Token], out: TextIO | None = None) -> None:
    """Print the words after ``echo``, skipping redirections and ``-n`` flags.

    Leading ``-n`` flags suppress the final newline.
    """
    out = _stdout(out)
    start = next((i for i, token in enumerate(tokens) if token.value == "echo"), None)
    if start is None or start + 1 >= len(tokens):
        out.write("\n")
        return
    rest = tokens[start + 1 :]
    newline = not _is_n_flag(rest[0].value)
    words = []
    i = 0
    while i < len(rest):
        token = rest[i]
        if token.kind in REDIRECTION_KINDS:
            i += 2
            continue
        if not _is_n_flag(token.value):
            words.append(token.value)
        i += 1
    out.write(" ".join(words))
    if newline:
        out.write("\n")


def print_env(env: Environment, out: TextIO | None = None) -> None:
    """Print ``KEY=VALUE`` for every variable that has a value."""
    out = _stdout(out)
    for key, value in env.items():
        if value is not None:
            out.write(f"{key}={value}\n")


def _is_number(text: str) -> bool:
    digits = text[1:] if text[:1] in "+-" else text
    return bool(digits) and all("0" <= ch <= "9" for ch in digits)


def exit_shell(line: str, state: CommandState, out: TextIO | None = None) -> None:
    """Leave the shell by raising ShellExit.

    With too many arguments nothing is raised and the exit status becomes 1.
    """
    out = _stdout(out)
    args = split_on(line, " ")
    out.write("exit\n")
    if len(args) < 2:
        raise ShellExit(state.exit_status)
    if not _is_number(args[1]):
        _error(f"minishell: exit: {args[1]}: numeric argument required\n")
        raise ShellExit(2)
    if len(args) > 2:
        _error("minishell: exit: too many arguments\n")
        state.exit_status = 1
        return
    raise ShellExit(atoi(args[1]) & 0xFF)


def pwd(out: TextIO | None = None) -> None:
    """Print the current working directory."""
    out = _stdout(out)
    try:
        cwd = os.getcwd()
    except OSError as exc:
        _error(f"pwd: {exc.strerror}\n")
        return
    out.write(f"{cwd}\n")


def _is_unset_identifier(text: str) -> bool:
    return bool(text) and not ("0" <= text[0] <= "9") and all(is_name_char(ch) for ch in text)


def unset(line: str, state: CommandState) -> int:
    """Remove the variables named in ``line``; returns the exit status."""
    env: Environment = state.env
    status = 0
    for arg in split_on(line, " ")[1:]:
        if not _is_unset_identifier(arg):
            _error(f"minishell: unset: `{arg}': not a valid identifier\n")
            status = 1
        else:
            env.unset(arg)
    state.exit_status = status
    return status