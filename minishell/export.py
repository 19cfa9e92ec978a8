"""The ``export`` builtin."""

from __future__ import annotations

import sys
from typing import TextIO

from minishell.environment import Environment
from minishell.quoting import remove_outer_quotes
from minishell.splitter import split_mini
from minishell.textutils import is_name_char
from minishell.tokens import CommandState


def is_valid_identifier(text: str | None) -> bool:
    """True when the name part of ``text`` (before ``=``) is a valid identifier."""
    if not text:
        return False
    first = text[0]
    if not (first == "_" or ("a" <= first <= "z") or ("A" <= first <= "Z")):
        return False
    name = text.partition("=")[0]
    return all(is_name_char(ch) for ch in name)


def set_variable(arg: str, env: Environment) -> None:
    """Apply one ``KEY=VALUE`` or ``KEY`` argument to ``env``.

    A bare ``KEY`` adds a variable without a value unless it already exists.
    """
    key, sep, value = arg.partition("=")
    if not sep:
        if arg not in env:
            env.set(arg, None)
        return
    env.set(key, value)


def process_export_arg(arg: str, state: CommandState) -> None:
    """Unquote ``arg`` and export it, reporting an invalid name."""
    unquoted = remove_outer_quotes(arg)
    if unquoted is None:
        return
    if is_valid_identifier(unquoted):
        set_variable(unquoted, state.env)
    else:
        sys.stderr.write(f"minishell: export: '{unquoted}': not a valid identifier\n")
        state.exit_status = 1


def _print_exported(env: Environment, out: TextIO) -> None:
    for key, value in env.items():
        if value is None:
            out.write(f"export {key}\n")
        else:
            out.write(f'export {key}="{value}"\n')


def export(line: str, state: CommandState, out: TextIO | None = None) -> None:
    """Export the arguments of ``line``, or list every variable when there are none."""
    out = sys.stdout if out is None else out
    args = split_mini(line)
    if len(args) < 2:
        _print_exported(state.env, out)
        return
    for arg in args[1:]:
        process_export_arg(arg, state)