"""Finding and running commands that are not builtins."""

from __future__ import annotations

import os
import subprocess
import sys

from minishell.environment import Environment
from minishell.quoting import remove_outer_quotes
from minishell.textutils import split_on, strncmp
from minishell.tokens import CommandState

_QUOTES = "'\""


def path_variable(env: Environment | None) -> str | None:
    """Value of the first variable whose name starts with ``PATH``."""
    if env is None:
        return None
    for key, value in env.items():
        if key.startswith("PATH"):
            return value
    return None


def join_path(directory: str, cmd: str) -> str:
    """``directory`` and ``cmd`` joined by a slash."""
    return f"{directory}/{cmd}"


def find_command_path(cmd: str | None, env: Environment | None) -> str | None:
    """Locate ``cmd``; names starting with ``/`` or ``.`` are used as given."""
    if not cmd:
        return None
    if cmd[0] in "/.":
        return cmd
    search = path_variable(env)
    if search is None:
        return None
    for directory in split_on(search, ":"):
        candidate = join_path(directory, cmd)
        if os.access(candidate, os.F_OK | os.X_OK):
            return candidate
    return None


def extract_word(text: str, start: int, sep: str) -> tuple[str, int]:
    """Word starting at ``start``, ending at ``sep`` outside quotes.

    Returns the word, quotes kept, and the index just past it.
    """
    quote: str | None = None
    i = start
    while i < len(text) and (text[i] != sep or quote is not None):
        ch = text[i]
        if ch in _QUOTES and quote is None:
            quote = ch
        elif ch == quote:
            quote = None
        i += 1
    return text[start:i], i


def split_outside_quotes(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep`` except inside quotes; empty pieces are dropped."""
    words = []
    i = 0
    while i < len(text):
        while i < len(text) and text[i] == sep:
            i += 1
        if i < len(text):
            word, i = extract_word(text, i, sep)
            words.append(word)
    return words


def command_not_found(cmd: str) -> int:
    """Report ``cmd`` as not found and return status 127."""
    sys.stderr.write(f"{cmd}: command not found\n")
    return 127


def _command_args(line: str) -> list[str]:
    first = line.partition(" ")[0]
    if strncmp(first, "cat", 3) == 0 or strncmp(first, "ls", 3) == 0:
        args = split_outside_quotes(line, " ")
    else:
        args = split_on(line, " ")
    if len(args) > 1:
        args[1] = remove_outer_quotes(args[1])
    return args


def run_external(line: str, state: CommandState) -> int:
    """Run the program named by the first word of ``line`` and wait for it.

    Returns its exit status: 127 when it cannot be found or started, 126
    when it may not be executed, and 1 when it was killed by a signal.
    """
    args = _command_args(line)
    env: Environment | None = state.env
    if not args:
        return command_not_found("")
    cmd_path = find_command_path(args[0], env)
    if cmd_path is None:
        return command_not_found(args[0])
    child_env = {} if env is None else {key: value for key, value in env.items() if value is not None}
    sys.stdout.flush()
    try:
        completed = subprocess.run(args, executable=cmd_path, env=child_env, check=False)
    except PermissionError as exc:
        sys.stderr.write(f"{args[0]}: {exc.strerror}\n")
        return 126
    except OSError as exc:
        sys.stderr.write(f"{args[0]}: {exc.strerror}\n")
        return 127
    if completed.returncode < 0:
        return 1
    return completed.returncode