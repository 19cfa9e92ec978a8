# minishell

A small interactive command shell for POSIX systems. It reads lines at a
`minishell> ` prompt, expands variables, splits the line into commands and
runs them. It supports:

- single and double quotes; `$NAME` is not expanded inside single quotes
- `$NAME` and `$?` (the exit status of the last command); an unset variable
  expands to nothing
- pipes: `ls | grep py | wc -l`, each command running in its own forked process
- redirections: `<`, `>`, `>>`, and here-documents with `<<`
- the builtins `echo` (with `-n`), `cd`, `pwd`, `env`, `export`, `unset` and `exit`
- every other command is looked up in `PATH` (names starting with `/` or `.`
  are used as given) and run as a child process

## Installing

```
pip install .
```

## Running

```
minishell
```

The shell starts with a copy of the current process environment. Leave it
with `exit [status]` or end-of-file (Ctrl-D). Ctrl-C abandons the current
line and shows a fresh prompt. Quit and stop signals are ignored.

Lines with an unclosed quote are rejected with `Syntax ERROR !`, and lines
with a misplaced operator, such as a trailing `|` or `> >`, with
`OPE ERROR !` (the word ERROR is printed in red). Both set the exit status
to 2.

A command that cannot be found prints `<name>: command not found` and sets
the exit status to 127; a program that may not be executed gives 126.

## Using it from Python

The shell can also be driven one line at a time:

```python
from minishell.environment import Environment
from minishell.tokens import CommandState
from minishell.shell import run_line

state = CommandState(env=Environment.from_strings(["HOME=/tmp", "PATH=/usr/bin:/bin"]))
run_line("export GREETING=hello", state)
run_line("echo $GREETING > /tmp/greeting.txt", state)
print(state.exit_status)
```

`run_line` reports syntax errors itself; running `exit` raises
`minishell.builtins.ShellExit`, whose `status` attribute holds the exit
status.

Other entry points:

- `minishell.lexer.lex(text, env, state)` turns a line into a list of
  `minishell.tokens.Token` without running it, raising
  `minishell.syntax.ShellSyntaxError` for a bad line.
- `minishell.expansion.expand(text, env, exit_status)` does variable
  expansion on its own.
- `minishell.environment.Environment` is the ordered variable table, with
  `get`, `set`, `unset`, `to_envp` and `from_strings`.

## What it does not do

This is a deliberately small shell. It has no `;`, `&&`, `||`, background
jobs, subshells, globbing, aliases, scripts or history file. Builtins are
recognised by the leading characters of the command name, and `unset NAME`
removes the first variable whose name starts with `NAME`. Pipelines rely on
`fork`, so the shell does not run on Windows.

## Tests

```
pip install .[test]
pytest
```