"""Token kinds, tokens and the per-command state of the shell."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


class OperatorKind(IntEnum):
    """What a token stands for."""

    NONE = 0
    REDIR_LEFT = 1
    REDIR_RIGHT = 2
    REDIR_2LEFT = 3
    REDIR_2RIGHT = 4
    PIPE = 5


REDIRECTION_KINDS = frozenset(
    {
        OperatorKind.REDIR_LEFT,
        OperatorKind.REDIR_RIGHT,
        OperatorKind.REDIR_2LEFT,
        OperatorKind.REDIR_2RIGHT,
    }
)

_KIND_BY_WORD = {
    "|": OperatorKind.PIPE,
    "<": OperatorKind.REDIR_LEFT,
    ">": OperatorKind.REDIR_RIGHT,
    "<<": OperatorKind.REDIR_2LEFT,
    ">>": OperatorKind.REDIR_2RIGHT,
}


def kind_for(word: str) -> OperatorKind:
    """Kind of a word produced by the splitter."""
    return _KIND_BY_WORD.get(word, OperatorKind.NONE)


@dataclass
class Token:
    """One lexical unit: a word or an operator."""

    value: str
    kind: OperatorKind = OperatorKind.NONE


@dataclass
class CommandState:
    """Redirection details and exit status of the command being run."""

    env: Any = None
    input_file: str | None = None
    output_file: str | None = None
    delimiter: str | None = None
    heredoc_flag: bool = False
    exit_status: int = 0