"""The shell's ordered table of environment variables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Environment:
    """Ordered mapping of variable names to values.

    A variable may exist without a value (``export NAME``); such variables
    are listed but left out of the environment handed to child processes.
    """

    def __init__(self) -> None:
        self._vars: dict[str, str | None] = {}

    @classmethod
    def from_strings(cls, entries: Iterable[str]) -> Environment:
        """Build an environment from ``KEY=VALUE`` strings, in order.

        An entry without ``=`` becomes a variable without a value.
        """
        env = cls()
        for entry in entries:
            key, sep, value = entry.partition("=")
            env._vars[key] = value if sep else None
        return env

    def get(self, key: str) -> str | None:
        """Value of ``key``, or None when it is unset or has no value."""
        return self._vars.get(key)

    def set(self, key: str, value: str | None, *, front: bool = False) -> None:
        """Set ``key`` to ``value``.

        An existing variable keeps its place; a new one is appended, or put
        first when ``front`` is true.
        """
        if key in self._vars or not front:
            self._vars[key] = value
        else:
            self._vars = {key: value, **self._vars}

    def unset(self, key: str) -> bool:
        """Remove the first variable whose name starts with ``key``.

        Returns whether a variable was removed.
        """
        for name in self._vars:
            if name.startswith(key):
                del self._vars[name]
                return True
        return False

    def items(self) -> list[tuple[str, str | None]]:
        """Pairs of name and value, in order."""
        return list(self._vars.items())

    def to_envp(self) -> list[str]:
        """``KEY=VALUE`` strings for every variable that has a value."""
        return [f"{key}={value}" for key, value in self._vars.items() if value is not None]

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._vars))

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self._vars!r})"