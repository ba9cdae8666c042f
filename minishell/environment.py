"""The shell's environment: an ordered set of variables plus the last status."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def parse_entry(entry: str) -> tuple[str, str]:
    """Split ``NAME=value`` at the first ``=``; without one the value is empty."""
    name, sep, value = entry.partition("=")
    if not sep:
        return entry, ""
    return name, value


class Environment:
    """Ordered shell variables; a value of ``None`` marks an exported name with no value."""

    def __init__(self) -> None:
        self._vars: dict[str, str | None] = {}
        self.status = 0

    @classmethod
    def from_entries(cls, entries: Iterable[str]) -> Environment:
        """Build an environment from ``NAME=value`` strings, keeping their order."""
        env = cls()
        for entry in entries:
            name, value = parse_entry(entry)
            env.set(name, value)
        return env

    def get(self, name: str) -> str | None:
        """Return the value of ``name``, or ``None`` when it is not set."""
        return self._vars.get(name)

    def set(self, name: str, value: str | None) -> None:
        """Set ``name``; an existing variable keeps its position."""
        self._vars[name] = value

    def unset(self, name: str) -> None:
        """Remove ``name`` if present."""
        self._vars.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[tuple[str, str | None]]:
        """Yield ``(name, value)`` pairs in insertion order."""
        return iter(list(self._vars.items()))

    def to_list(self) -> list[str]:
        """Return the variables as ``NAME=value`` strings for a child process."""
        return [f"{name}={value or ''}" for name, value in self._vars.items()]

    def status_text(self) -> str:
        """Return the last exit status as text, the value of ``$?``."""
        return str(self.status)