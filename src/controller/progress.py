"""Per-task mutable state: the interaction blacklist and the progress counter."""
from typing import Iterator, FrozenSet


class Blacklist:
    """
    Identities the task has already interacted with.

    Grows only. There is no remove(): once an object has been
    used it stays excluded for the rest of the task instance.
    """

    def __init__(self):
        self._ids: set = set()

    def add(self, identity: str) -> None:
        self._ids.add(identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def snapshot(self) -> FrozenSet[str]:
        return frozenset(self._ids)


class ProgressCounter:
    """Completed interactions. Starts at 0, only ever goes up by one."""

    def __init__(self):
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def increment(self) -> int:
        self._value += 1
        return self._value

    def reached(self, target: int) -> bool:
        return self._value >= target
