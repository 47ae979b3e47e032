"""
Option memory - what the player picked at each named prompt.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional


class _Unset:
    """Sentinel for a prompt that has not been answered yet."""

    _instance: Optional[_Unset] = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


class OptionMemory:
    """
    Mapping of option name -> last selected 0-based index (or UNSET).

    Choice branches test thresholds, which count labels from 1: threshold n
    matches a recorded index of n - 1. Names that were never declared are
    treated as UNSET.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._selected: dict[str, int | _Unset] = {name: UNSET for name in names}

    def declare(self, name: str) -> None:
        self._selected.setdefault(name, UNSET)

    def record(self, name: str, index: int) -> None:
        self._selected[name] = index

    def get(self, name: str) -> int | _Unset:
        return self._selected.get(name, UNSET)

    def matches(self, name: str, threshold: int) -> bool:
        """True if the option's recorded choice is the threshold-th label."""
        selected = self.get(name)
        return selected is not UNSET and selected + 1 == threshold

    def snapshot(self) -> dict[str, Optional[int]]:
        """Plain dict copy, None for unanswered prompts."""
        return {
            name: (None if value is UNSET else value)
            for name, value in self._selected.items()
        }

    def __contains__(self, name: object) -> bool:
        return name in self._selected

    def __iter__(self) -> Iterator[str]:
        return iter(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __repr__(self) -> str:
        return f"OptionMemory({self.snapshot()!r})"
