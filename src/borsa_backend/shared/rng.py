"""Seedable random helpers used across the game logic."""

from __future__ import annotations

from collections.abc import Iterable, Sequence  # noqa: TC003
from random import Random
from typing import TypeVar

_T = TypeVar("_T")


class RandomService:
    """Thin wrapper around :class:`random.Random` shared by deal and turn order."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)  # noqa: S311

    def choice(self, population: Sequence[_T]) -> _T:
        """Return a uniform choice from *population*."""
        if not population:
            msg = "Cannot choose from an empty population."
            raise ValueError(msg)
        return population[self._random.randrange(len(population))]

    def shuffle(self, items: Iterable[_T]) -> list[_T]:
        """Return a shuffled copy of *items*; the input is left untouched."""
        mutable = list(items)
        self._random.shuffle(mutable)
        return mutable


__all__ = ["RandomService"]
