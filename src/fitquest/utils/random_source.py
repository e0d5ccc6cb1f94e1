"""Injectable randomness for quest generation, shop stocking and onboarding."""

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of random.Random the engine draws from."""

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...

    def sample(self, population: Sequence[T], k: int) -> list[T]: ...


def default_random() -> RandomSource:
    """A fresh, OS-seeded generator."""
    return random.Random()
