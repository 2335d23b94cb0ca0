"""Pluggable randomness for the choice policy."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class Sampler(ABC):
    """Picks one element of a non-empty sequence."""

    @abstractmethod
    def sample(self, options: Sequence[T]) -> T: ...


class RandomSampler(Sampler):
    """Uniform sampler backed by its own random.Random.

    Two samplers built with the same seed produce the same picks.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def sample(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("Cannot sample from an empty sequence of options")
        return self._rng.choice(options)
