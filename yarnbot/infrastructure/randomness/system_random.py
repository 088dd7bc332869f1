"""Random source adapter backed by ``random.Random``."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

from ...application.ports.random_port import RandomSource

T = TypeVar("T")


class SystemRandom(RandomSource):
    """Seedable random source. A fixed seed makes every reply reproducible.

    Each instance owns its generator; the module-level ``random`` state is
    never touched.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def choice(self, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("choice() needs at least one option")
        return self._rng.choice(options)
