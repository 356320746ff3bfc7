"""Injectable randomness.

Tie-breaks and bean picks go through a RandomSource so tests can pin the
outcome. `random.Random` satisfies the protocol as-is.
"""

from __future__ import annotations

import random
from collections.abc import MutableSequence, Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def choice(self, seq: Sequence[T]) -> T: ...

    def shuffle(self, x: MutableSequence[object]) -> None: ...


def default_random() -> RandomSource:
    return random.Random()
