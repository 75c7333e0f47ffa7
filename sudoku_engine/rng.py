"""Random sources for puzzle generation.

A random source is any zero-argument callable returning a float in [0, 1).
The daily challenge uses `seeded_random` so the same day yields the same
puzzle on every install; everything else uses `default_random`.
"""
import random
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

RandomSource = Callable[[], float]

_MULTIPLIER = 9301
_INCREMENT = 49297
_MODULUS = 233280


def seeded_random(seed: int) -> RandomSource:
    """Linear congruential generator. Same seed, same stream."""
    state = seed

    def next_float() -> float:
        nonlocal state
        state = (state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return state / _MODULUS

    return next_float


def default_random() -> RandomSource:
    return random.random


def shuffle(items: Sequence[T], random_source: RandomSource) -> List[T]:
    """
    Fisher-Yates shuffle driven by `random_source`. Returns a new list.
    """
    arr = list(items)
    for i in range(len(arr) - 1, 0, -1):
        j = int(random_source() * (i + 1))
        arr[i], arr[j] = arr[j], arr[i]
    return arr
