"""
Randomness Source - Injected uniform draws.

Every random decision in a battle (deck shuffles, enemy intents) goes
through a RandomDraw: a zero-argument callable returning a float in [0, 1).
There is no module-level default generator; callers always pass one in.
"""

from __future__ import annotations
import itertools
import math
import random
from typing import Callable, Iterable, TypeVar

RandomDraw = Callable[[], float]

T = TypeVar("T")


def seeded_source(seed: int | None) -> RandomDraw:
    """Draws from a private random.Random seeded with `seed`."""
    rng = random.Random(seed)
    return rng.random


def fixed_source(values: Iterable[float]) -> RandomDraw:
    """
    Replay a fixed sequence of draws, cycling when exhausted.

    Used by tests to pin intent selection and shuffle order.
    """
    pool = list(values)
    if not pool:
        raise ValueError("fixed_source needs at least one value")
    for v in pool:
        if not 0.0 <= v < 1.0:
            raise ValueError(f"Draw {v} outside [0, 1)")
    cycle = itertools.cycle(pool)
    return lambda: next(cycle)


def randint_below(draw: RandomDraw, n: int) -> int:
    """Uniform integer in [0, n)."""
    return min(n - 1, math.floor(draw() * n))


def shuffle(items: list[T], draw: RandomDraw) -> list[T]:
    """
    Fisher-Yates shuffle in place.

    Returns the same list for chaining.
    """
    for i in range(len(items) - 1, 0, -1):
        j = randint_below(draw, i + 1)
        items[i], items[j] = items[j], items[i]
    return items
