# fleetseed/utils/random_utils.py
"""Small helpers shared by the entity factories. All take the random source explicitly."""

import random
import time
from typing import Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")

PAST_WINDOW_SECONDS = 7_000_000     # ~81 days


def weighted_choice(rng: random.Random, table: Sequence[Tuple[T, float]]) -> T:
    """
    Pick a variant from a (variant, weight) table.
    Weights need not sum to 1; a single uniform draw walks the cumulative weights.
    """
    total = sum(weight for _, weight in table)
    draw = rng.random() * total
    cumulative = 0.0
    for variant, weight in table:
        cumulative += weight
        if draw < cumulative:
            return variant
    return table[-1][0]


def random_past_timestamp(rng: random.Random, now: Optional[float] = None) -> int:
    """Unix seconds somewhere in the last PAST_WINDOW_SECONDS."""
    now = time.time() if now is None else now
    return int(now - PAST_WINDOW_SECONDS * rng.random())


def random_byte_string(rng: random.Random, number_of_bytes: int) -> str:
    """Lower-case hex string of `number_of_bytes` random bytes."""
    return "".join(f"{rng.randrange(256):02x}" for _ in range(number_of_bytes))
