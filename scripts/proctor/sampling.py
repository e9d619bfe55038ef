"""
Random subset sampling without replacement.
"""

import random
from typing import List, Optional


def random_subset(n: int, r: int, rng: Optional[random.Random] = None) -> List[int]:
    """
    Draw r distinct indices uniformly from range(n).

    Uses a partial Fisher-Yates shuffle: each pick is swapped out of the
    live range so the work is O(r) after the O(n) bag is built. The result
    has no guaranteed ordering.

    Args:
        n: Universe size
        r: Number of indices to draw (0 <= r <= n)
        rng: Random generator; defaults to the process-global one so that
            random.seed() makes draws reproducible

    Returns:
        List of r distinct ints in [0, n)

    Raises:
        ValueError: If n or r is negative, or r > n
    """
    if n < 0 or r < 0:
        raise ValueError(f"n and r must be non-negative, got n={n}, r={r}")
    if r > n:
        raise ValueError(f"Cannot draw {r} indices from {n} without replacement")

    randrange = rng.randrange if rng is not None else random.randrange

    bag = list(range(n))
    edge = n
    subset = []
    for _ in range(r):
        pick = randrange(edge)
        subset.append(bag[pick])
        edge -= 1
        bag[pick] = bag[edge]
    return subset
