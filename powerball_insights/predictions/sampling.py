"""Weighted random selection primitives."""

import numpy as np
from typing import Optional, Sequence, TypeVar

from ..exceptions import InvalidWeightsError

T = TypeVar('T')


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a random generator; a fixed seed makes draws reproducible."""
    return np.random.default_rng(seed)


def weighted_choice(items: Sequence[T], weights: Sequence[float],
                    rng: np.random.Generator) -> T:
    """Draw one item with probability proportional to its weight.

    Items with zero weight are never drawn. Raises InvalidWeightsError when the
    sequences differ in length, a weight is negative or not finite, or no
    weight is positive.
    """
    weights = np.asarray(weights, dtype=float)
    if len(items) != len(weights):
        raise InvalidWeightsError(
            f"Got {len(items)} items but {len(weights)} weights"
        )
    if not np.all(np.isfinite(weights)) or np.any(weights < 0):
        raise InvalidWeightsError(f"Weights must be finite and non-negative: {weights.tolist()}")

    cumulative = np.cumsum(weights)
    total = cumulative[-1] if len(cumulative) else 0.0
    if total <= 0:
        raise InvalidWeightsError("No candidate has a positive weight")

    # (0, total] so that a leading zero-weight item cannot be hit
    target = (1.0 - rng.random()) * total
    index = int(np.searchsorted(cumulative, target, side='left'))
    return items[min(index, len(items) - 1)]
