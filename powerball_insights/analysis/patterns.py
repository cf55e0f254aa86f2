"""Co-occurrence and even/odd pattern analysis over drawing records."""

from collections import Counter
from itertools import combinations
from typing import Dict, Iterable, List, Sequence, Tuple
import logging

from ..models.analysis_models import PARITY_LABELS, PairCount, frozen_mapping
from ..models.drawing_models import DrawingRecord

logger = logging.getLogger(__name__)

Pair = Tuple[int, int]


def pair_counts(records: Iterable[DrawingRecord]) -> Dict[Pair, int]:
    """Count how often each unordered pair of white balls was drawn together.

    Keys are ``(smaller, larger)``; only pairs seen at least once are present.
    Every 5-number drawing contributes exactly 10 pairs.
    """
    counts: Counter = Counter()
    for record in records:
        counts.update(combinations(sorted(record.numbers), 2))
    return dict(counts)


def common_pairs(counts: Dict[Pair, int], k: int = 10) -> List[PairCount]:
    """Top-k pairs by descending count, ties by ascending first then second value."""
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [PairCount(pair, count) for pair, count in ranked[:max(k, 0)]]


def rare_pairs(counts: Dict[Pair, int], k: int = 10) -> List[PairCount]:
    """Bottom-k pairs that co-occurred at least once, ascending by count.

    Pairs never drawn together are left out even though they are the
    rarest; listing them would just dump thousands of zero counts.
    """
    seen = [(pair, count) for pair, count in counts.items() if count > 0]
    ranked = sorted(seen, key=lambda item: (item[1], item[0]))
    return [PairCount(pair, count) for pair, count in ranked[:max(k, 0)]]


def parity_label(numbers: Sequence[int]) -> str:
    """Label a drawing by how many of its white balls are even."""
    even_count = sum(1 for n in numbers if n % 2 == 0)
    return PARITY_LABELS[even_count]


def target_even_count(label: str) -> int:
    """Number of even white balls a parity label stands for."""
    return PARITY_LABELS.index(label)


def parity_pattern(records: Iterable[DrawingRecord]):
    """Count drawings per even/odd pattern; all six labels are always present."""
    patterns = {label: 0 for label in PARITY_LABELS}
    for record in records:
        patterns[parity_label(record.numbers)] += 1
    return frozen_mapping(patterns)
