"""Immutable result types produced by the analysis engine."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, NamedTuple, Tuple

# Full-domain mapping of ball value to occurrence count
FrequencyTable = Mapping[int, int]

PARITY_LABELS: Tuple[str, ...] = (
    'All Odd',
    '1 Even, 4 Odd',
    '2 Even, 3 Odd',
    '3 Even, 2 Odd',
    '4 Even, 1 Odd',
    'All Even',
)

SUM_BINS: Tuple[str, ...] = ('< 100', '100-149', '150-199', '200-249', '250+')


def frozen_mapping(data: Mapping) -> Mapping:
    """Return a read-only copy of ``data`` preserving key order."""
    return MappingProxyType(dict(data))


class NumberCount(NamedTuple):
    number: int
    count: int


class PairCount(NamedTuple):
    pair: Tuple[int, int]
    count: int


class OverdueEntry(NamedTuple):
    number: int
    drawings_since: int


@dataclass(frozen=True)
class SumStatistics:
    """Distribution of the per-drawing white ball sums."""
    average: int
    minimum: int
    maximum: int
    histogram: Mapping[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'average': self.average,
            'min': self.minimum,
            'max': self.maximum,
            'ranges': dict(self.histogram)
        }


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Everything the predictor and the presentation layer need from one analysis run."""
    total_drawings: int
    primary_frequency: FrequencyTable
    bonus_frequency: FrequencyTable
    hot_primary: Tuple[NumberCount, ...]
    cold_primary: Tuple[NumberCount, ...]
    hot_bonus: Tuple[NumberCount, ...]
    cold_bonus: Tuple[NumberCount, ...]
    common_pairs: Tuple[PairCount, ...]
    rare_pairs: Tuple[PairCount, ...]
    overdue_numbers: Tuple[OverdueEntry, ...]
    sum_stats: SumStatistics
    parity_distribution: Mapping[str, int]
