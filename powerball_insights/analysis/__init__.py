"""Analysis package for Powerball drawing statistics."""

from .patterns import pair_counts, common_pairs, rare_pairs, parity_pattern
from .statistics import (
    StatisticsAnalyzer,
    analyze,
    frequency_of,
    primary_frequency,
    bonus_frequency,
    rank_hot,
    rank_cold,
    overdue,
    sum_statistics,
    check_recency_order
)

__all__ = [
    'StatisticsAnalyzer',
    'analyze',
    'frequency_of',
    'primary_frequency',
    'bonus_frequency',
    'rank_hot',
    'rank_cold',
    'pair_counts',
    'common_pairs',
    'rare_pairs',
    'overdue',
    'sum_statistics',
    'parity_pattern',
    'check_recency_order'
]
