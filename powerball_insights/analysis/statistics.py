"""Statistical analysis of historical Powerball drawings."""

import numpy as np
from typing import Callable, Iterable, List, Optional, Sequence, Union
from datetime import date, datetime
from collections import Counter
import logging

from ..config.settings import settings as default_settings, PowerballSettings
from ..exceptions import EmptyInputError, RecordOrderError
from ..models.analysis_models import (
    AnalysisSnapshot, FrequencyTable, NumberCount, OverdueEntry,
    SumStatistics, SUM_BINS, frozen_mapping
)
from ..models.drawing_models import DrawingRecord, PRIMARY_DOMAIN, BONUS_DOMAIN
from .patterns import pair_counts, common_pairs, rare_pairs, parity_pattern

logger = logging.getLogger(__name__)

Selector = Callable[[DrawingRecord], Union[int, Iterable[int]]]

# Lower edges of the 100-149, 150-199, 200-249 and 250+ sum bins
SUM_BIN_EDGES = np.array([100, 150, 200, 250])


def frequency_of(records: Sequence[DrawingRecord], selector: Selector,
                 domain: Iterable[int]) -> FrequencyTable:
    """Count occurrences of every value in ``domain``, zero counts included.

    ``selector`` pulls the value (or values) of interest out of each record.
    """
    if not records:
        raise EmptyInputError("No drawing records to count")

    counter: Counter = Counter()
    for record in records:
        selected = selector(record)
        if isinstance(selected, int):
            counter[selected] += 1
        else:
            counter.update(selected)

    return frozen_mapping({value: counter.get(value, 0) for value in domain})


def primary_frequency(records: Sequence[DrawingRecord]) -> FrequencyTable:
    """White ball frequency over 1-69."""
    return frequency_of(records, lambda r: r.numbers, PRIMARY_DOMAIN)


def bonus_frequency(records: Sequence[DrawingRecord]) -> FrequencyTable:
    """Powerball frequency over 1-26."""
    return frequency_of(records, lambda r: r.bonus_number, BONUS_DOMAIN)


def rank_hot(table: FrequencyTable, k: int = 10) -> List[NumberCount]:
    """Most frequent values first; equal counts keep ascending value order."""
    ranked = sorted(table.items(), key=lambda item: (-item[1], item[0]))
    return [NumberCount(number, count) for number, count in ranked[:max(k, 0)]]


def rank_cold(table: FrequencyTable, k: int = 10) -> List[NumberCount]:
    """Least frequent values that were drawn at least once.

    A value with zero count is unseen rather than cold and never appears here.
    """
    drawn = [(number, count) for number, count in table.items() if count > 0]
    ranked = sorted(drawn, key=lambda item: (item[1], item[0]))
    return [NumberCount(number, count) for number, count in ranked[:max(k, 0)]]


def overdue(records: Sequence[DrawingRecord], k: int = 10) -> List[OverdueEntry]:
    """White balls ranked by how many drawings have passed since they last hit.

    ``records`` must be newest-first: index 0 is the latest drawing, so a value
    first seen at index i has been absent for i drawings. Values never drawn
    score ``len(records)`` and always rank as most overdue.
    """
    total = len(records)
    last_seen = {}
    for index, record in enumerate(records):
        for number in record.numbers:
            last_seen.setdefault(number, index)

    since = [(number, last_seen.get(number, total)) for number in PRIMARY_DOMAIN]
    ranked = sorted(since, key=lambda item: (-item[1], item[0]))
    return [OverdueEntry(number, drawings) for number, drawings in ranked[:max(k, 0)]]


def sum_statistics(records: Sequence[DrawingRecord]) -> SumStatistics:
    """Average, extremes and binned distribution of white ball sums.

    The average is rounded half-up (152.5 -> 153).
    """
    if not records:
        raise EmptyInputError("No drawing records to summarize")

    sums = np.array([sum(record.numbers) for record in records])
    average = int(np.floor(sums.mean() + 0.5))
    bins = np.bincount(np.digitize(sums, SUM_BIN_EDGES), minlength=len(SUM_BINS))

    return SumStatistics(
        average=average,
        minimum=int(sums.min()),
        maximum=int(sums.max()),
        histogram=frozen_mapping(zip(SUM_BINS, (int(c) for c in bins)))
    )


def check_recency_order(records: Sequence[DrawingRecord]) -> None:
    """Raise RecordOrderError unless dated records run newest to oldest.

    Only ``datetime.date`` values are comparable; opaque string tokens are
    taken in the order given. Datetimes are compared by calendar day.
    """
    dates = [record.date for record in records]
    if not all(isinstance(d, date) for d in dates):
        logger.debug("Record dates are not all date values, skipping order check")
        return

    dates = [d.date() if isinstance(d, datetime) else d for d in dates]

    for position, (newer, older) in enumerate(zip(dates, dates[1:])):
        if older > newer:
            raise RecordOrderError(
                f"Records must be newest-first: {older} at position {position + 1} "
                f"follows {newer}"
            )


class StatisticsAnalyzer:
    """Builds analysis snapshots with ranking sizes taken from settings."""

    def __init__(self, settings: Optional[PowerballSettings] = None):
        self.settings = settings or default_settings

    def analyze(self, records: Iterable[DrawingRecord]) -> AnalysisSnapshot:
        """Run every analysis over newest-first ``records``."""
        records = list(records)
        if not records:
            raise EmptyInputError("No valid data to analyze")

        check_recency_order(records)

        s = self.settings
        primary = primary_frequency(records)
        bonus = bonus_frequency(records)
        pairs = pair_counts(records)

        snapshot = AnalysisSnapshot(
            total_drawings=len(records),
            primary_frequency=primary,
            bonus_frequency=bonus,
            hot_primary=tuple(rank_hot(primary, s.hot_primary_count)),
            cold_primary=tuple(rank_cold(primary, s.cold_primary_count)),
            hot_bonus=tuple(rank_hot(bonus, s.hot_bonus_count)),
            cold_bonus=tuple(rank_cold(bonus, s.cold_bonus_count)),
            common_pairs=tuple(common_pairs(pairs, s.pair_count)),
            rare_pairs=tuple(rare_pairs(pairs, s.pair_count)),
            overdue_numbers=tuple(overdue(records, s.overdue_count)),
            sum_stats=sum_statistics(records),
            parity_distribution=parity_pattern(records)
        )

        logger.debug(f"Analyzed {len(records)} drawings, {len(pairs)} distinct pairs")
        return snapshot


def analyze(records: Iterable[DrawingRecord],
            settings: Optional[PowerballSettings] = None) -> AnalysisSnapshot:
    """Analyze newest-first drawing records into an AnalysisSnapshot."""
    analyzer = StatisticsAnalyzer(settings)
    return analyzer.analyze(records)
