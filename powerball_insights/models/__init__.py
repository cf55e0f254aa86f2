"""Models package for the Powerball analysis system."""

from .drawing_models import (
    DrawingRecord,
    PRIMARY_DOMAIN,
    BONUS_DOMAIN,
    NUMBERS_PER_DRAWING
)

from .analysis_models import (
    AnalysisSnapshot,
    FrequencyTable,
    NumberCount,
    PairCount,
    OverdueEntry,
    SumStatistics,
    PARITY_LABELS,
    SUM_BINS
)

from .prediction_models import PredictionSet

__all__ = [
    # Input records
    'DrawingRecord',
    'PRIMARY_DOMAIN',
    'BONUS_DOMAIN',
    'NUMBERS_PER_DRAWING',

    # Analysis results
    'AnalysisSnapshot',
    'FrequencyTable',
    'NumberCount',
    'PairCount',
    'OverdueEntry',
    'SumStatistics',
    'PARITY_LABELS',
    'SUM_BINS',

    # Predictions
    'PredictionSet'
]
