"""Helper utilities for presenting analysis and prediction results."""

import pandas as pd
from typing import Any, Dict, List, Optional, Sequence
from datetime import datetime
import logging

from ..models.analysis_models import AnalysisSnapshot, FrequencyTable
from ..models.prediction_models import PredictionSet

logger = logging.getLogger(__name__)


def snapshot_to_dict(snapshot: AnalysisSnapshot) -> Dict[str, Any]:
    """Convert a snapshot to plain JSON-friendly structures."""
    return {
        'total_drawings': snapshot.total_drawings,
        'primary_frequency': dict(snapshot.primary_frequency),
        'bonus_frequency': dict(snapshot.bonus_frequency),
        'hot_primary': [e._asdict() for e in snapshot.hot_primary],
        'cold_primary': [e._asdict() for e in snapshot.cold_primary],
        'hot_bonus': [e._asdict() for e in snapshot.hot_bonus],
        'cold_bonus': [e._asdict() for e in snapshot.cold_bonus],
        'common_pairs': [{'pair': list(e.pair), 'count': e.count} for e in snapshot.common_pairs],
        'rare_pairs': [{'pair': list(e.pair), 'count': e.count} for e in snapshot.rare_pairs],
        'overdue_numbers': [e._asdict() for e in snapshot.overdue_numbers],
        'sum_stats': snapshot.sum_stats.to_dict(),
        'parity_distribution': dict(snapshot.parity_distribution)
    }


def format_prediction_output(predictions: Sequence[PredictionSet],
                             seed: Optional[int] = None) -> Dict[str, Any]:
    """Format predictions for API or console output.

    The first set is the main pick; the rest are runner-ups.
    """
    sets = [p.to_dict() for p in predictions]
    return {
        'timestamp': datetime.now().isoformat(),
        'seed': seed,
        'main': sets[0] if sets else None,
        'runner_ups': sets[1:]
    }


def frequency_frame(table: FrequencyTable) -> pd.DataFrame:
    """Frequency table as a DataFrame with number, count and percent columns."""
    df = pd.DataFrame({'number': list(table.keys()), 'count': list(table.values())})
    total = df['count'].sum()
    df['percent'] = (100 * df['count'] / total).round(3) if total else 0.0
    return df


def ranking_frame(entries: Sequence[tuple]) -> pd.DataFrame:
    """Ranked NumberCount/PairCount/OverdueEntry rows as a DataFrame."""
    if not entries:
        return pd.DataFrame()
    rows: List[Dict[str, Any]] = [e._asdict() for e in entries]
    for row in rows:
        if 'pair' in row:
            row['pair'] = '-'.join(str(n) for n in row['pair'])
    return pd.DataFrame(rows)
