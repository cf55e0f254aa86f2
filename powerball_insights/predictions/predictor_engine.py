"""Prediction engine tying drawing sources, analysis and generation together."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
import logging

from ..analysis.statistics import StatisticsAnalyzer
from ..config.settings import settings as default_settings, PowerballSettings
from ..models.analysis_models import AnalysisSnapshot
from ..models.drawing_models import DrawingRecord
from ..models.prediction_models import PredictionSet
from .sampling import make_rng
from .statistical import WeightedFrequencyModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PredictionRun:
    """Snapshot and predictions produced by one engine call."""
    snapshot: AnalysisSnapshot
    predictions: List[PredictionSet]
    seed: Optional[int] = None


class PredictorEngine:
    """Runs analysis and prediction for a caller that owns the records."""

    def __init__(self, settings: Optional[PowerballSettings] = None):
        self.settings = settings or default_settings
        self.analyzer = StatisticsAnalyzer(self.settings)

    def _resolve_count(self, count: Optional[int]) -> int:
        count = self.settings.default_prediction_count if count is None else count
        if count > self.settings.max_prediction_count:
            raise ValueError(
                f"Requested {count} predictions, maximum is {self.settings.max_prediction_count}"
            )
        return count

    def predict(self, records: Iterable[DrawingRecord], count: Optional[int] = None,
                seed: Optional[int] = None) -> PredictionRun:
        """Analyze newest-first ``records`` and generate predictions from them.

        Each call builds its own generator; ``seed`` falls back to the
        configured ``random_seed``.
        """
        count = self._resolve_count(count)
        seed = self.settings.random_seed if seed is None else seed

        snapshot = self.analyzer.analyze(records)
        model = WeightedFrequencyModel(make_rng(seed), self.settings)
        predictions = model.generate_predictions(snapshot, count)

        logger.info(
            f"Generated {len(predictions)} predictions from {snapshot.total_drawings} drawings"
        )
        return PredictionRun(snapshot=snapshot, predictions=predictions, seed=seed)

    def predict_from_source(self, source, count: Optional[int] = None,
                            seed: Optional[int] = None) -> PredictionRun:
        """Load records from a DrawingSource, then predict."""
        records = source.load()
        logger.info(f"Loaded {len(records)} drawings from {source.describe()}")
        return self.predict(records, count=count, seed=seed)

    def get_engine_status(self) -> Dict[str, Any]:
        """Get engine configuration summary."""
        s = self.settings
        return {
            'default_prediction_count': s.default_prediction_count,
            'max_prediction_count': s.max_prediction_count,
            'seeded': s.random_seed is not None,
            'boosts': {
                'hot': s.hot_boost,
                'cold': s.cold_boost,
                'overdue': s.overdue_boost,
                'hot_bonus': s.hot_bonus_boost,
                'cold_bonus': s.cold_bonus_boost
            },
            'pair_inclusion_probability': s.pair_inclusion_probability
        }


# Global engine instance
predictor_engine = PredictorEngine()
