"""Predictions package."""

from .sampling import weighted_choice, make_rng
from .statistical import (
    WeightedFrequencyModel,
    generate_primary_set,
    generate_bonus,
    generate_predictions
)
from .predictor_engine import PredictorEngine, PredictionRun, predictor_engine

__all__ = [
    'weighted_choice',
    'make_rng',
    'WeightedFrequencyModel',
    'generate_primary_set',
    'generate_bonus',
    'generate_predictions',
    'PredictorEngine',
    'PredictionRun',
    'predictor_engine'
]
