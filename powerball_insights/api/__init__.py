"""API package for the Powerball analysis service."""

from .routes import app
from .schemas import (
    DrawingInput,
    AnalysisRequest,
    AnalysisResponse,
    PredictionRequest,
    PredictionResponse,
    ErrorResponse
)

__all__ = [
    'app',
    'DrawingInput',
    'AnalysisRequest',
    'AnalysisResponse',
    'PredictionRequest',
    'PredictionResponse',
    'ErrorResponse'
]
