"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Dict, Optional, Union
import datetime as dt

from ..models.analysis_models import AnalysisSnapshot
from ..models.drawing_models import DrawingRecord, PRIMARY_MIN, PRIMARY_MAX, BONUS_MIN, BONUS_MAX
from ..models.prediction_models import PredictionSet
from ..utils.helpers import snapshot_to_dict


# Input schemas
class DrawingInput(BaseModel):
    """Schema for one historical drawing."""
    date: Union[dt.date, str] = Field(..., union_mode="left_to_right", description="Drawing date (YYYY-MM-DD) or an opaque label")
    numbers: List[int] = Field(..., min_length=5, max_length=5, description="Five white balls (1-69)")
    bonus_number: int = Field(..., ge=BONUS_MIN, le=BONUS_MAX, description="Powerball number (1-26)")
    multiplier: str = Field("N/A", description="Power Play multiplier")

    @field_validator('numbers')
    @classmethod
    def validate_numbers(cls, v):
        """Validate that numbers are in range and different."""
        for num in v:
            if not (PRIMARY_MIN <= num <= PRIMARY_MAX):
                raise ValueError(f'Numbers must be between {PRIMARY_MIN} and {PRIMARY_MAX}')

        if len(set(v)) != len(v):
            raise ValueError('Numbers cannot repeat')

        return v

    def to_record(self) -> DrawingRecord:
        return DrawingRecord(
            date=self.date,
            numbers=tuple(self.numbers),
            bonus_number=self.bonus_number,
            multiplier=self.multiplier
        )


class AnalysisRequest(BaseModel):
    """Drawings to analyze, newest first."""
    drawings: List[DrawingInput] = Field(..., description="Drawings ordered newest first")

    def to_records(self) -> List[DrawingRecord]:
        return [d.to_record() for d in self.drawings]


class PredictionRequest(AnalysisRequest):
    """Drawings plus prediction options."""
    count: Optional[int] = Field(None, ge=0, description="Number of prediction sets")
    seed: Optional[int] = Field(None, ge=0, description="Seed for reproducible predictions")


# Response schemas
class NumberCountSchema(BaseModel):
    number: int
    count: int


class PairCountSchema(BaseModel):
    pair: List[int]
    count: int


class OverdueSchema(BaseModel):
    number: int
    drawings_since: int


class SumStatsSchema(BaseModel):
    average: int
    min: int
    max: int
    ranges: Dict[str, int]


class AnalysisResponse(BaseModel):
    """Schema for a complete analysis snapshot."""
    total_drawings: int
    primary_frequency: Dict[int, int]
    bonus_frequency: Dict[int, int]
    hot_primary: List[NumberCountSchema]
    cold_primary: List[NumberCountSchema]
    hot_bonus: List[NumberCountSchema]
    cold_bonus: List[NumberCountSchema]
    common_pairs: List[PairCountSchema]
    rare_pairs: List[PairCountSchema]
    overdue_numbers: List[OverdueSchema]
    sum_stats: SumStatsSchema
    parity_distribution: Dict[str, int]

    @classmethod
    def from_snapshot(cls, snapshot: AnalysisSnapshot) -> 'AnalysisResponse':
        return cls(**snapshot_to_dict(snapshot))


class PredictionSetSchema(BaseModel):
    numbers: List[int] = Field(..., min_length=5, max_length=5)
    bonus_number: int

    @classmethod
    def from_prediction(cls, prediction: PredictionSet) -> 'PredictionSetSchema':
        return cls(**prediction.to_dict())


class PredictionResponse(BaseModel):
    """Schema for generated predictions and the analysis behind them."""
    generated_at: dt.datetime = Field(default_factory=dt.datetime.now)
    source: str
    seed: Optional[int] = None
    analysis: AnalysisResponse
    predictions: List[PredictionSetSchema]


class ErrorResponse(BaseModel):
    """Schema for error responses."""
    detail: str
    status_code: int
    timestamp: dt.datetime = Field(default_factory=dt.datetime.now)
