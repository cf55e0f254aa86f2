"""Prediction result types."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class PredictionSet:
    """Five ascending white balls plus one Powerball."""
    numbers: Tuple[int, ...]
    bonus_number: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'numbers': list(self.numbers),
            'bonus_number': self.bonus_number
        }
