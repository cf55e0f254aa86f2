"""Drawing record model and the fixed Powerball number domain."""

import operator
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Tuple, Union

from ..exceptions import RecordValidationError

PRIMARY_MIN = 1
PRIMARY_MAX = 69
BONUS_MIN = 1
BONUS_MAX = 26
NUMBERS_PER_DRAWING = 5

PRIMARY_DOMAIN = range(PRIMARY_MIN, PRIMARY_MAX + 1)
BONUS_DOMAIN = range(BONUS_MIN, BONUS_MAX + 1)

DEFAULT_MULTIPLIER = "N/A"


@dataclass(frozen=True)
class DrawingRecord:
    """One historical drawing: five white balls, a Powerball and a Power Play.

    ``date`` is only used for recency ordering; ``multiplier`` is carried for
    display and never read by the analysis.
    """
    date: Union[date, str]
    numbers: Tuple[int, ...]
    bonus_number: int
    multiplier: str = DEFAULT_MULTIPLIER

    def __post_init__(self):
        try:
            numbers = tuple(operator.index(n) for n in self.numbers)
            bonus = operator.index(self.bonus_number)
        except TypeError as e:
            raise RecordValidationError(f"Drawing {self.date}: numbers must be integers ({e})") from e

        if len(numbers) != NUMBERS_PER_DRAWING:
            raise RecordValidationError(
                f"Drawing {self.date}: expected {NUMBERS_PER_DRAWING} numbers, got {len(numbers)}"
            )
        if len(set(numbers)) != NUMBERS_PER_DRAWING:
            raise RecordValidationError(f"Drawing {self.date}: duplicate numbers in {list(numbers)}")

        out_of_range = [n for n in numbers if not PRIMARY_MIN <= n <= PRIMARY_MAX]
        if out_of_range:
            raise RecordValidationError(
                f"Drawing {self.date}: numbers {out_of_range} outside {PRIMARY_MIN}-{PRIMARY_MAX}"
            )
        if not BONUS_MIN <= bonus <= BONUS_MAX:
            raise RecordValidationError(
                f"Drawing {self.date}: Powerball {bonus} outside {BONUS_MIN}-{BONUS_MAX}"
            )

        object.__setattr__(self, 'numbers', numbers)
        object.__setattr__(self, 'bonus_number', bonus)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            'date': self.date.isoformat() if isinstance(self.date, date) else self.date,
            'numbers': list(self.numbers),
            'bonus_number': self.bonus_number,
            'multiplier': self.multiplier
        }
