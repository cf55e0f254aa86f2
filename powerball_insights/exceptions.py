"""Exception hierarchy for the analysis and prediction system."""


class PowerballError(Exception):
    """Base class for all errors raised by this package."""


class EmptyInputError(PowerballError):
    """Raised when an analysis is requested over zero drawing records."""


class InvalidWeightsError(PowerballError):
    """Raised when a weighted draw has no selectable candidate."""


class RecordValidationError(PowerballError, ValueError):
    """Raised when a drawing record breaks the 5-of-69 / 1-of-26 rules."""


class RecordOrderError(PowerballError):
    """Raised when dated records are not ordered newest-first."""


class DataSourceError(PowerballError):
    """Raised when a drawing source cannot produce any records."""
