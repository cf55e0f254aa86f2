"""Data cleaning and validation for scraped or imported drawings."""

from typing import Iterable, List, Optional
from datetime import datetime, date
import logging
from dataclasses import dataclass, field

from ..exceptions import RecordValidationError
from ..models.drawing_models import DrawingRecord
from .scraper import RawDrawing

logger = logging.getLogger(__name__)

DATE_FORMATS = ('%a, %b %d, %Y', '%a, %B %d, %Y', '%Y-%m-%d', '%m/%d/%Y')


@dataclass
class ValidationResult:
    """Result of data validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    cleaned_data: Optional[DrawingRecord] = None


class DataCleaner:
    """Turn raw drawings into validated, deduplicated, newest-first records."""

    def __init__(self, reference_date: Optional[date] = None):
        self.reference_date = reference_date or date.today()

    def parse_date(self, value) -> Optional[date]:
        """Parse a drawing date; listings without a year get the reference year.

        A year-less date that would land after the reference date belongs to
        the previous year (a January listing showing late-December drawings).
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value

        text = str(value).strip()
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue

        for fmt in ('%a, %b %d, %Y', '%a, %B %d, %Y'):
            try:
                parsed = datetime.strptime(f"{text}, {self.reference_date.year}", fmt).date()
            except ValueError:
                continue
            if parsed > self.reference_date:
                try:
                    parsed = parsed.replace(year=parsed.year - 1)
                except ValueError:
                    # Feb 29 has no counterpart in the previous year
                    logger.warning(f"Cannot place {text!r} before {self.reference_date}")
                    return None
            return parsed

        return None

    def validate_drawing(self, raw: RawDrawing) -> ValidationResult:
        """Validate a single raw drawing."""
        errors = []
        warnings = []

        drawing_date = self.parse_date(raw.date)
        if drawing_date is None:
            errors.append(f"Unrecognized date: {raw.date!r}")
        elif drawing_date > self.reference_date:
            warnings.append(f"Drawing date {drawing_date} is in the future")

        if raw.bonus_number is None:
            errors.append(f"Missing Powerball for {raw.date}")

        if errors:
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            record = DrawingRecord(
                date=drawing_date,
                numbers=tuple(raw.numbers),
                bonus_number=raw.bonus_number,
                multiplier=raw.multiplier or 'N/A'
            )
        except RecordValidationError as e:
            errors.append(str(e))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        return ValidationResult(is_valid=True, warnings=warnings, cleaned_data=record)

    def clean(self, raw_drawings: Iterable[RawDrawing], start: Optional[date] = None,
              end: Optional[date] = None) -> List[DrawingRecord]:
        """Validate, deduplicate by date, filter to [start, end] and sort newest-first."""
        records = {}
        invalid_count = 0

        for raw in raw_drawings:
            result = self.validate_drawing(raw)
            for warning in result.warnings:
                logger.warning(warning)
            if not result.is_valid:
                invalid_count += 1
                logger.warning(f"Skipping invalid drawing: {'; '.join(result.errors)}")
                continue

            record = result.cleaned_data
            if record.date in records:
                logger.debug(f"Duplicate drawing for {record.date} ignored")
                continue
            records[record.date] = record

        if invalid_count:
            logger.warning(f"Skipped {invalid_count} invalid drawings")

        cleaned = [
            r for r in records.values()
            if (start is None or r.date >= start) and (end is None or r.date <= end)
        ]
        cleaned.sort(key=lambda r: r.date, reverse=True)
        return cleaned


def clean_drawings(raw_drawings: Iterable[RawDrawing], start: Optional[date] = None,
                   end: Optional[date] = None) -> List[DrawingRecord]:
    """Clean raw drawings with today's date as reference."""
    return DataCleaner().clean(raw_drawings, start, end)
