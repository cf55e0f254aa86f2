"""Drawing sources: the single entry point for loading drawing history."""

from abc import ABC, abstractmethod
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional, Union
import logging
import re

import pandas as pd

from ..config.settings import settings as default_settings, PowerballSettings
from ..exceptions import DataSourceError
from ..models.drawing_models import DrawingRecord, DEFAULT_MULTIPLIER
from .data_cleaner import DataCleaner
from .scraper import PowerballScraper, RawDrawing, parse_results_text

logger = logging.getLogger(__name__)


def check_date_range(start: Optional[date], end: Optional[date]) -> None:
    """Raise ValueError when ``start`` falls after ``end``."""
    if start is not None and end is not None and start > end:
        raise ValueError(f"Start date {start} is after end date {end}")


class DrawingSource(ABC):
    """Produces validated drawing records, newest-first."""

    @abstractmethod
    def load(self) -> List[DrawingRecord]:
        """Load records; raise DataSourceError when nothing usable is found."""

    def describe(self) -> str:
        return self.__class__.__name__


class TextDrawingSource(DrawingSource):
    """Drawings parsed from previous-results text or HTML held in memory.

    Used for pasted page content and as the explicit fallback dataset of a
    live source. ``start``/``end`` restrict the drawings loaded.
    """

    def __init__(self, content: str, name: str = "text", cleaner: Optional[DataCleaner] = None,
                 start: Optional[date] = None, end: Optional[date] = None):
        check_date_range(start, end)
        self.content = content
        self.name = name
        self.cleaner = cleaner or DataCleaner()
        self.start = start
        self.end = end

    @classmethod
    def from_file(cls, path: Union[str, Path], cleaner: Optional[DataCleaner] = None,
                  start: Optional[date] = None, end: Optional[date] = None) -> 'TextDrawingSource':
        path = Path(path)
        try:
            content = path.read_text(encoding='utf-8')
        except OSError as e:
            raise DataSourceError(f"Cannot read drawing file {path}: {e}") from e
        return cls(content, name=str(path), cleaner=cleaner, start=start, end=end)

    def load(self) -> List[DrawingRecord]:
        raw = parse_results_text(self.content, source=self.name)
        records = self.cleaner.clean(raw, self.start, self.end)
        if not records:
            raise DataSourceError(f"No valid drawings found in {self.name}")
        return records

    def describe(self) -> str:
        return f"text ({self.name})"


class CsvDrawingSource(DrawingSource):
    """Drawings from a CSV export.

    Accepts the NY Open Data layout (``Draw Date``, ``Winning Numbers`` with
    six numbers, ``Multiplier``) or explicit ``date``, ``ball_1``..``ball_5``
    and ``powerball`` columns.
    """

    BALL_COLUMNS = [f'ball_{i}' for i in range(1, 6)]

    def __init__(self, path: Union[str, Path], cleaner: Optional[DataCleaner] = None,
                 start: Optional[date] = None, end: Optional[date] = None):
        check_date_range(start, end)
        self.path = Path(path)
        self.cleaner = cleaner or DataCleaner()
        self.start = start
        self.end = end

    @staticmethod
    def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
        df = df.copy()
        df.columns = [re.sub(r'\W+', '_', str(c).strip().lower()) for c in df.columns]
        return df.rename(columns={'draw_date': 'date', 'power_play': 'multiplier'})

    def _row_to_raw(self, row: pd.Series) -> Optional[RawDrawing]:
        try:
            drawing_date = pd.to_datetime(str(row['date'])).date()
        except (ValueError, TypeError, KeyError):
            logger.warning(f"Unparseable date in {self.path}: {row.get('date')!r}")
            return None

        if 'winning_numbers' in row.index:
            numbers = [int(x) for x in re.split(r'[\s,\-]+', str(row['winning_numbers'])) if x.isdigit()]
            whites = numbers[:5]
            bonus = int(row['powerball']) if 'powerball' in row.index else (numbers[5] if len(numbers) > 5 else None)
        else:
            whites = [int(row[c]) for c in self.BALL_COLUMNS]
            bonus = int(row['powerball'])

        multiplier = row.get('multiplier', DEFAULT_MULTIPLIER)
        if pd.isna(multiplier):
            multiplier = DEFAULT_MULTIPLIER
        elif not isinstance(multiplier, str):
            multiplier = f"{int(multiplier)}x"

        return RawDrawing(date=drawing_date, numbers=whites, bonus_number=bonus,
                          multiplier=multiplier, source=str(self.path))

    def load(self) -> List[DrawingRecord]:
        try:
            df = pd.read_csv(self.path)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise DataSourceError(f"Cannot read CSV {self.path}: {e}") from e

        df = self._normalize_columns(df)
        required = {'date'} | ({'winning_numbers'} if 'winning_numbers' in df.columns
                               else set(self.BALL_COLUMNS) | {'powerball'})
        missing = required - set(df.columns)
        if missing:
            raise DataSourceError(f"CSV {self.path} is missing columns: {sorted(missing)}")

        raw = []
        for _, row in df.iterrows():
            try:
                drawing = self._row_to_raw(row)
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed CSV row in {self.path}: {e}")
                continue
            if drawing is not None:
                raw.append(drawing)

        records = self.cleaner.clean(raw, self.start, self.end)
        if not records:
            raise DataSourceError(f"No valid drawings found in {self.path}")

        logger.info(f"Loaded {len(records)} drawings from {self.path}")
        return records

    def describe(self) -> str:
        return f"CSV ({self.path})"


class ScraperDrawingSource(DrawingSource):
    """Live drawings from powerball.com, with an optional explicit fallback source."""

    def __init__(self, start: Optional[date] = None, end: Optional[date] = None,
                 scraper: Optional[PowerballScraper] = None,
                 fallback: Optional[DrawingSource] = None,
                 settings: Optional[PowerballSettings] = None):
        self.settings = settings or default_settings
        self.end = end or date.today()
        self.start = start or self.end - timedelta(days=self.settings.scraping_lookback_days)
        check_date_range(self.start, self.end)
        self.scraper = scraper or PowerballScraper(self.settings)
        self.fallback = fallback
        self.cleaner = DataCleaner(reference_date=self.end)

    def load(self) -> List[DrawingRecord]:
        try:
            raw = self.scraper.fetch_range(self.start, self.end)
            records = self.cleaner.clean(raw, self.start, self.end)
        except DataSourceError as e:
            if self.fallback is None:
                raise
            logger.warning(f"Live fetch failed ({e}), using {self.fallback.describe()}")
            return self.fallback.load()

        if records:
            return records

        if self.fallback is not None:
            logger.warning(f"No drawings fetched, using {self.fallback.describe()}")
            return self.fallback.load()

        raise DataSourceError(f"No drawings available between {self.start} and {self.end}")

    def describe(self) -> str:
        return f"powerball.com ({self.start} to {self.end})"


def file_source(path: Union[str, Path], start: Optional[date] = None,
                end: Optional[date] = None) -> DrawingSource:
    """CSV source for ``.csv`` files, saved results text otherwise."""
    path = Path(path)
    if path.suffix.lower() == '.csv':
        return CsvDrawingSource(path, start=start, end=end)
    return TextDrawingSource.from_file(path, start=start, end=end)


def build_default_source(settings: Optional[PowerballSettings] = None,
                         start: Optional[date] = None,
                         end: Optional[date] = None) -> DrawingSource:
    """Live source for [start, end], backed by the configured fallback file when one is set.

    Without ``start`` the window covers the last ``scraping_lookback_days``
    days up to ``end`` (today by default). The fallback is filtered to the
    same window. Raises ValueError when ``start`` is after ``end``.
    """
    settings = settings or default_settings
    live = ScraperDrawingSource(start, end, settings=settings)
    if settings.fallback_data_file:
        live.fallback = file_source(settings.fallback_data_file, live.start, live.end)
    return live
