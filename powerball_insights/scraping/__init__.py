"""Scraping package for Powerball drawing history."""

from .scraper import PowerballScraper, RawDrawing, parse_results_text
from .data_cleaner import DataCleaner, ValidationResult, clean_drawings
from .sources import (
    DrawingSource,
    TextDrawingSource,
    CsvDrawingSource,
    ScraperDrawingSource,
    build_default_source,
    check_date_range,
    file_source
)

__all__ = [
    'PowerballScraper',
    'RawDrawing',
    'parse_results_text',
    'DataCleaner',
    'ValidationResult',
    'clean_drawings',
    'DrawingSource',
    'TextDrawingSource',
    'CsvDrawingSource',
    'ScraperDrawingSource',
    'build_default_source',
    'check_date_range',
    'file_source'
]
