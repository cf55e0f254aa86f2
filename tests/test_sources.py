"""Tests for drawing sources."""

from datetime import date

import pytest

from powerball_insights.config.settings import PowerballSettings
from powerball_insights.exceptions import DataSourceError
from powerball_insights.scraping.data_cleaner import DataCleaner
from powerball_insights.scraping.scraper import parse_results_text
from powerball_insights.scraping.sources import (
    CsvDrawingSource, ScraperDrawingSource, TextDrawingSource, build_default_source,
    check_date_range, file_source
)


NY_CSV = """Draw Date,Winning Numbers,Multiplier
04/05/2025,04 23 30 46 62 02,2
04/02/2025,05 17 41 64 69 01,3
03/31/2025,04 23 41 52 60 02,
"""

BALL_CSV = """date,ball_1,ball_2,ball_3,ball_4,ball_5,powerball,power_play
2025-03-31,4,23,41,52,60,2,4x
2025-04-05,4,23,30,46,62,2,2x
2025-04-02,5,17,41,64,69,1,3x
"""


class StubScraper:
    def __init__(self, raw=None, error=None):
        self.raw = raw or []
        self.error = error
        self.ranges = []

    def fetch_range(self, start, end):
        self.ranges.append((start, end))
        if self.error:
            raise self.error
        return list(self.raw)


@pytest.fixture
def text_source(results_page_text):
    return TextDrawingSource(results_page_text, name="fallback", cleaner=DataCleaner(date(2025, 4, 10)))


class TestTextDrawingSource:
    def test_load(self, text_source, recent_records):
        assert text_source.load() == recent_records

    def test_from_file(self, tmp_path, results_page_text):
        path = tmp_path / "results.txt"
        path.write_text(results_page_text, encoding="utf-8")

        source = TextDrawingSource.from_file(path)

        assert len(source.load()) == 3
        assert str(path) in source.describe()

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataSourceError):
            TextDrawingSource.from_file(tmp_path / "missing.txt")

    def test_no_drawings(self):
        with pytest.raises(DataSourceError):
            TextDrawingSource("nothing useful").load()


class TestCsvDrawingSource:
    def test_ny_open_data_layout(self, tmp_path):
        path = tmp_path / "powerball.csv"
        path.write_text(NY_CSV)

        records = CsvDrawingSource(path).load()

        assert [r.date for r in records] == [date(2025, 4, 5), date(2025, 4, 2), date(2025, 3, 31)]
        assert records[0].numbers == (4, 23, 30, 46, 62)
        assert records[0].bonus_number == 2
        assert [r.multiplier for r in records] == ["2x", "3x", "N/A"]

    def test_ball_column_layout(self, tmp_path, recent_records):
        path = tmp_path / "balls.csv"
        path.write_text(BALL_CSV)

        assert CsvDrawingSource(path).load() == recent_records

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("date,ball_1,powerball\n2025-04-05,4,2\n")

        with pytest.raises(DataSourceError, match="missing columns"):
            CsvDrawingSource(path).load()

    def test_invalid_rows_skipped(self, tmp_path):
        path = tmp_path / "mixed.csv"
        path.write_text(BALL_CSV + "2025-03-29,4,4,41,52,60,2,2x\nnot a date,1,2,3,4,5,6,2x\n")

        assert len(CsvDrawingSource(path).load()) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataSourceError):
            CsvDrawingSource(tmp_path / "missing.csv").load()


class TestScraperDrawingSource:
    START = date(2025, 3, 1)
    END = date(2025, 4, 10)

    def test_live_records(self, results_page_text, test_settings):
        scraper = StubScraper(raw=parse_results_text(results_page_text))
        source = ScraperDrawingSource(self.START, self.END, scraper=scraper, settings=test_settings)

        records = source.load()

        assert len(records) == 3
        assert records[0].date == date(2025, 4, 5)
        assert scraper.ranges == [(self.START, self.END)]

    def test_records_outside_window_dropped(self, results_page_text, test_settings):
        scraper = StubScraper(raw=parse_results_text(results_page_text))
        source = ScraperDrawingSource(date(2025, 4, 1), self.END, scraper=scraper, settings=test_settings)

        assert [r.date for r in source.load()] == [date(2025, 4, 5), date(2025, 4, 2)]

    def test_fallback_on_fetch_error(self, text_source, test_settings):
        scraper = StubScraper(error=DataSourceError("site down"))
        source = ScraperDrawingSource(self.START, self.END, scraper=scraper,
                                      fallback=text_source, settings=test_settings)

        assert len(source.load()) == 3

    def test_fallback_on_empty_fetch(self, text_source, test_settings):
        source = ScraperDrawingSource(self.START, self.END, scraper=StubScraper(),
                                      fallback=text_source, settings=test_settings)
        assert len(source.load()) == 3

    def test_error_without_fallback(self, test_settings):
        scraper = StubScraper(error=DataSourceError("site down"))
        source = ScraperDrawingSource(self.START, self.END, scraper=scraper, settings=test_settings)

        with pytest.raises(DataSourceError, match="site down"):
            source.load()

    def test_empty_without_fallback(self, test_settings):
        source = ScraperDrawingSource(self.START, self.END, scraper=StubScraper(), settings=test_settings)
        with pytest.raises(DataSourceError):
            source.load()

    def test_default_window(self, test_settings):
        source = ScraperDrawingSource(end=self.END, scraper=StubScraper(), settings=test_settings)
        assert (source.end - source.start).days == test_settings.scraping_lookback_days


class TestBuildDefaultSource:
    def test_without_fallback(self, test_settings):
        source = build_default_source(test_settings)

        assert isinstance(source, ScraperDrawingSource)
        assert source.fallback is None

    def test_csv_fallback(self, tmp_path):
        path = tmp_path / "history.csv"
        path.write_text(NY_CSV)

        source = build_default_source(PowerballSettings(fallback_data_file=str(path)),
                                      start=date(2025, 3, 1), end=date(2025, 4, 10))

        assert isinstance(source.fallback, CsvDrawingSource)
        assert len(source.fallback.load()) == 3

    def test_fallback_uses_live_window(self, tmp_path):
        path = tmp_path / "history.csv"
        path.write_text(NY_CSV)

        source = build_default_source(PowerballSettings(fallback_data_file=str(path)),
                                      start=date(2025, 4, 1), end=date(2025, 4, 10))

        assert (source.fallback.start, source.fallback.end) == (date(2025, 4, 1), date(2025, 4, 10))
        assert [r.date for r in source.fallback.load()] == [date(2025, 4, 5), date(2025, 4, 2)]

    def test_explicit_window(self, test_settings):
        source = build_default_source(test_settings, start=date(2025, 1, 1), end=date(2025, 2, 1))
        assert (source.start, source.end) == (date(2025, 1, 1), date(2025, 2, 1))

    def test_default_window_is_lookback(self, test_settings):
        source = build_default_source(test_settings, end=date(2025, 4, 10))
        assert source.start == date(2025, 3, 11)

    def test_reversed_window(self, test_settings):
        with pytest.raises(ValueError, match="after end date"):
            build_default_source(test_settings, start=date(2025, 4, 10), end=date(2025, 4, 1))

    def test_text_fallback(self, tmp_path, results_page_text):
        path = tmp_path / "history.txt"
        path.write_text(results_page_text)

        source = build_default_source(PowerballSettings(fallback_data_file=str(path)))

        assert isinstance(source.fallback, TextDrawingSource)


class TestDateRange:
    def test_check_date_range(self):
        check_date_range(None, date(2025, 4, 1))
        check_date_range(date(2025, 4, 1), None)
        check_date_range(date(2025, 4, 1), date(2025, 4, 1))
        with pytest.raises(ValueError):
            check_date_range(date(2025, 4, 2), date(2025, 4, 1))

    def test_text_source_window(self, results_page_text):
        source = TextDrawingSource(results_page_text, cleaner=DataCleaner(date(2025, 4, 10)),
                                   start=date(2025, 4, 1), end=date(2025, 4, 4))
        assert [r.date for r in source.load()] == [date(2025, 4, 2)]

    def test_csv_source_window(self, tmp_path):
        path = tmp_path / "balls.csv"
        path.write_text(BALL_CSV)

        records = CsvDrawingSource(path, start=date(2025, 4, 2)).load()

        assert [r.date for r in records] == [date(2025, 4, 5), date(2025, 4, 2)]

    def test_empty_window(self, tmp_path):
        path = tmp_path / "balls.csv"
        path.write_text(BALL_CSV)

        with pytest.raises(DataSourceError):
            CsvDrawingSource(path, start=date(2026, 1, 1)).load()

    @pytest.mark.parametrize("factory", [
        lambda path: CsvDrawingSource(path, start=date(2025, 4, 5), end=date(2025, 4, 1)),
        lambda path: TextDrawingSource("", start=date(2025, 4, 5), end=date(2025, 4, 1)),
        lambda path: ScraperDrawingSource(date(2025, 4, 5), date(2025, 4, 1), scraper=StubScraper()),
    ])
    def test_reversed_window_rejected(self, tmp_path, factory):
        with pytest.raises(ValueError):
            factory(tmp_path / "balls.csv")

    def test_file_source(self, tmp_path, results_page_text):
        csv_path = tmp_path / "balls.csv"
        csv_path.write_text(BALL_CSV)
        text_path = tmp_path / "page.txt"
        text_path.write_text(results_page_text)

        csv_source = file_source(csv_path, start=date(2025, 4, 1))

        assert isinstance(csv_source, CsvDrawingSource)
        assert csv_source.start == date(2025, 4, 1)
        assert isinstance(file_source(text_path), TextDrawingSource)
