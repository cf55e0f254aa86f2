"""Shared fixtures for the test suite."""

from datetime import date, timedelta

import numpy as np
import pytest

from powerball_insights.analysis.statistics import analyze
from powerball_insights.config.settings import PowerballSettings
from powerball_insights.models.drawing_models import DrawingRecord


RESULTS_PAGE_TEXT = """Previous Results | Powerball
Sat, Apr 5, 2025
4
23
30
46
62
2
Power Play
2x
Wed, Apr 2, 2025
5
17
41
64
69
1
3x
Mon, Mar 31, 2025
4
23
41
52
60
2
Power Play
4x
Sat, Mar 29, 2025
1
2
"""


class ScriptedRng:
    """Stand-in for numpy's Generator that replays fixed ``random()`` values."""

    def __init__(self, values, default=0.5):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def recent_records():
    """Three drawings, newest first."""
    return [
        DrawingRecord(date=date(2025, 4, 5), numbers=(4, 23, 30, 46, 62), bonus_number=2, multiplier="2x"),
        DrawingRecord(date=date(2025, 4, 2), numbers=(5, 17, 41, 64, 69), bonus_number=1, multiplier="3x"),
        DrawingRecord(date=date(2025, 3, 31), numbers=(4, 23, 41, 52, 60), bonus_number=2, multiplier="4x"),
    ]


@pytest.fixture
def history():
    """Sixty pseudo-random drawings, newest first, three days apart."""
    rng = np.random.default_rng(2024)
    newest = date(2025, 4, 5)
    records = []
    for i in range(60):
        numbers = tuple(int(n) for n in rng.choice(np.arange(1, 70), size=5, replace=False))
        bonus = int(rng.integers(1, 27))
        records.append(DrawingRecord(date=newest - timedelta(days=3 * i), numbers=numbers, bonus_number=bonus))
    return records


@pytest.fixture
def test_settings():
    return PowerballSettings(
        scraping_request_delay=0,
        scraping_chunk_delay=0,
        scraping_retry_attempts=2,
        random_seed=None
    )


@pytest.fixture
def snapshot(history):
    return analyze(history)


@pytest.fixture
def recent_snapshot(recent_records):
    return analyze(recent_records)


@pytest.fixture
def results_page_text():
    return RESULTS_PAGE_TEXT


@pytest.fixture
def scripted_rng():
    """Factory for generators that replay the given ``random()`` values."""
    return ScriptedRng
