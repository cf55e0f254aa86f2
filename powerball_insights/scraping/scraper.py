"""Web scraper for Powerball previous-results pages."""

import requests
from bs4 import BeautifulSoup
import re
import time
from datetime import date, timedelta
from typing import List, Optional, Union
import logging
from dataclasses import dataclass, field

from ..config.settings import settings as default_settings, PowerballSettings
from ..exceptions import DataSourceError
from ..models.drawing_models import DEFAULT_MULTIPLIER, NUMBERS_PER_DRAWING

logger = logging.getLogger(__name__)

# "Sat, Apr 5, 2025" or, on the current-year listing, "Sat, Apr 5"
DATE_LINE = re.compile(r'^(Mon|Tue|Wed|Thu|Fri|Sat|Sun), [A-Z][a-z]+ \d{1,2}(, \d{4})?$')
NUMBER_LINE = re.compile(r'^\d+$')
MULTIPLIER_LINE = re.compile(r'^\d+x$')
MORE_PAGES_MARKERS = ('Load More', 'load-more', 'pagination', 'pager')


@dataclass
class RawDrawing:
    """Drawing as read from a source, before validation."""
    date: Union[date, str]
    numbers: List[int] = field(default_factory=list)
    bonus_number: Optional[int] = None
    multiplier: str = DEFAULT_MULTIPLIER
    source: str = "text"

    @property
    def is_complete(self) -> bool:
        return len(self.numbers) == NUMBERS_PER_DRAWING and self.bonus_number is not None


def extract_text_lines(content: str) -> List[str]:
    """Split page content into trimmed, non-empty text lines.

    HTML is flattened with BeautifulSoup so that every text node becomes its
    own line; plain text is split as is.
    """
    if re.search(r'<\s*(html|body|div|span|li)\b', content, re.IGNORECASE):
        soup = BeautifulSoup(content, 'html.parser')
        for tag in soup(['script', 'style']):
            tag.decompose()
        content = soup.get_text('\n')

    return [line.strip() for line in content.splitlines() if line.strip()]


def parse_results_text(content: str, source: str = "text") -> List[RawDrawing]:
    """Parse a previous-results listing into raw drawings.

    A date line opens a drawing; the next five bare integers are the white
    balls and the sixth the Powerball. "Power Play" followed by a value, or a
    bare "4x", sets the multiplier. Incomplete drawings are dropped.
    """
    lines = extract_text_lines(content)
    drawings: List[RawDrawing] = []
    current: Optional[RawDrawing] = None

    i = 0
    while i < len(lines):
        line = lines[i]

        if DATE_LINE.match(line):
            if current is not None and current.is_complete:
                drawings.append(current)
            current = RawDrawing(date=line, source=source)

        elif current is not None:
            if NUMBER_LINE.match(line):
                number = int(line)
                if len(current.numbers) < NUMBERS_PER_DRAWING:
                    current.numbers.append(number)
                elif current.bonus_number is None:
                    current.bonus_number = number
            elif line == 'Power Play':
                if i + 1 < len(lines):
                    current.multiplier = lines[i + 1]
                    i += 1
            elif MULTIPLIER_LINE.match(line):
                current.multiplier = line

        i += 1

    if current is not None and current.is_complete:
        drawings.append(current)

    logger.debug(f"Parsed {len(drawings)} drawings from {len(lines)} text lines")
    return drawings


class PowerballScraper:
    """Fetches drawing history from the Powerball previous-results pages."""

    def __init__(self, settings: Optional[PowerballSettings] = None,
                 session: Optional[requests.Session] = None):
        self.settings = settings or default_settings
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.settings.scraping_user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        })

    def _get(self, params: dict) -> str:
        """GET the results page, retrying transient failures."""
        attempts = max(1, self.settings.scraping_retry_attempts)
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                response = self.session.get(
                    self.settings.scraping_base_url,
                    params=params,
                    timeout=self.settings.scraping_timeout
                )
                response.raise_for_status()
                return response.text
            except requests.RequestException as e:
                last_error = e
                logger.warning(f"Request attempt {attempt}/{attempts} failed: {e}")
                if attempt < attempts:
                    time.sleep(self.settings.scraping_request_delay * attempt)

        raise DataSourceError(f"Could not fetch Powerball results: {last_error}")

    def fetch_pages(self, start: date, end: date) -> List[RawDrawing]:
        """Follow pagination for one date range until a page comes back empty."""
        drawings: List[RawDrawing] = []

        for page in range(1, self.settings.scraping_max_pages + 1):
            logger.info(f"Fetching page {page} of Powerball results ({start} to {end})")
            html = self._get({
                'gc': 'powerball',
                'sd': start.isoformat(),
                'ed': end.isoformat(),
                'page': page
            })

            page_drawings = parse_results_text(html, source="powerball.com")
            if not page_drawings:
                break

            drawings.extend(page_drawings)
            if not any(marker in html for marker in MORE_PAGES_MARKERS):
                break

            time.sleep(self.settings.scraping_request_delay)
        else:
            logger.warning(f"Reached maximum page limit ({self.settings.scraping_max_pages})")

        return drawings

    def fetch_range(self, start: date, end: date) -> List[RawDrawing]:
        """Fetch a date range, split into chunks the site serves reliably."""
        if start > end:
            raise ValueError(f"Start date {start} is after end date {end}")

        chunk = timedelta(days=self.settings.scraping_chunk_days)
        drawings: List[RawDrawing] = []

        chunk_start = start
        while chunk_start <= end:
            chunk_end = min(chunk_start + chunk, end)
            drawings.extend(self.fetch_pages(chunk_start, chunk_end))
            chunk_start = chunk_end + timedelta(days=1)
            if chunk_start <= end:
                time.sleep(self.settings.scraping_chunk_delay)

        logger.info(f"Fetched {len(drawings)} drawings between {start} and {end}")
        return drawings
