# File: tests/conftest.py
import asyncio
from collections import Counter
from typing import Dict, Iterable, Optional

import pytest

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.fetcher import FetchError
from site_crawler.crawler.models import PageData
from site_crawler.logger import configure

SEED = "https://example.com/"


class FakeFetcher:
    """
    In-memory stand-in for Fetcher: serves *site* (URL -> HTML), counts
    calls per URL and tracks the peak number of fetches in flight.
    """

    def __init__(
        self,
        site: Dict[str, str],
        delay: float = 0.0,
        failing: Iterable[str] = (),
    ) -> None:
        self.site = site
        self.delay = delay
        self.failing = set(failing)
        self.calls: Counter = Counter()
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> PageData:
        self.calls[url] += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if url in self.failing:
                raise FetchError(url, "connection refused")
            if url not in self.site:
                raise FetchError(url, "HTTP 404", 404)
            return PageData(url, self.site[url])
        finally:
            self.in_flight -= 1


@pytest.fixture()
def make_config():
    """
    Return a factory building CrawlerConfig with test defaults.
    """

    def _make(seed_url: str = SEED, concurrency: Optional[int] = None, **kwargs) -> CrawlerConfig:
        return CrawlerConfig(seed_url=seed_url, concurrency=concurrency, **kwargs)

    return _make


@pytest.fixture()
def mock_page_data() -> PageData:
    """
    Provide a simple PageData instance with HTML content.
    """
    html = '<html><body><a href="/a">A</a><a href="https://other.com/">X</a></body></html>'
    return PageData(url=SEED, content=html)


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests bind the project logger to CliRunner streams; rebind after each test."""
    yield
    configure(level="INFO")
