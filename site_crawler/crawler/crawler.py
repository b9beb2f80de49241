from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from typing import Optional, Set

from aiohttp import ClientSession, ClientTimeout

from site_crawler.config import CrawlerConfig, validate_seed_url
from site_crawler.crawler.fetcher import FetchError, Fetcher
from site_crawler.crawler.link_extractor import extract_links, in_scope, resolve_url
from site_crawler.crawler.models import CrawlOutcome, CrawlReport, CrawlState, PageResult
from site_crawler.logger import LOGGER_NAME

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """
    Recursive same-scope crawler.

    Every in-scope link seen for the first time becomes its own task right
    away; ``concurrency`` in the config only caps how many of them may be
    inside a fetch at once. The crawl ends when no task is left.
    """

    def __init__(self, config: CrawlerConfig, fetcher: Optional[Fetcher] = None) -> None:
        self.config = config
        self.seed = self._canonical_seed(str(config.seed_url))
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger(LOGGER_NAME)
        self._fetcher = fetcher
        self._state = CrawlState()
        self._scope = self.seed
        self._limit: Optional[asyncio.Semaphore] = None
        self._tasks: Set[asyncio.Task[None]] = set()
        self._pending = 0
        self._idle: Optional[asyncio.Event] = None

    async def __aenter__(self) -> AsyncCrawler:
        if self._fetcher is not None:
            return self
        kwargs = {}
        if self.config.timeout is not None:
            kwargs["timeout"] = ClientTimeout(total=self.config.timeout)
        if self.config.user_agent is not None:
            kwargs["headers"] = {"User-Agent": self.config.user_agent}
        self.session = ClientSession(**kwargs)
        self._fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, seed: Optional[str] = None) -> CrawlReport:
        if self._fetcher is None:
            raise RuntimeError("Session not initialized")
        root = self._canonical_seed(seed) if seed is not None else self.seed
        self._scope = root
        self._state = CrawlState()
        self._limit = asyncio.Semaphore(self.config.concurrency) if self.config.concurrency else None
        self._idle = asyncio.Event()
        self._pending = 0

        self.logger.info("Crawl started: %s", root)
        start = time.monotonic()
        self._schedule(root)
        try:
            await self._idle.wait()
        finally:
            await self._cancel_outstanding()
        duration = time.monotonic() - start

        report = CrawlReport.from_state(root, self._state, duration)
        self.logger.info(
            "Crawl finished: %d URLs discovered, %d pages fetched, %d failed in %.2f s",
            len(report.discovered), len(report.fetched), len(report.failed), duration,
        )
        return report

    def _schedule(self, url: str) -> None:
        # Claiming and task creation happen with no await in between, so two
        # pages linking to the same URL can never both dispatch a fetch.
        if not self._state.claim(url):
            return
        self._pending += 1
        task = asyncio.create_task(self._visit(url))
        self._tasks.add(task)
        task.add_done_callback(self._job_done)

    def _job_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        self._pending -= 1
        if self._pending == 0 and self._idle is not None:
            self._idle.set()

    async def _visit(self, url: str) -> None:
        try:
            async with self._limit or contextlib.nullcontext():
                page = await self._fetcher.fetch(url)
            hrefs = extract_links(page.content)
        except FetchError as exc:
            self.logger.warning("Error crawling %s: %s", url, exc.reason)
            self._state.record(PageResult(url, CrawlOutcome.FETCH_FAILED, error=exc.reason))
            return
        except Exception as exc:
            self.logger.exception("Unexpected error while crawling %s", url)
            self._state.record(PageResult(url, CrawlOutcome.FETCH_FAILED, error=repr(exc)))
            return

        self._state.record(PageResult(url, CrawlOutcome.FETCHED, links=len(hrefs)))
        for href in hrefs:
            link = resolve_url(href, url)
            if link is None:
                self.logger.debug("Skipping unresolvable href %r on %s", href, url)
                self._state.skip(href, "unresolvable", url)
                continue
            if not in_scope(link, self._scope, self.config.strict_scope):
                self._state.skip(link, "out of scope", url)
                continue
            self._state.discover(link)
            self._schedule(link)

    async def _cancel_outstanding(self) -> None:
        pending = list(self._tasks)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    @staticmethod
    def _canonical_seed(url: str) -> str:
        # links are compared against the seed as strings, so both go through
        # resolve_url; HttpUrl validation rejects non-http(s) seeds first
        canonical = resolve_url(validate_seed_url(url), url)
        if canonical is None:
            raise ValueError(f"Invalid seed URL: {url!r}")
        return canonical
