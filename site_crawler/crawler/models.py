"""
Data models for the SiteCrawler crawler.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

__all__ = (
    "CrawlerError",
    "PageData",
    "CrawlOutcome",
    "PageResult",
    "CrawlState",
    "CrawlReport",
)


class CrawlerError(Exception):
    """Base class for errors raised by SiteCrawler."""


@dataclass(slots=True)
class PageData:
    """Holds the canonical URL and decoded body of a fetched page."""

    url: str
    content: str
    status: int = 200


class CrawlOutcome(str, enum.Enum):
    FETCHED = "fetched"
    FETCH_FAILED = "fetch_failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class PageResult:
    """What happened to one URL (or one raw href, for skipped links)."""

    url: str
    outcome: CrawlOutcome
    error: Optional[str] = None
    source: Optional[str] = None
    links: int = 0


@dataclass(slots=True)
class CrawlState:
    """
    Mutable state of a single crawl, shared by every crawl job.

    ``visited`` is the ledger of URLs dispatched for fetch and
    ``discovered`` the in-scope URLs seen as links. Both only grow.
    All mutators are synchronous, so under one event loop each call is
    a critical section.
    """

    visited: Set[str] = field(default_factory=set)
    discovered: Set[str] = field(default_factory=set)
    results: List[PageResult] = field(default_factory=list)
    _skipped: Set[Tuple[str, str]] = field(default_factory=set)

    def claim(self, url: str) -> bool:
        """Insert *url* into the ledger; False if it was already there."""
        if url in self.visited:
            return False
        self.visited.add(url)
        return True

    def discover(self, url: str) -> None:
        self.discovered.add(url)

    def record(self, result: PageResult) -> None:
        self.results.append(result)

    def skip(self, url: str, reason: str, source: str) -> None:
        """Record a link that is not followed, once per (url, reason)."""
        key = (url, reason)
        if key in self._skipped:
            return
        self._skipped.add(key)
        self.results.append(PageResult(url, CrawlOutcome.SKIPPED, error=reason, source=source))


@dataclass(frozen=True, slots=True)
class CrawlReport:
    """Immutable summary of a finished crawl."""

    seed: str
    discovered: FrozenSet[str]
    visited: FrozenSet[str]
    results: Tuple[PageResult, ...]
    elapsed: float = 0.0

    @classmethod
    def from_state(cls, seed: str, state: CrawlState, elapsed: float = 0.0) -> CrawlReport:
        return cls(
            seed=seed,
            discovered=frozenset(state.discovered),
            visited=frozenset(state.visited),
            results=tuple(state.results),
            elapsed=elapsed,
        )

    def _with(self, outcome: CrawlOutcome) -> List[PageResult]:
        return [r for r in self.results if r.outcome is outcome]

    @property
    def fetched(self) -> List[PageResult]:
        return self._with(CrawlOutcome.FETCHED)

    @property
    def failed(self) -> List[PageResult]:
        return self._with(CrawlOutcome.FETCH_FAILED)

    @property
    def skipped(self) -> List[PageResult]:
        return self._with(CrawlOutcome.SKIPPED)

    def outcomes(self) -> Dict[str, CrawlOutcome]:
        """Map each visited URL to its fetch outcome."""
        return {r.url: r.outcome for r in self.results if r.outcome is not CrawlOutcome.SKIPPED}
