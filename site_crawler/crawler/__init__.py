"""
Same-scope site crawler: fetching, link extraction and traversal.
"""
from site_crawler.crawler.crawler import AsyncCrawler
from site_crawler.crawler.fetcher import FetchError, Fetcher
from site_crawler.crawler.link_extractor import extract_links, in_scope, resolve_url
from site_crawler.crawler.models import (
    CrawlerError,
    CrawlOutcome,
    CrawlReport,
    CrawlState,
    PageData,
    PageResult,
)

__all__ = [
    "AsyncCrawler",
    "CrawlerError",
    "CrawlOutcome",
    "CrawlReport",
    "CrawlState",
    "FetchError",
    "Fetcher",
    "PageData",
    "PageResult",
    "extract_links",
    "in_scope",
    "resolve_url",
]
