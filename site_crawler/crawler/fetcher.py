"""
Fetcher module: performs a single HTTP GET per URL, without retries.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession

from site_crawler.crawler.models import CrawlerError, PageData

__all__ = ("FetchError", "Fetcher")


class FetchError(CrawlerError):
    """A page could not be loaded: network failure or non-2xx status."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class Fetcher:
    """Loads pages through a shared aiohttp session."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* once and return its decoded body.

        Timeouts, redirects and connection limits are whatever the session
        was created with. Raises FetchError on any failure.
        """
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}", resp.status)
                text = await resp.text(errors="replace")
                return PageData(url, text, resp.status)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timeout") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
        except (LookupError, UnicodeDecodeError) as exc:
            # unknown charset in Content-Type
            raise FetchError(url, f"undecodable body: {exc}") from exc
