# === FILE: site_crawler/scanner.py ===
"""
Модуль-обёртка для функции запуска обхода.
"""
from site_crawler.config import CrawlerConfig
from site_crawler.crawler.crawler import AsyncCrawler
from site_crawler.crawler.models import CrawlReport


async def start_crawl(cfg: CrawlerConfig) -> CrawlReport:
    """
    Запускает асинхронный краулер в контексте и возвращает CrawlReport.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода; seed_url задаёт и старт, и область обхода.

    Returns
    -------
    CrawlReport
        Найденные URL и результат по каждой странице.
    """
    async with AsyncCrawler(cfg) as crawler:
        report = await crawler.crawl()
    return report

__all__ = ["start_crawl"]
