# site_crawler/sink.py

"""
Запись найденных URL в файл: один URL на строку, UTF-8, без заголовка.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Union

from site_crawler.crawler.models import CrawlerError
from site_crawler.logger import logger

__all__ = ["SinkError", "write_urls"]


class SinkError(CrawlerError):
    """The URL list could not be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
        self.reason = reason


def write_urls(urls: Iterable[str], output_path: Union[str, Path]) -> Path:
    """
    Перезаписывает output_path списком URL и возвращает путь к файлу.

    Порядок строк не гарантируется контрактом; сортировка нужна только
    для воспроизводимых диффов между запусками.
    """
    output = Path(output_path)
    lines = sorted(set(urls))
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text("\n".join(lines), encoding="utf-8")
    except OSError as exc:
        raise SinkError(output, exc.strerror or str(exc)) from exc
    logger.debug("Wrote %d URLs to %s", len(lines), output)
    return output
