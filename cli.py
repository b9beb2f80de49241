# cli.py

"""
Точка входа для запуска краулера SiteCrawler без установки пакета.

Делегирует группе команд site_crawler.cli, поэтому опции те же.

Пример запуска:
    python cli.py --config configs/default.yaml crawl --output urls.csv
"""
from site_crawler.cli import cli


if __name__ == '__main__':
    cli()
