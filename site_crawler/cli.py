#!/usr/bin/env python3
"""
Точка входа для запуска краулера SiteCrawler через командную строку.

Команды:
  crawl     Обойти сайт по конфигу и сохранить список найденных URL
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда crawl опции:
  --seed URL          Стартовый URL вместо seed_url из конфига
  --output PATH       Файл для списка URL (override output_path)
  --concurrency INT   Лимит одновременных запросов
  --strict-scope      Сравнивать хост и сегменты пути вместо строкового префикса

Дополнительно:
  --version, -v       Показать версию SiteCrawler

Пример:
  site_crawler --config configs/default.yaml crawl --output urls.csv --concurrency 20
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_crawler import __version__
from site_crawler.config import DEFAULT_CONFIG_PATH, CrawlerConfig, load_config
from site_crawler.logger import init_logging, logger
from site_crawler.scanner import start_crawl
from site_crawler.sink import SinkError, write_urls

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCrawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteCrawler CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--seed', '-s', 'seed',
    default=None,
    help='Стартовый URL (override seed_url)'
)
@click.option(
    '--output', '-o', 'output_path',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Файл для списка URL (override output_path)'
)
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число одновременных запросов (по умолчанию без ограничения)'
)
@click.option(
    '--strict-scope', is_flag=True, default=False,
    help='Проверять схему, хост и границы сегментов пути'
)
@click.pass_context
def crawl(ctx, seed, output_path, concurrency, strict_scope):
    """Обойти сайт и записать найденные URL в файл."""
    cfg = ctx.obj['config']
    overrides = {}
    if seed is not None:
        overrides['seed_url'] = seed
    if output_path is not None:
        overrides['output_path'] = output_path
    if concurrency is not None:
        overrides['concurrency'] = concurrency
    if strict_scope:
        overrides['strict_scope'] = True
    if overrides:
        # повторная валидация: --seed проверяется так же, как seed_url в конфиге
        try:
            cfg = CrawlerConfig.model_validate({**cfg.model_dump(), **overrides})
        except ValidationError as e:
            print_error(f'Некорректные параметры обхода: {e}')

    click.echo(f'Starting crawl: {cfg.seed_url}')
    try:
        report = asyncio.run(start_crawl(cfg))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    try:
        saved = write_urls(report.discovered, cfg.output_path)
    except SinkError as e:
        logger.error("%s", e)
        # список не должен потеряться: выводим его в stdout
        for url in sorted(report.discovered):
            click.echo(url)
        print_error(f'Ошибка при сохранении списка URL: {e}')

    click.echo(f'Discovered {len(report.discovered)} URLs')
    if report.failed:
        click.echo(f'Failed pages: {len(report.failed)}')
    click.echo(f'URL list: {saved}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
