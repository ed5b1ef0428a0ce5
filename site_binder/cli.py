#!/usr/bin/env python3
"""
Точка входа SiteBinder для командной строки.

Команды:
  crawl     Обойти сайт и собрать страницы в один PDF
  render    Собрать PDF из JSON-выгрузки или ответа /api/scrape
  config    Показать текущую конфигурацию
  serve     Запустить HTTP-сервис извлечения (POST /api/scrape)

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию встроенные значения)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --limit INT         Макс. число принятых страниц (override max_pages)
  --output NAME       Имя PDF-файла без расширения
  --out-dir DIR       Папка для PDF
  --delay SEC         Пауза между запросами
  --json PATH         Дополнительно сохранить страницы в JSON
  --crawl-timeout SEC Таймаут всего обхода (секунд)

Пример:
  site_binder crawl https://docs.example.com --limit 10 --output docs
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_binder import __version__
from site_binder.config import CrawlerConfig, load_config
from site_binder.engine import export_pdf, start_crawl
from site_binder.errors import SeedUnreachableError
from site_binder.logger import DEFAULT_FORMAT, init_logging
from site_binder.report.json_report import load_pages, render_json
from site_binder.service import run_service

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteBinder, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
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
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteBinder CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path) if config_path else CrawlerConfig()
    except Exception as e:
        print_error(f'Config load error: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option('--limit', '-l', 'limit', type=click.IntRange(min=1), default=None,
              help='Макс. число принятых страниц (override max_pages)')
@click.option('--output', '-o', 'output_name', default=None,
              help='Имя итогового PDF без расширения')
@click.option('--out-dir', 'out_dir', default='.', show_default=True,
              type=click.Path(file_okay=False, path_type=Path),
              help='Папка для итогового PDF')
@click.option('--delay', 'delay', type=click.FloatRange(min=0), default=None,
              help='Пауза вежливости между запросами (секунд)')
@click.option('--json', '-j', 'json_output', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='Сохранить принятые страницы в JSON')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None,
              help='Таймаут всего обхода (секунд)')
@click.pass_context
def crawl(ctx, url, limit, output_name, out_dir, delay, json_output, crawl_timeout):
    """Обойти сайт начиная с URL и сохранить страницы в PDF."""
    try:
        cfg = ctx.obj['config'].with_overrides(
            seed_url=url, max_pages=limit, output_name=output_name, delay=delay
        )
    except ValidationError as e:
        print_error(f'Invalid options: {e}')
    if cfg.seed_url is None:
        print_error('Seed URL is required (argument URL or seed_url in config)')

    click.echo(f'Crawling {cfg.seed_url} (limit {cfg.max_pages})')
    try:
        if crawl_timeout:
            results = asyncio.run(
                asyncio.wait_for(start_crawl(cfg), timeout=crawl_timeout)
            )
        else:
            results = asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except SeedUnreachableError as e:
        print_error(f'Seed URL unreachable: {e}')
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    if not results:
        print_error('No pages were accepted; nothing to render')

    if json_output:
        try:
            saved_json = render_json(results, json_output)
            click.echo(f'JSON: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')

    try:
        saved_pdf = export_pdf(results, cfg, out_dir)
    except Exception as e:
        print_error(f'Failed to render PDF: {e}')
    click.echo(f'PDF: {saved_pdf} ({len(results)} pages crawled)')


@cli.command('render', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', 'output_name', default=None,
              help='Имя итогового PDF без расширения')
@click.option('--out-dir', 'out_dir', default='.', show_default=True,
              type=click.Path(file_okay=False, path_type=Path),
              help='Папка для итогового PDF')
@click.pass_context
def render(ctx, source, output_name, out_dir):
    """Собрать PDF из JSON-выгрузки (crawl --json) или ответа /api/scrape."""
    try:
        cfg = ctx.obj['config'].with_overrides(output_name=output_name)
    except ValidationError as e:
        print_error(f'Invalid options: {e}')
    try:
        results = load_pages(source, heading_max_length=cfg.heading_max_length)
    except (OSError, ValueError) as e:
        print_error(f'Failed to read {source}: {e}')
    if not results:
        print_error(f'No pages in {source}; nothing to render')

    try:
        saved_pdf = export_pdf(results, cfg, out_dir)
    except Exception as e:
        print_error(f'Failed to render PDF: {e}')
    click.echo(f'PDF: {saved_pdf} ({len(results)} pages rendered)')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default='127.0.0.1', show_default=True)
@click.option('--port', default=8080, show_default=True, type=int)
@click.pass_context
def serve(ctx, host, port):
    """Запустить HTTP-сервис извлечения (POST /api/scrape)."""
    run_service(ctx.obj['config'], host=host, port=port)


if __name__ == "__main__":
    cli()
