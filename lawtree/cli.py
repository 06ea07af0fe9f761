# === FILE: lawtree/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point of the LawTree crawler.

Commands:
  crawl URL   Crawl a code starting from URL and emit the tree as JSON
  config      Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)

crawl options:
  --json PATH            Save the tree to a JSON file instead of stdout
  --pretty               Indent JSON output (2 spaces)
  --crawl-timeout SEC    Timeout of the whole crawl (seconds)

Also:
  --version, -v       Show the LawTree version

Example:
  lawtree crawl https://codes.ohio.gov/ohio-revised-code --json ohio.json
"""
import asyncio
import sys
from pathlib import Path
from urllib.parse import urlsplit

import click

from lawtree import __version__
from lawtree.config import load_config
from lawtree.crawler.models import PageKind
from lawtree.engine import crawl as run_crawl
from lawtree.errors import CrawlError
from lawtree.logger import init_logging
from lawtree.report.json_report import render_json, tree_to_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])

_KIND_COLORS = {PageKind.INDEX: "blue", PageKind.TERMINAL: "green"}


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def echo_visit(kind: PageKind, url: str) -> None:
    """Progress observer: coloured page kind followed by the URL path."""
    label = click.style(f"{kind.value:<9}", fg=_KIND_COLORS[kind], bold=True)
    click.echo(f"{label} {urlsplit(url).path or '/'}", err=True)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LawTree, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stderr only when omitted)'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file):
    """LawTree command group."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the tree to a JSON file'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON output (2 spaces)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Timeout of the whole crawl (seconds)'
)
@click.pass_context
def crawl(ctx, url, json_output, pretty, crawl_timeout):
    """Crawl a code and output its tree as JSON."""
    cfg = ctx.obj['config']
    url = url or (str(cfg.root_url) if cfg.root_url else None)
    if not url:
        print_error('No URL given and no root_url in the configuration')

    click.echo(f'Crawling {url}', err=True)
    try:
        tree = asyncio.run(
            asyncio.wait_for(run_crawl(url, cfg, observer=echo_visit), timeout=crawl_timeout)
        )
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {crawl_timeout} seconds')
    except CrawlError as e:
        print_error(f'Crawl failed: {e}')

    if json_output:
        try:
            saved = render_json(tree, json_output)
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')
        click.echo(f'JSON tree: {saved}', err=True)
        return

    click.echo(tree_to_json(tree, pretty=pretty))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the current configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
