"""
CLI for the shop map data tools.
Re-parses business hours in the data file, cleans genres, and queries shops.
"""

import sys
import json
from pathlib import Path
from typing import Optional
import click
import yaml

from .models import MapConfig
from .output import to_persisted, format_display


def load_config(config_path: str) -> dict:
    """Load configuration from YAML file."""
    path = Path(config_path)

    if not path.exists():
        click.echo(f"Warning: Config file not found: {config_path}", err=True)
        click.echo("Using default configuration", err=True)
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        click.echo(f"Error loading config file: {e}", err=True)
        sys.exit(1)


def build_map_config(
    config_data: dict,
    data_file: Optional[str] = None,
    output_file: Optional[str] = None,
    debug: bool = False,
    timezone: Optional[str] = None
) -> MapConfig:
    """Build MapConfig from config file and CLI overrides."""
    data_section = config_data.get('data', {})
    genres_section = config_data.get('genres', {})
    query_section = config_data.get('query', {})
    debug_section = config_data.get('debug', {})

    defaults = MapConfig()

    return MapConfig(
        data_file=data_file or data_section.get('file', defaults.data_file),
        output_file=output_file or data_section.get('output_file'),
        genre_exclude_patterns=genres_section.get('exclude_patterns', defaults.genre_exclude_patterns),
        timezone=timezone or query_section.get('timezone', defaults.timezone),
        debug_mode=debug or debug_section.get('enabled', False),
        debug_log_file=debug_section.get('log_file', defaults.debug_log_file),
    )


@click.group()
@click.option(
    '--config',
    default='config.yaml',
    help='Path to configuration file (default: config.yaml)'
)
@click.option(
    '--data-file',
    help='Override shops JSON data file from config'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (detailed logs written to the debug log file)'
)
@click.version_option(version='1.0.0', prog_name='Shop Map Tools')
@click.pass_context
def main(ctx: click.Context, config: str, data_file: Optional[str], debug: bool):
    """
    Shop map data tools

    Keep the structured business hours in the shop data file in step with
    the scraped hours text, and query shops the way the map filters do.

    Examples:

      # Re-parse every shop's hours
      python main.py reparse

      # Preview without writing
      python main.py reparse --dry-run

      # Shops open on Friday at 23:30
      python main.py query --day fri --time 23:30
    """
    ctx.ensure_object(dict)
    ctx.obj['config_data'] = load_config(config)
    ctx.obj['data_file'] = data_file
    ctx.obj['debug'] = debug


def _config_from_context(ctx: click.Context, **overrides) -> MapConfig:
    return build_map_config(
        ctx.obj['config_data'],
        data_file=ctx.obj['data_file'],
        debug=ctx.obj['debug'],
        **overrides
    )


@main.command()
@click.option('--output-file', help='Write to this file instead of the data file')
@click.option('--dry-run', is_flag=True, help='Parse and report without writing')
@click.pass_context
def reparse(ctx: click.Context, output_file: Optional[str], dry_run: bool):
    """Recompute hours_structured for every shop."""
    from .pipeline import run_reparse

    map_config = _config_from_context(ctx, output_file=output_file)

    try:
        stats = run_reparse(map_config, dry_run=dry_run)
    except (OSError, ValueError) as e:
        click.echo(f"\nError: {e}", err=True)
        sys.exit(1)

    if stats.failed:
        sys.exit(1)


@main.command(name='clean-genres')
@click.option('--output-file', help='Write to this file instead of the data file')
@click.option('--dry-run', is_flag=True, help='Report without writing')
@click.pass_context
def clean_genres_command(ctx: click.Context, output_file: Optional[str], dry_run: bool):
    """Remove place names, prices and symbols from genre tags."""
    from .pipeline import run_clean_genres

    map_config = _config_from_context(ctx, output_file=output_file)

    try:
        run_clean_genres(map_config, dry_run=dry_run)
    except (OSError, ValueError) as e:
        click.echo(f"\nError: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument('text')
@click.option('--display', is_flag=True, help='Show human-facing hours instead of the stored form')
def parse(text: str, display: bool):
    """Parse one business-hours TEXT and print the result."""
    from .services import parse_hours

    hours = parse_hours(text)
    if display:
        result = format_display(hours)
    else:
        result = to_persisted(hours)

    click.echo(json.dumps(result, ensure_ascii=False, indent=2))


@main.command()
@click.option('--text', 'text_filter', help='Name search terms (all must match)')
@click.option('--genre', help='Genre tag')
@click.option('--day', help='Day key: mon, tue, wed, thu, fri, sat, sun, holiday')
@click.option('--time', 'time_of_day', help='Clock time, HH:MM')
@click.option('--now', 'open_now', is_flag=True, help='Only shops open right now')
@click.option('--timezone', help='Timezone for --now (default: Asia/Tokyo)')
@click.pass_context
def query(
    ctx: click.Context,
    text_filter: Optional[str],
    genre: Optional[str],
    day: Optional[str],
    time_of_day: Optional[str],
    open_now: bool,
    timezone: Optional[str]
):
    """List shops matching the map filters."""
    from .pipeline import run_query
    from .utils import get_logger

    map_config = _config_from_context(ctx, timezone=timezone)

    try:
        shops = run_query(
            map_config,
            text=text_filter,
            genre=genre,
            day=day,
            time_of_day=time_of_day,
            open_now=open_now
        )
    except (OSError, ValueError, TypeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    rows = [[shop.name, ', '.join(shop.genre), shop.hours or '-'] for shop in shops]
    get_logger().print_table(f"{len(shops)} shop(s)", rows, ["Name", "Genre", "Hours"])


if __name__ == '__main__':
    main()
