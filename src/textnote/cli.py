"""textnote CLI - daily notes on the command line."""

import logging
import sys
from datetime import datetime

import click

from . import config as conf
from .core.errors import ConfigError, TextnoteError
from .workflows import (
    DAY,
    archive_notes,
    next_weekday,
    open_note,
    resolve_copy_date,
    resolve_date,
)


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _load_opts() -> conf.Opts:
    try:
        return conf.load_or_create()
    except (TextnoteError, OSError) as e:
        _fail(e)


def _open(opts: conf.Opts, date: datetime, copy_date: datetime | None = None,
          sections: tuple[str, ...] = (), delete: bool = False) -> None:
    try:
        open_note(opts, date, copy_date=copy_date, sections=sections, delete=delete)
    except (TextnoteError, OSError, RuntimeError) as e:
        _fail(e)


@click.group(invoke_without_command=True,
             epilog=f"Override configuration using environment variables:\n\n\b\n{conf.describe_env_vars()}")
@click.version_option(package_name="textnote")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """textnote - simple tool for creating and organizing daily notes."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    else:
        logging.basicConfig(format="%(message)s", level=logging.INFO)

    if ctx.invoked_subcommand is None:
        ctx.invoke(today)


@main.command()
def init():
    """Initialize the application directory and configuration file."""
    try:
        conf.load_or_create()
    except (TextnoteError, OSError) as e:
        _fail(e)
    click.echo(f"Initialized textnote in {conf.get_app_dir()}")


@main.command("open")
@click.option("--date", "date_str", default="", help="Date of note to open (defaults to today)")
@click.option("--days-back", "-d", default=0, type=click.IntRange(min=0),
              help="Number of days back from today for opening a note")
@click.option("--tomorrow", "-t", is_flag=True, help="Open tomorrow's note")
@click.option("--latest", "-l", is_flag=True, help="Open the most recent dated note")
@click.option("--copy", "copy_str", default="",
              help="Date of note to copy sections from (defaults to most recent note)")
@click.option("--copy-back", "-c", default=0, type=click.IntRange(min=0),
              help="Number of days back from today for copying from a note")
@click.option("--section", "-s", "sections", multiple=True, help="Section to copy (repeatable)")
@click.option("--delete", "-x", is_flag=True, help="Delete sections from the source after copy")
def open_cmd(date_str: str, days_back: int, tomorrow: bool, latest: bool,
             copy_str: str, copy_back: int, sections: tuple[str, ...], delete: bool):
    """Open or create a note, optionally copying sections from another note."""
    opts = _load_opts()
    now = datetime.now()
    try:
        date = resolve_date(opts, now, date=date_str, days_back=days_back,
                            tomorrow=tomorrow, latest=latest)
        copy_date = None
        if sections:
            copy_date = resolve_copy_date(opts, now, copy_date=copy_str, copy_days_back=copy_back)
    except TextnoteError as e:
        _fail(e)
    _open(opts, date, copy_date=copy_date, sections=sections, delete=delete)


def _copy_options(source: str):
    """Section arguments plus --copy/--delete for the day commands."""
    def decorator(f):
        f = click.option("--delete", "-x", is_flag=True,
                         help=f"Delete copied sections from {source}")(f)
        f = click.option("--copy", "-c", "copy_", is_flag=True,
                         help=f"Copy sections from {source} (all if none given)")(f)
        return click.argument("sections", nargs=-1)(f)
    return decorator


def _open_day(opts: conf.Opts, date: datetime, copy_date: datetime,
              sections: tuple[str, ...], copy_: bool, delete: bool) -> None:
    if not copy_:
        _open(opts, date)
        return
    sections = sections or tuple(opts.section.names)
    _open(opts, date, copy_date=copy_date, sections=sections, delete=delete)


@main.command()
@_copy_options("yesterday's note")
def today(sections: tuple[str, ...] = (), copy_: bool = False, delete: bool = False):
    """Open today's note."""
    opts = _load_opts()
    now = datetime.now()
    _open_day(opts, now, now - DAY, sections, copy_, delete)


@main.command()
@_copy_options("today's note")
def yesterday(sections: tuple[str, ...], copy_: bool, delete: bool):
    """Open yesterday's note."""
    opts = _load_opts()
    now = datetime.now()
    _open_day(opts, now - DAY, now, sections, copy_, delete)


@main.command()
@_copy_options("today's note")
def tomorrow(sections: tuple[str, ...], copy_: bool, delete: bool):
    """Open tomorrow's note."""
    opts = _load_opts()
    now = datetime.now()
    _open_day(opts, now + DAY, now, sections, copy_, delete)


@main.command("next")
@click.option("--weekday", "-w", default=1, type=int,
              help="Day of the week to open (0=Sunday, 1=Monday, ...)")
@_copy_options("today's note")
def next_cmd(weekday: int, sections: tuple[str, ...], copy_: bool, delete: bool):
    """Open the note for the next given day of the week."""
    opts = _load_opts()
    now = datetime.now()
    try:
        date = next_weekday(now, weekday)
    except TextnoteError as e:
        _fail(e)
    _open_day(opts, date, now, sections, copy_, delete)


@main.command()
@click.option("--delete", "-x", is_flag=True, help="Delete daily notes after archiving")
@click.option("--no-write", "-n", is_flag=True,
              help="Do not write archive files (helpful for deleting previously archived notes)")
@click.option("--dry-run", is_flag=True,
              help="List notes that would be deleted instead of archiving (other flags are ignored)")
def archive(delete: bool, no_write: bool, dry_run: bool):
    """Consolidate old notes into monthly archive files."""
    opts = _load_opts()
    try:
        result = archive_notes(opts, datetime.now(), delete=delete, no_write=no_write, dry_run=dry_run)
    except (TextnoteError, OSError) as e:
        _fail(e)

    if dry_run:
        click.echo(f'running "archive --delete" will remove [{len(result.archived_files)}] files')
        for path in result.archived_files:
            click.echo(f"- {path}")
        return

    if result.skipped_files:
        click.echo(f"Skipped {len(result.skipped_files)} unreadable files", err=True)


@main.group(invoke_without_command=True)
@click.option("--path", "-p", "show_path", is_flag=True, help="Show path to the configuration file")
@click.option("--active", "-a", is_flag=True,
              help="Show active configuration (includes environment variable overrides)")
@click.pass_context
def config(ctx, show_path: bool, active: bool):
    """Show configuration."""
    if ctx.invoked_subcommand is not None:
        return
    try:
        config_path = conf.get_config_file_path()
        if show_path:
            click.echo(config_path)
        elif active:
            click.echo(conf.dump_config(conf.load_config()))
        elif not config_path.exists():
            _fail(ConfigError(f"cannot find configuration file [{config_path}]"))
        else:
            click.echo(config_path.read_text())
    except (TextnoteError, OSError) as e:
        _fail(e)


@config.command("update")
def config_update():
    """Rewrite the configuration file to match the active configuration."""
    try:
        active = conf.load_config()
        conf.get_config_file_path().write_text(conf.dump_config(active))
    except (TextnoteError, OSError) as e:
        _fail(e)


if __name__ == "__main__":
    main()
