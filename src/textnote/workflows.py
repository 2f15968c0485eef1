"""Shared workflow layer behind the CLI commands.

Each function takes resolved options and collaborators so it can run
against a temporary directory in tests.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable

from .adapters.editor import ENV_EDITOR, Editor, get_editor
from .adapters.file_store import FileReadWriter
from .archiver import Archiver
from .core.errors import SectionNotFoundError, TextnoteError, WorkflowError
from .core.template import Template, parse_template_file_name
from .ports.read_writer import ReadWriter

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)


# ============== Date resolution ==============


def get_dir_files(directory: Path | str) -> list[str]:
    """Names of regular files in a directory."""
    return sorted(p.name for p in Path(directory).iterdir() if p.is_file())


def get_latest_file(files: Iterable[str], now: datetime, file_opts) -> str:
    """Most recent dated note file that is not in the future."""
    latest = ""
    latest_delta = None
    for f in files:
        file_time = parse_template_file_name(f, file_opts)
        if file_time is None:
            continue
        delta = now - file_time
        if delta < timedelta(0):
            continue
        if latest_delta is None or delta < latest_delta:
            latest_delta = delta
            latest = f

    if not latest:
        raise WorkflowError("cannot find latest file, no timestamped template files")
    return latest


def _latest_date(opts, now: datetime, get_files) -> datetime:
    latest = get_latest_file(get_files(opts.app_dir), now, opts.file)
    return parse_template_file_name(latest, opts.file)


def resolve_date(
    opts,
    now: datetime,
    date: str = "",
    days_back: int = 0,
    tomorrow: bool = False,
    latest: bool = False,
    get_files=get_dir_files,
) -> datetime:
    """Date of the note to open from mutually exclusive choices; today by default."""
    chosen = [bool(date), days_back != 0, tomorrow, latest]
    if sum(chosen) > 1:
        raise WorkflowError("only one of [date, days-back, tomorrow, latest] flags may be used")

    if date:
        return parse_cli_date(opts, date)
    if days_back:
        return now - DAY * days_back
    if tomorrow:
        return now + DAY
    if latest:
        return _latest_date(opts, now, get_files)
    return now


def resolve_copy_date(
    opts,
    now: datetime,
    copy_date: str = "",
    copy_days_back: int = 0,
    get_files=get_dir_files,
) -> datetime:
    """Date of the note to copy sections from; the latest note by default."""
    if copy_date and copy_days_back:
        raise WorkflowError("only one of [copy, copy-back] flags may be used")
    if copy_date:
        return parse_cli_date(opts, copy_date)
    if copy_days_back:
        return now - DAY * copy_days_back
    return _latest_date(opts, now, get_files)


def parse_cli_date(opts, value: str) -> datetime:
    try:
        return datetime.strptime(value, opts.cli.time_format)
    except ValueError as e:
        raise WorkflowError(f"malformed date [{value}], expected format [{opts.cli.time_format}]") from e


def next_weekday(now: datetime, weekday: int) -> datetime:
    """Next date strictly after now falling on weekday (0=Sunday ... 6=Saturday)."""
    if weekday < 0 or weekday > 6:
        raise WorkflowError(f"invalid day of the week [{weekday}], must be in range [0, 6]")
    # datetime.weekday() counts from Monday
    current = (now.weekday() + 1) % 7
    days_ahead = (weekday - current) % 7 or 7
    return now + DAY * days_ahead


# ============== Open ==============


def copy_sections(src: Template, tgt: Template, section_names: Iterable[str]) -> None:
    for name in section_names:
        try:
            tgt.copy_section_contents(src, name)
        except SectionNotFoundError as e:
            raise WorkflowError(f"cannot copy section [{name}] from source to target: {e}") from e


def delete_sections(t: Template, section_names: Iterable[str]) -> None:
    for name in section_names:
        try:
            t.delete_section_contents(name)
        except SectionNotFoundError as e:
            raise WorkflowError(f"cannot delete section [{name}] from template: {e}") from e


def open_in_editor(t: Template, editor: Editor) -> None:
    if editor.default:
        logger.info(f"Environment variable [{ENV_EDITOR}] not set, using default editor [{editor.cmd}]")
    elif not editor.supported:
        logger.info(f"Editor [{editor.cmd}] only supported with its default arguments")
    editor.open(t)


def open_note(
    opts,
    date: datetime,
    copy_date: datetime | None = None,
    sections: Iterable[str] = (),
    delete: bool = False,
    rw: ReadWriter | None = None,
    editor: Editor | None = None,
) -> Template:
    """
    Create a note if needed and open it in the editor.

    With sections, their contents are first copied from the note for
    copy_date (and removed from it when delete is set).
    """
    rw = rw or FileReadWriter()
    editor = editor or get_editor(os.environ.get(ENV_EDITOR))
    sections = list(sections)
    t = Template(opts, date)

    if not sections:
        rw.write_if_not_exists(t)
        open_in_editor(t, editor)
        return t

    if copy_date is None:
        raise WorkflowError("a copy date is required to copy sections")
    src = Template(opts, copy_date)
    try:
        rw.read(src)
    except (OSError, TextnoteError) as e:
        raise WorkflowError(f"cannot read source file for copy [{src.get_file_path()}]: {e}") from e
    if rw.exists(t):
        rw.read(t)

    copy_sections(src, t, sections)

    if delete:
        delete_sections(src, sections)
        rw.overwrite(src)

    rw.overwrite(t)
    open_in_editor(t, editor)
    return t


# ============== Archive ==============


@dataclass
class ArchiveResult:
    """Outcome of an archive run."""

    archived_files: list[Path] = field(default_factory=list)
    skipped_files: list[str] = field(default_factory=list)
    deleted_files: list[Path] = field(default_factory=list)
    written: bool = False


def archive_notes(
    opts,
    now: datetime,
    delete: bool = False,
    no_write: bool = False,
    dry_run: bool = False,
    rw: ReadWriter | None = None,
) -> ArchiveResult:
    """
    Archive every old enough note in the app directory.

    Unreadable notes are logged and skipped. A dry run only reports
    which files an archive with delete would remove.
    """
    archiver = Archiver(opts, rw or FileReadWriter(), now)
    result = ArchiveResult()

    for file_name in get_dir_files(opts.app_dir):
        # parse date from file name, skipping non-note files
        note_date = parse_template_file_name(file_name, opts.file)
        if note_date is None:
            continue
        try:
            archiver.add(note_date)
        except TextnoteError as e:
            logger.warning(f"skipping unarchivable file [{file_name}]: {e}")
            result.skipped_files.append(file_name)

    result.archived_files = list(archiver.get_archived_files())
    if dry_run:
        return result

    if not no_write:
        archiver.write()
        result.written = True

    if not delete:
        return result

    for path in result.archived_files:
        try:
            Path(path).unlink()
        except OSError as e:
            logger.warning(f"unable to remove file [{path}]: {e}")
            continue
        result.deleted_files.append(path)
    logger.info(f"removed [{len(result.deleted_files)}] files after archiving")
    return result
