"""Consolidation of old daily notes into month archives."""

import logging
from datetime import datetime, timedelta
from pathlib import Path

from .core.archive import MonthArchiveTemplate
from .core.errors import ArchiveError, TextnoteError
from .core.template import Template
from .ports.read_writer import ReadWriter

logger = logging.getLogger(__name__)


class Archiver:
    """
    Folds daily notes into per-month archives.

    Call add() for each candidate note date, then write() once. Notes
    newer than ``archive.after_days`` days (relative to ``now``) are
    left alone. Archived daily files are not removed here; the caller
    must delete them (see get_archived_files) or a later run will
    archive them again.
    """

    def __init__(self, opts, rw: ReadWriter, now: datetime):
        self.opts = opts
        self.rw = rw
        self.now = now
        # formatted month -> archive for that month
        self.month_archives: dict[str, MonthArchiveTemplate] = {}
        self.archived_files: list[Path] = []

    def add(self, date: datetime) -> None:
        """Fold the note for a date into its month archive, if it is old enough."""
        if self.now - date <= timedelta(days=self.opts.archive.after_days):
            return

        t = Template(self.opts, date)
        try:
            self.rw.read(t)
        except (OSError, TextnoteError) as e:
            raise ArchiveError(f"cannot add unreadable file [{t.get_file_path()}] to archive: {e}") from e

        month_key = date.strftime(self.opts.archive.month_time_format)
        if month_key not in self.month_archives:
            self.month_archives[month_key] = MonthArchiveTemplate(self.opts, date)

        archive = self.month_archives[month_key]
        for section_name in self.opts.section.names:
            try:
                archive.archive_section_contents(t, section_name)
            except TextnoteError as e:
                raise ArchiveError(
                    f"cannot add contents from [{t.get_file_path()}] to archive: {e}"
                ) from e

        self.archived_files.append(t.get_file_path())

    def write(self) -> None:
        """Write every month archive, merging with any archive already on disk."""
        for archive in self.month_archives.values():
            if self.rw.exists(archive):
                existing = MonthArchiveTemplate(self.opts, archive.get_date())
                try:
                    self.rw.read(existing)
                except (OSError, TextnoteError) as e:
                    raise ArchiveError(
                        f"unable to open existing archive file [{existing.get_file_path()}]: {e}"
                    ) from e
                archive.merge(existing)

            try:
                self.rw.overwrite(archive)
            except OSError as e:
                raise ArchiveError(f"failed to write archive file [{archive.get_file_path()}]: {e}") from e
            logger.info(f"wrote archive file [{archive.get_file_path()}]")

    def get_archived_files(self) -> list[Path]:
        """Daily note files that were folded into an archive by add()."""
        return self.archived_files
