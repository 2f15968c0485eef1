"""Month archive: many daily notes folded into one dated document."""

import re
from datetime import datetime
from pathlib import Path

from .errors import SectionNotFoundError
from .section import ContentItem
from .template import DatedSectionGettable, Template

_BLANK_LINES = re.compile(r"\n{2,}")


class MonthArchiveTemplate(Template):
    """
    Template for one month of archived notes.

    Each archived section item carries a header with its source date.
    Items are sorted by that header when rendered, so the header time
    format must be fixed-width for string order to match date order.
    """

    def __init__(self, opts, date: datetime):
        super().__init__(opts, date.replace(day=1, hour=0, minute=0, second=0, microsecond=0))

    def get_file_path(self) -> Path:
        name = f"{self.opts.archive.file_prefix}{self.date.strftime(self.opts.archive.month_time_format)}"
        if self.opts.file.ext:
            name = f"{name}.{self.opts.file.ext}"
        return Path(self.opts.app_dir) / name

    def make_content_header(self, date: datetime) -> str:
        return (
            f"{self.opts.archive.section_content_prefix}"
            f"{date.strftime(self.opts.archive.section_content_time_format)}"
            f"{self.opts.archive.section_content_suffix}"
        )

    def archive_section_contents(self, src: DatedSectionGettable, section_name: str) -> None:
        """
        Append a source section's text as one item dated by the source.

        Existing headers in the source are dropped; the archive assigns
        provenance. Sections with no text beyond newlines add nothing.
        """
        tgt_sec, src_sec = self._get_section_pair(src, section_name)

        txt = "".join(item.text for item in src_sec.contents)
        if not txt.replace("\n", ""):
            return

        tgt_sec.contents.append(
            ContentItem(header=self.make_content_header(src.get_date()), text=txt)
        )

    def merge(self, other: "MonthArchiveTemplate") -> None:
        """Append every section's items from another archive after this one's."""
        for name in self.section_index:
            tgt_sec = self.get_section(name)
            try:
                src_sec = other.get_section(name)
            except SectionNotFoundError as e:
                raise SectionNotFoundError(name, f"failed to find section [{name}] in source") from e
            tgt_sec.contents.extend(src_sec.contents)

    # The archive header is not a daily header; its date comes from the caller.
    def _check_header(self, header: str) -> None:
        pass

    def render(self) -> str:
        parts = [self._make_header()]
        for section in self.sections:
            parts.append(section.get_name_string(self.opts.section.prefix, self.opts.section.suffix))
            section.sort_contents()
            body = _BLANK_LINES.sub("\n", section.get_content_string())
            parts.append(body + "\n" * self.opts.section.trailing_newlines)
        return "".join(parts)

    def _make_header(self) -> str:
        return (
            f"{self.opts.archive.header_prefix}"
            f"{self.date.strftime(self.opts.archive.month_time_format)}"
            f"{self.opts.archive.header_suffix}\n"
            + "\n" * self.opts.header.trailing_newlines
        )
