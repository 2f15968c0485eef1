"""Daily note template: a fixed, ordered set of named sections."""

from datetime import datetime
from pathlib import Path
from typing import Protocol, TextIO

from .errors import ParseError, SectionNotFoundError
from .parse import split_sections, strip_prefix_suffix
from .section import Section


class SectionGettable(Protocol):
    """Anything that can hand out its sections by name."""

    def get_section(self, name: str) -> Section:
        ...


class DatedSectionGettable(SectionGettable, Protocol):
    """A section source that also knows which day it belongs to."""

    def get_date(self) -> datetime:
        ...


class Template:
    """
    In-memory model of one daily note.

    The section names and their order come from configuration and never
    change; only section contents are mutated.
    """

    def __init__(self, opts, date: datetime):
        self.opts = opts
        self.date = date
        self.sections: list[Section] = []
        self.section_index: dict[str, int] = {}
        for i, name in enumerate(opts.section.names):
            self.sections.append(Section(name))
            self.section_index[name] = i

    def get_date(self) -> datetime:
        return self.date

    def get_file_path(self) -> Path:
        """Path of the note file inside the app directory."""
        name = self.date.strftime(self.opts.file.time_format)
        if self.opts.file.ext:
            name = f"{name}.{self.opts.file.ext}"
        return Path(self.opts.app_dir) / name

    def get_file_cursor_line(self) -> int:
        """Line of the first section's first content line (1-indexed)."""
        return self.opts.header.trailing_newlines + 3

    def get_section(self, name: str) -> Section:
        idx = self.section_index.get(name)
        if idx is None:
            raise SectionNotFoundError(name)
        return self.sections[idx]

    def copy_section_contents(self, src: SectionGettable, section_name: str) -> None:
        """Append the contents of a source section to the same section here."""
        tgt_sec, src_sec = self._get_section_pair(src, section_name)
        tgt_sec.contents.extend(src_sec.contents)

    def delete_section_contents(self, section_name: str) -> None:
        try:
            sec = self.get_section(section_name)
        except SectionNotFoundError as e:
            raise SectionNotFoundError(section_name, f"cannot delete section [{section_name}]") from e
        sec.delete_contents()

    def _get_section_pair(self, src: SectionGettable, section_name: str) -> tuple[Section, Section]:
        try:
            tgt_sec = self.get_section(section_name)
        except SectionNotFoundError as e:
            raise SectionNotFoundError(
                section_name, f"failed to find section [{section_name}] in target"
            ) from e
        try:
            src_sec = src.get_section(section_name)
        except SectionNotFoundError as e:
            raise SectionNotFoundError(
                section_name, f"failed to find section [{section_name}] in source"
            ) from e
        return tgt_sec, src_sec

    # ============== Parsing ==============

    def load(self, reader: TextIO) -> None:
        """Populate sections from note text. Sections absent from the text are left as-is."""
        raw = reader.read()
        header, _, body = raw.partition("\n")
        self._check_header(header)

        for section in split_sections(body, self.opts):
            idx = self.section_index.get(section.name)
            if idx is None:
                raise ParseError(f"cannot load undefined section [{section.name}]")
            self.sections[idx] = section

    def _check_header(self, header: str) -> None:
        date_str = strip_prefix_suffix(header, self.opts.header.prefix, self.opts.header.suffix)
        try:
            datetime.strptime(date_str, self.opts.header.time_format)
        except ValueError as e:
            raise ParseError(f"failed to parse header [{header}]") from e

    # ============== Rendering ==============

    def write(self, writer: TextIO) -> None:
        writer.write(self.render())

    def render(self) -> str:
        parts = [self._make_header()]
        for section in self.sections:
            parts.append(section.get_name_string(self.opts.section.prefix, self.opts.section.suffix))
            body = section.get_content_string()
            # empty sections still occupy a fixed number of lines
            if not body:
                body = "\n" * self.opts.section.trailing_newlines
            parts.append(body)
        return "".join(parts)

    def _make_header(self) -> str:
        return (
            f"{self.opts.header.prefix}"
            f"{self.date.strftime(self.opts.header.time_format)}"
            f"{self.opts.header.suffix}\n"
            + "\n" * self.opts.header.trailing_newlines
        )

    def __str__(self) -> str:
        return self.render()


def parse_template_file_name(file_name: str, file_opts) -> datetime | None:
    """Date encoded in a daily note's file name, or None for any other file."""
    stem = file_name
    if file_opts.ext:
        stem = stem.removesuffix(f".{file_opts.ext}")
    try:
        return datetime.strptime(stem, file_opts.time_format)
    except ValueError:
        return None
