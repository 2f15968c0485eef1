"""Text scanning for sections and dated content items."""

import re
from datetime import datetime
from typing import Iterator

from .errors import ParseError
from .section import ContentItem, Section


def strip_prefix_suffix(line: str, prefix: str, suffix: str) -> str:
    return line.removesuffix(suffix).removeprefix(prefix)


def section_name_pattern(prefix: str, suffix: str) -> re.Pattern:
    """Pattern matching a whole section marker line, e.g. ``___TODO___``."""
    try:
        return re.compile(
            rf"^{re.escape(prefix)}[A-Za-z]+{re.escape(suffix)}$", re.MULTILINE
        )
    except re.error as e:
        raise ParseError(f"invalid section prefix [{prefix}] or suffix [{suffix}]") from e


def is_item_header(line: str, prefix: str, suffix: str, time_format: str) -> bool:
    """True if the line is a wrapped date, e.g. ``[2020-12-19]``."""
    if not line.startswith(prefix) or not line.endswith(suffix):
        return False
    try:
        datetime.strptime(strip_prefix_suffix(line, prefix, suffix), time_format)
    except ValueError:
        return False
    return True


def parse_section_contents(
    lines: list[str], prefix: str, suffix: str, time_format: str
) -> list[ContentItem]:
    """Group lines into content items, starting a new item at each item header."""
    contents: list[ContentItem] = []
    if not lines:
        return contents

    header = ""
    body: list[str] = []
    for i, line in enumerate(lines):
        if not is_item_header(line, prefix, suffix, time_format):
            body.append(line)
            continue
        # a header on the very first line has no preceding item to close
        if i > 0:
            contents.append(ContentItem(header=header, text="\n".join(body)))
        header = line
        body = []

    if body or header:
        contents.append(ContentItem(header=header, text="\n".join(body)))
    return contents


def parse_section(text: str, opts) -> Section:
    """Parse one section span (marker line through the next marker)."""
    if not text:
        raise ParseError("cannot parse section from empty input")

    lines = text.split("\n")
    name = strip_prefix_suffix(lines[0], opts.section.prefix, opts.section.suffix)
    contents = parse_section_contents(
        lines[1:],
        opts.archive.section_content_prefix,
        opts.archive.section_content_suffix,
        opts.archive.section_content_time_format,
    )

    # padding-only sections carry no user data; dated items are kept even
    # when their text is blank
    if all(item.is_blank() for item in contents):
        return Section(name)
    return Section(name, contents)


def split_sections(body: str, opts) -> Iterator[Section]:
    """Yield sections in document order; each span ends where the next marker starts."""
    pattern = section_name_pattern(opts.section.prefix, opts.section.suffix)
    starts = [m.start() for m in pattern.finditer(body)]
    for i, start in enumerate(starts):
        end = starts[i + 1] if i + 1 < len(starts) else len(body)
        yield parse_section(body[start:end], opts)
