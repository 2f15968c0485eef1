"""Document model - pure parsing, rendering and archive logic with no file I/O."""

from .errors import (
    ArchiveError,
    ConfigError,
    ParseError,
    SectionNotFoundError,
    TextnoteError,
    WorkflowError,
)
from .section import ContentItem, Section
from .template import DatedSectionGettable, SectionGettable, Template, parse_template_file_name
from .archive import MonthArchiveTemplate

__all__ = [
    # Errors
    "TextnoteError",
    "ParseError",
    "SectionNotFoundError",
    "ArchiveError",
    "ConfigError",
    "WorkflowError",
    # Model
    "ContentItem",
    "Section",
    "SectionGettable",
    "DatedSectionGettable",
    "Template",
    "MonthArchiveTemplate",
    "parse_template_file_name",
]
