"""Exception types shared across textnote."""


class TextnoteError(Exception):
    """Base error for textnote."""


class ParseError(TextnoteError):
    """Raised when note text cannot be parsed into a template."""


class SectionNotFoundError(TextnoteError):
    """Raised when a section name is not part of a template."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f"section [{name}] not found")


class ArchiveError(TextnoteError):
    """Raised when notes cannot be folded into or written as archives."""


class ConfigError(TextnoteError, ValueError):
    """Raised for invalid or unreadable configuration."""


class WorkflowError(TextnoteError):
    """Raised when a command cannot resolve what to operate on."""
