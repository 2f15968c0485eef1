"""Note storage interface."""

from pathlib import Path
from typing import Protocol, TextIO


class ReadWriteable(Protocol):
    """A document that can be loaded from and written to a file."""

    def load(self, reader: TextIO) -> None:
        ...

    def write(self, writer: TextIO) -> None:
        ...

    def get_file_path(self) -> Path:
        ...


class ReadWriter(Protocol):
    """Interface for moving documents to and from storage."""

    def read(self, rw: ReadWriteable) -> None:
        """Populate a document from its file."""
        ...

    def overwrite(self, rw: ReadWriteable) -> None:
        """Write a document, replacing any existing file."""
        ...

    def exists(self, rw: ReadWriteable) -> bool:
        """Check if a document's file exists."""
        ...

    def write_if_not_exists(self, rw: ReadWriteable) -> None:
        """Write a document only when nothing is at its path yet."""
        ...
