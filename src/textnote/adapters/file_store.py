"""File-based note storage adapter."""

from ..ports.read_writer import ReadWriteable


class FileReadWriter:
    """
    File-based note storage.

    Implements ReadWriter protocol. Each document knows its own path.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read(self, rw: ReadWriteable) -> None:
        """Populate a document from its file."""
        with open(rw.get_file_path(), encoding=self.encoding) as f:
            rw.load(f)

    def overwrite(self, rw: ReadWriteable) -> None:
        """Write a document, replacing any existing file."""
        with open(rw.get_file_path(), "w", encoding=self.encoding) as f:
            rw.write(f)

    def exists(self, rw: ReadWriteable) -> bool:
        """Check if a document's file exists."""
        return rw.get_file_path().exists()

    def write_if_not_exists(self, rw: ReadWriteable) -> None:
        """Write a document only when nothing is at its path yet."""
        if self.exists(rw):
            return
        self.overwrite(rw)
