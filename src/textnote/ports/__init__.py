"""Ports - interfaces/protocols for external dependencies."""

from .read_writer import ReadWriteable, ReadWriter

__all__ = [
    "ReadWriteable",
    "ReadWriter",
]
