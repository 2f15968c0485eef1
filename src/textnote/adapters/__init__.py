"""Adapters - I/O implementations of ports."""

from .file_store import FileReadWriter
from .editor import Editor, get_editor

__all__ = [
    "FileReadWriter",
    "Editor",
    "get_editor",
]
