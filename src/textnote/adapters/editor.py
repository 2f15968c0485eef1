"""Editor adapter - subprocess wrapper for opening notes in a terminal editor."""

import logging
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ENV_EDITOR = "EDITOR"
DEFAULT_EDITOR = "vim"

# Editors known to accept a "+LINE" argument for the initial cursor position
LINE_ARG_EDITORS = {"vi", "vim", "nvim", "emacs", "nano"}


@dataclass
class Editor:
    """A shell command for opening a file, optionally at a given line."""

    cmd: str
    supported: bool = True
    default: bool = False

    def get_args(self, line: int) -> list[str]:
        if not self.supported:
            return []
        return [f"+{line}"]

    def open(self, rw) -> None:
        """Open a document's file, blocking until the editor exits."""
        args = [self.cmd, *self.get_args(rw.get_file_cursor_line()), str(rw.get_file_path())]
        logger.debug(f"Running editor: {args}")
        try:
            subprocess.run(args, check=True)
        except FileNotFoundError:
            raise RuntimeError(f"Editor [{self.cmd}] not found. Set ${ENV_EDITOR} to an installed editor")
        except subprocess.CalledProcessError as e:
            raise RuntimeError(f"Editor [{self.cmd}] exited with status {e.returncode}")


def get_editor(name: str | None) -> Editor:
    """Editor for a name taken from $EDITOR; vim when unset."""
    if not name:
        return Editor(cmd=DEFAULT_EDITOR, default=True)
    if name in LINE_ARG_EDITORS:
        return Editor(cmd=name)
    # unrecognized editors are passed no arguments
    return Editor(cmd=name, supported=False)
