"""Text buffer holding the lines of the file being edited."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)

NO_NAME = "[No Name]"
UNNAMED_RECOVERY = ".unnamed.recovery"


class BufferError(Exception):
    """Base class for buffer errors."""


class FileNotFoundInBufferError(BufferError):
    """The buffer's file does not exist or no path is set."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path


class InvalidLineIndexError(BufferError, IndexError):
    """A line index lies outside the buffer."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Invalid line index: {index}")
        self.index = index


class InvalidColumnIndexError(BufferError, IndexError):
    """A column index lies outside a line."""

    def __init__(self, col: int, line: int) -> None:
        super().__init__(f"Invalid column index: {col} in line {line}")
        self.col = col
        self.line = line


def _split_lines(text: str) -> list[str]:
    """Split on newlines, dropping one trailing empty line and any trailing CR."""
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def _write(path: str, content: str) -> None:
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise BufferError(f"IO error: {exc}") from exc


@dataclass
class Buffer:
    """The lines of a document together with its path and modified flag."""

    file: str | None = None
    lines: list[str] = field(default_factory=lambda: [""])
    modified: bool = False

    @classmethod
    def from_file(cls, file: str | None) -> Buffer:
        """Load a buffer from ``file``, or create an empty one when it is None."""
        if file is None:
            log.info("Creating new empty buffer")
            return cls(file=None, lines=[""])
        log.info("Opening file: %s", file)
        if not os.path.exists(file):
            log.warning("File not found: %s", file)
            raise FileNotFoundInBufferError(file)
        try:
            with open(file, encoding="utf-8", newline="") as handle:
                text = handle.read()
        except OSError as exc:
            raise BufferError(f"IO error: {exc}") from exc
        lines = _split_lines(text)
        log.debug("Read %d lines from file", len(lines))
        return cls(file=file, lines=lines)

    def __len__(self) -> int:
        return len(self.lines)

    def _check_line(self, index: int) -> None:
        if not 0 <= index < len(self.lines):
            raise InvalidLineIndexError(index)

    def get_line(self, index: int) -> str:
        """Return the text of line ``index``."""
        self._check_line(index)
        return self.lines[index]

    def set_line(self, index: int, text: str) -> None:
        """Replace the text of line ``index``."""
        self._check_line(index)
        self.lines[index] = text
        self.modified = True

    def insert_char(self, line: int, col: int, c: str) -> None:
        """Insert ``c`` before column ``col`` of ``line``."""
        content = self.get_line(line)
        if not 0 <= col <= len(content):
            raise InvalidColumnIndexError(col, line)
        self.lines[line] = content[:col] + c + content[col:]
        self.modified = True

    def remove_char(self, line: int, col: int) -> str:
        """Remove and return the character at column ``col`` of ``line``."""
        content = self.get_line(line)
        if not 0 <= col < len(content):
            raise InvalidColumnIndexError(col, line)
        removed = content[col]
        self.lines[line] = content[:col] + content[col + 1:]
        self.modified = True
        return removed

    def line_length(self, index: int) -> int:
        """Return the length of line ``index``."""
        return len(self.get_line(index))

    def display_name(self) -> str:
        """Return the path shown for this buffer."""
        return self.file if self.file is not None else NO_NAME

    def join_with_previous_line(self, line_index: int) -> int:
        """Append line ``line_index`` to the one before it.

        Returns the length the previous line had before the join.
        """
        if line_index == 0:
            raise InvalidLineIndexError(line_index)
        self._check_line(line_index)
        current = self.lines.pop(line_index)
        previous_length = len(self.lines[line_index - 1])
        self.lines[line_index - 1] += current
        self.modified = True
        return previous_length

    def split_line(self, line: int, col: int) -> None:
        """Break ``line`` at ``col``, moving the tail onto a new following line."""
        content = self.get_line(line)
        if not 0 <= col <= len(content):
            raise InvalidColumnIndexError(col, line)
        self.lines[line] = content[:col]
        self.lines.insert(line + 1, content[col:])
        self.modified = True

    def delete_line(self, index: int) -> None:
        """Delete line ``index``; a lone line is cleared instead."""
        if not self.lines:
            raise InvalidLineIndexError(index)
        if len(self.lines) == 1:
            self.lines[0] = ""
            self.modified = True
            return
        self._check_line(index)
        del self.lines[index]
        self.modified = True

    def _content(self) -> str:
        return "\n".join(self.lines)

    def save(self) -> None:
        """Write the buffer to its file."""
        if self.file is None:
            raise FileNotFoundInBufferError("No file path set")
        content = self._content()
        _write(self.file, content)
        log.debug("Successfully saved %d bytes to %s", len(content), self.file)

    def save_as(self, file_path: str) -> None:
        """Write the buffer to ``file_path`` and make it the buffer's file."""
        log.info("Saving as: %s", file_path)
        if os.path.exists(file_path):
            log.debug("File exists, overwriting")
        else:
            path = Path(file_path)
            if not file_path or path.parent == path:
                log.warning("Invalid path provided for save_as")
                raise FileNotFoundInBufferError("Invalid path")
            log.debug("Creating directory structure: %s", path.parent)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise BufferError(f"IO error: {exc}") from exc
        content = self._content()
        _write(file_path, content)
        log.debug("Successfully saved %d bytes", len(content))
        self.file = file_path
        self.modified = False

    def try_save_recovery(self) -> str | None:
        """Write unsaved changes to a recovery file.

        Returns the recovery path written, or None if nothing was written.
        """
        if not self.modified:
            log.debug("Buffer not modified, skipping recovery save")
            return None
        recovery_path = (
            f"{self.file}.recovery" if self.file is not None else UNNAMED_RECOVERY
        )
        content = self._content()
        try:
            _write(recovery_path, content)
        except BufferError as exc:
            log.error("Failed to save recovery file: %s", exc)
            return None
        log.debug("Recovery file saved: %s (%d bytes)", recovery_path, len(content))
        return recovery_path