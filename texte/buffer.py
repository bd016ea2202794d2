"""The in-memory document: an ordered list of lines plus file load/save."""

import logging
import os
import tempfile
from typing import Iterator, List, Optional

from .geometry import Position
from .line import Line

logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    """Split file text on newlines.

    A trailing newline does not start an extra line, and a carriage return
    left over from CRLF endings is dropped. Empty text is one empty line.
    """
    if not text:
        return [""]
    rows = text.split("\n")
    if text.endswith("\n"):
        rows.pop()
    return [row[:-1] if row.endswith("\r") else row for row in rows]


class Buffer:
    """Ordered collection of Lines.

    The position one past the last line (``line == line_count()``) is always a
    valid insertion point; no operation ever creates a line beyond it.
    """

    def __init__(self, lines: Optional[List[Line]] = None, path: Optional[str] = None):
        self.lines: List[Line] = list(lines) if lines else []
        self.path = path
        self.load_error: Optional[Exception] = None

    @classmethod
    def from_text(cls, text: str, path: Optional[str] = None) -> "Buffer":
        return cls([Line(row) for row in split_lines(text)], path=path)

    @classmethod
    def open(cls, path: str) -> "Buffer":
        """Load `path` into a new buffer.

        Load failures never propagate: the result is a buffer with one empty
        line whose `load_error` holds the exception, for the caller to report.
        Only a missing file keeps its name; a file that exists but cannot be
        read must never be overwritten by a plain save.
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not load {path}: {e}")
            kept_path = path if isinstance(e, FileNotFoundError) else None
            buffer = cls([Line()], path=kept_path)
            buffer.load_error = e
            return buffer
        logger.debug(f"Loaded {path}")
        return cls.from_text(content, path=path)

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def line_count(self) -> int:
        return len(self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    def line_at(self, index: int) -> Optional[Line]:
        """Return the line at `index`, or None when there is none."""
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    def to_text(self) -> str:
        return "".join(line.text + "\n" for line in self.lines)

    def insert_char(self, at: Position, char: str):
        if at.line == len(self.lines):
            line = Line()
            line.insert(0, char)
            self.lines.append(line)
        elif at.line < len(self.lines):
            self.lines[at.line].insert(at.column, char)

    def insert_newline(self, at: Position):
        """Split the line at `at`, or append an empty line past the end."""
        if at.line == len(self.lines):
            self.lines.append(Line())
        elif at.line < len(self.lines):
            tail = self.lines[at.line].split(at.column)
            self.lines.insert(at.line + 1, tail)

    def delete_at(self, at: Position):
        """Delete the grapheme at `at`.

        At the end of any line but the last, the following line is joined
        onto this one. Deletion only ever goes forward; backspace is the
        coordinator's business.
        """
        if at.line >= len(self.lines):
            return
        line = self.lines[at.line]
        if at.column == len(line) and at.line + 1 < len(self.lines):
            line.append(self.lines.pop(at.line + 1))
        else:
            line.delete(at.column)

    def save(self, path: Optional[str] = None) -> int:
        """Write the buffer to `path` (default: its own path) atomically.

        Returns the number of characters written. Raises ValueError without a
        path and re-raises OSError after removing the temporary file.
        """
        path = path or self.path
        if not path:
            raise ValueError("buffer has no file name")
        content = self.to_text()

        # Temp file in the target directory so the rename stays on one filesystem
        dir_name = os.path.dirname(path) or '.'
        suffix = os.path.splitext(path)[1]
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                             dir=dir_name, suffix=suffix,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, path)
        except OSError as e:
            logger.warning(f"Could not save {path}: {e}")
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.warning(f"Could not remove temporary file {temp_filename}")
            raise
        self.path = path
        logger.debug(f"Saved {len(self.lines)} lines to {path}")
        return len(content)
