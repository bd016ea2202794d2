"""A single row of text indexed by grapheme cluster."""

import grapheme

from .constants import EditorConstants


class Line:
    """One buffer row.

    Every column is a grapheme index, so an emoji or a letter followed by
    combining marks is a single unit for insert, delete and render. The
    grapheme count is cached and recomputed by each mutating call.
    """

    def __init__(self, text: str = ""):
        self._text = text
        self._length = 0
        self._update_length()

    def _update_length(self):
        self._length = grapheme.length(self._text)

    @property
    def text(self) -> str:
        """The stored text, tabs unexpanded."""
        return self._text

    def length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    def __eq__(self, other):
        if not isinstance(other, Line):
            return NotImplemented
        return self._text == other._text

    def __repr__(self):
        return f"Line({self._text!r})"

    def render(self, start: int, end: int) -> str:
        """Return graphemes [start, end) with tabs expanded.

        `end` is clamped to the length and `start` to `end`, so inverted or
        out-of-range slices come back empty.
        """
        end = max(min(end, self._length), 0)
        start = max(min(start, end), 0)
        if start == end:
            return ""
        visible = grapheme.slice(self._text, start, end)
        return visible.replace("\t", " " * EditorConstants.TAB_STOP)

    def insert(self, column: int, char: str):
        """Insert `char` before the grapheme at `column`, or append past the end."""
        if column >= self._length:
            self._text += char
        else:
            column = max(column, 0)
            self._text = (
                grapheme.slice(self._text, 0, column)
                + char
                + grapheme.slice(self._text, column)
            )
        self._update_length()

    def delete(self, column: int):
        """Remove the grapheme at `column`; past the end is a no-op."""
        if column < 0 or column >= self._length:
            return
        self._text = (
            grapheme.slice(self._text, 0, column)
            + grapheme.slice(self._text, column + 1)
        )
        self._update_length()

    def append(self, other: "Line"):
        """Concatenate `other` onto this line. The caller drops `other`."""
        self._text += other._text
        self._update_length()

    def split(self, column: int) -> "Line":
        """Truncate at `column` and return the remainder as a new line."""
        column = max(min(column, self._length), 0)
        tail = grapheme.slice(self._text, column)
        self._text = grapheme.slice(self._text, 0, column)
        self._update_length()
        return Line(tail)
