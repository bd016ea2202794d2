"""Cursor and viewport coordination.

The coordinator owns the cursor and the scroll offset. Every intent runs in
three steps, each testable on its own:

1. movement computes a new logical position from the buffer shape,
2. the column is clamped to the length of the destination line,
3. the scroll step shifts the viewport just enough to keep the cursor visible.

Up and Down do not remember a desired column; moving through a short line
pulls the cursor left for good.
"""

from enum import Enum
from typing import Callable, Optional

from .buffer import Buffer
from .geometry import Position, Size


class Intent(Enum):
    """Navigation and edit intents, decoupled from raw key codes."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    INSERT_CHAR = "insert_char"
    NEWLINE = "newline"
    DELETE = "delete"
    BACKSPACE = "backspace"


MOVEMENTS = frozenset({
    Intent.UP, Intent.DOWN, Intent.LEFT, Intent.RIGHT,
    Intent.PAGE_UP, Intent.PAGE_DOWN, Intent.HOME, Intent.END,
})


class Direction(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class Coordinator:
    """Keeps cursor, buffer and viewport mutually consistent."""

    def __init__(self, buffer: Buffer, viewport_size: Callable[[], Size],
                 page_height: Optional[Callable[[], int]] = None):
        """
        Args:
            buffer: The document being edited
            viewport_size: Called on every use to get the visible size;
                the terminal may have been resized between calls
            page_height: Rows jumped by PageUp/PageDown; defaults to the
                viewport height
        """
        self.buffer = buffer
        self._viewport_size = viewport_size
        self._page_height = page_height
        self.cursor = Position()
        self.offset = Position()

    def _page(self) -> int:
        if self._page_height is not None:
            return self._page_height()
        return self._viewport_size().height

    def _line_length(self, index: int) -> int:
        line = self.buffer.line_at(index)
        return len(line) if line is not None else 0

    def apply(self, intent: Intent, char: Optional[str] = None) -> bool:
        """Run one intent followed by the scroll step.

        Returns:
            True if the intent edited the buffer
        """
        modified = False
        if intent in MOVEMENTS:
            self.move(intent)
        elif intent is Intent.INSERT_CHAR:
            if char:
                self.insert_char(char)
                modified = True
        elif intent is Intent.NEWLINE:
            self.insert_newline()
            modified = True
        elif intent is Intent.DELETE:
            modified = self.erase(Direction.FORWARD)
        elif intent is Intent.BACKSPACE:
            modified = self.erase(Direction.BACKWARD)
        self.scroll()
        return modified

    def move(self, intent: Intent):
        """Move the cursor, then clamp its column to the destination line."""
        column, line = self.cursor.column, self.cursor.line
        line_count = self.buffer.line_count()
        width = self._line_length(line)

        if intent is Intent.UP:
            line = max(line - 1, 0)
        elif intent is Intent.DOWN:
            line = min(line + 1, line_count)
        elif intent is Intent.LEFT:
            if column > 0:
                column -= 1
            elif line > 0:
                line -= 1
                column = self._line_length(line)
        elif intent is Intent.RIGHT:
            if column < width:
                column += 1
            elif line < line_count:
                line += 1
                column = 0
        elif intent is Intent.PAGE_UP:
            line = max(line - self._page(), 0)
        elif intent is Intent.PAGE_DOWN:
            line = min(line + self._page(), line_count)
        elif intent is Intent.HOME:
            column = 0
        elif intent is Intent.END:
            column = width
        else:
            raise ValueError(f"Not a movement intent: {intent}")

        # The destination line may be shorter than the one we left
        column = min(column, self._line_length(line))
        self.cursor = Position(column, line)

    def insert_char(self, char: str):
        if char == "\n":
            self.insert_newline()
            return
        line = self.cursor.line
        before = self._line_length(line)
        self.buffer.insert_char(self.cursor, char)
        # A combining mark or joiner merges into a neighbour and adds no column
        after = self._line_length(line)
        column = max(self.cursor.column + after - before, 0)
        self.cursor = Position(min(column, after), line)

    def insert_newline(self):
        self.buffer.insert_newline(self.cursor)
        self.move(Intent.RIGHT)

    def erase(self, direction: Direction) -> bool:
        """Delete one grapheme or line break next to the cursor.

        FORWARD deletes under the cursor and leaves it in place. BACKWARD
        steps left first, so at column 0 the previous line absorbs the
        current one. Backspace at the origin does nothing.

        Returns:
            True if the buffer changed
        """
        if direction is Direction.BACKWARD:
            if self.cursor.column == 0 and self.cursor.line == 0:
                return False
            self.move(Intent.LEFT)
        line = self.buffer.line_at(self.cursor.line)
        if line is None:
            return False
        before = (self.buffer.line_count(), line.text)
        self.buffer.delete_at(self.cursor)
        return (self.buffer.line_count(), line.text) != before

    def scroll(self):
        """Shift the offset so the cursor is inside the viewport.

        Width and height are floored at 1 so the offset never passes the
        cursor on a degenerate viewport.
        """
        size = self._viewport_size()
        width = max(size.width, 1)
        height = max(size.height, 1)
        column, line = self.cursor.column, self.cursor.line

        if line < self.offset.line:
            self.offset.line = line
        elif line > self.offset.line + height:
            self.offset.line = max(line - height + 1, 0)

        if column < self.offset.column:
            self.offset.column = column
        elif column > self.offset.column + width:
            self.offset.column = max(column - width + 1, 0)
