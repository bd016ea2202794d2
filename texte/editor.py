"""Main editor controller: session loop and render driver."""

import errno
import logging
from typing import Optional, Tuple

import grapheme

from .buffer import Buffer
from .commands import CommandRegistry
from .constants import EditorConstants
from .coordinator import Coordinator
from .geometry import Size
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .settings import EditorSettings, load_settings
from .status import StatusMessage, format_status_bar
from .terminal import TerminalInterface
from .version import get_version_string

logger = logging.getLogger(__name__)


class Editor:
    """Main text editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[EditorSettings] = None):
        """Initialize the editor components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.settings = settings or load_settings()
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self.buffer = Buffer()
        self.coordinator = Coordinator(self.buffer, self.viewport_size, self.page_height)
        self.running = False
        self.modified = False
        self.quit_armed = False  # True after a first Ctrl-Q with unsaved changes
        self.prompt_mode = None  # None or 'save_filename'
        self.prompt_input = ""
        self.status_message = StatusMessage(EditorConstants.INITIAL_STATUS)

    def text_area(self) -> Size:
        """Size of the painted text rows, status rows excluded."""
        return Size(max(self.terminal.width, 0),
                    max(self.terminal.height - EditorConstants.STATUS_ROWS, 0))

    def viewport_size(self) -> Size:
        """Viewport handed to the coordinator.

        The cursor may rest on offset + height, so the coordinator sees one
        row and one column less than is painted.
        """
        area = self.text_area()
        return Size(max(area.width - 1, 0), max(area.height - 1, 0))

    def page_height(self) -> int:
        """PageUp/PageDown move by one full screen of text rows."""
        return self.text_area().height

    def set_status(self, text: str):
        self.status_message = StatusMessage(text)

    def run(self):
        """Run the main editor loop until quit."""
        self.running = True
        logger.debug(f"Editing {self.buffer.path or EditorConstants.NO_NAME}")
        with self.terminal:
            while self.running:
                self.refresh_screen()
                key_event = self.keyboard.get_key_event()
                if key_event:
                    self._handle_key_event(key_event)
        logger.debug("Editor loop finished")

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        if self.prompt_mode == 'save_filename':
            self._handle_filename_prompt(key_event)
            return

        # Any key other than a second Ctrl-Q disarms the quit confirmation
        was_armed = self.quit_armed
        was_modified = self.command_registry.execute(self, key_event)
        if was_modified:
            self.modified = True
        if was_armed:
            self.quit_armed = False

    def request_quit(self):
        """Stop the loop, asking for a second Ctrl-Q if there are unsaved changes."""
        if self.modified and self.settings.confirm_quit and not self.quit_armed:
            self.quit_armed = True
            self.set_status(EditorConstants.QUIT_CONFIRM_MESSAGE)
            return
        self.running = False

    # --- File handling ---

    def load_file(self, filename: str):
        """Load a file into the editor, replacing the current buffer.

        A file that cannot be read leaves an empty buffer and a message in
        the message bar; it never stops the session.
        """
        self.buffer = Buffer.open(filename)
        self.coordinator = Coordinator(self.buffer, self.viewport_size, self.page_height)
        self.modified = False
        error = self.buffer.load_error
        if error is None:
            self.set_status(EditorConstants.FILE_OPENED_MESSAGE)
        elif isinstance(error, FileNotFoundError):
            self.set_status(EditorConstants.NEW_FILE_MESSAGE.format(filename))
        else:
            self.set_status(EditorConstants.OPEN_ERROR_MESSAGE.format(filename))

    def save_file(self, filename: str) -> bool:
        """Save the buffer to `filename`.

        Returns:
            True if save succeeded, False otherwise
        """
        try:
            self.buffer.save(filename)
        except PermissionError:
            self.set_status(f"Error: Permission denied saving {filename}")
            return False
        except OSError as e:
            if e.errno == errno.ENOSPC:
                self.set_status("Error: No space left on device")
            else:
                self.set_status(f"Error: Cannot save to {filename}")
            return False
        self.modified = False
        self.set_status(EditorConstants.SAVED_MESSAGE.format(filename))
        return True

    def handle_save(self):
        """Handle Ctrl-S: save in place, or ask for a file name."""
        if self.buffer.path:
            self.save_file(self.buffer.path)
        else:
            self.prompt_mode = 'save_filename'
            self.prompt_input = ""

    def _handle_filename_prompt(self, key_event: KeyEvent):
        """Handle keypress during the file name prompt."""
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            self.prompt_mode = None
            self.prompt_input = ""
            self.set_status(EditorConstants.SAVE_CANCELLED_MESSAGE)
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if self.prompt_input:
                self.save_file(self.prompt_input)
                self.prompt_mode = None
                self.prompt_input = ""
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR:
            char = key_event.value
            if ord(char[0]) >= 32:
                self.prompt_input += char

    # --- Rendering ---

    def refresh_screen(self):
        """Paint text rows, status bar and message bar, then place the cursor."""
        # The terminal may have been resized since the last key
        self.coordinator.scroll()
        area = self.text_area()
        self.terminal.hide_cursor()
        self._draw_rows(area)
        self._draw_status_bar(area)
        self._draw_message_bar(area)
        y, x = self.screen_cursor()
        self.terminal.place_cursor(y, x)
        self.terminal.show_cursor()
        self.terminal.flush()

    def screen_cursor(self) -> Tuple[int, int]:
        """Screen (row, column) of the cursor, tabs expanded."""
        if self.prompt_mode == 'save_filename':
            prompt = EditorConstants.SAVE_PROMPT.format(self.prompt_input)
            return self.text_area().height + 1, len(prompt)
        cursor = self.coordinator.cursor
        offset = self.coordinator.offset
        line = self.buffer.line_at(cursor.line)
        x = grapheme.length(line.render(offset.column, cursor.column)) if line else 0
        return cursor.line - offset.line, x

    def _draw_rows(self, area: Size):
        offset = self.coordinator.offset
        for row in range(area.height):
            line = self.buffer.line_at(offset.line + row)
            if line is not None:
                text = line.render(offset.column, offset.column + area.width)
            elif self.buffer.is_empty() and row == area.height // 3:
                text = self._welcome_message(area.width)
            else:
                text = EditorConstants.EMPTY_ROW_MARKER
            self.terminal.draw_line(row, text, area.width)

    def _welcome_message(self, width: int) -> str:
        message = EditorConstants.WELCOME_MESSAGE.format(get_version_string())
        padding = max(width - len(message), 0) // 2
        spaces = " " * max(padding - 1, 0)
        return (EditorConstants.EMPTY_ROW_MARKER + spaces + message)[:width]

    def _draw_status_bar(self, area: Size):
        status = format_status_bar(
            self.buffer.path,
            self.buffer.line_count(),
            self.coordinator.cursor.line,
            area.width,
            modified=self.modified,
        )
        self.terminal.draw_status(area.height, status)

    def _draw_message_bar(self, area: Size):
        if self.prompt_mode == 'save_filename':
            text = EditorConstants.SAVE_PROMPT.format(self.prompt_input)
        elif self.status_message.is_fresh(self.settings.message_timeout):
            text = self.status_message.text
        else:
            text = ""
        self.terminal.draw_line(area.height + 1, text, area.width)
