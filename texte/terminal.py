"""Terminal interface using Blessed for display and Curtsies for input.

The screen-command helpers at module level are stateless translations from
an abstract command (clear, move, show cursor, ...) to the escape sequence
blessed provides for it. `TerminalInterface` owns the raw-mode session and
must be used as a context manager so the terminal is restored on every exit
path.
"""

import logging
import sys
import termios
from typing import List, Optional

import blessed
from curtsies import Input
from curtsies.events import PasteEvent

logger = logging.getLogger(__name__)


def clear_screen(term) -> str:
    return term.home + term.clear


def clear_line(term) -> str:
    return term.clear_eol


def move_to(term, x: int, y: int) -> str:
    return term.move_xy(x, y)


def hide_cursor(term) -> str:
    return term.hide_cursor


def show_cursor(term) -> str:
    return term.normal_cursor


def inverse(term, text: str) -> str:
    return term.reverse + text + term.normal


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input: Optional[Input] = None
        self._pending_keys: List[str] = []
        self._saved_tty = None

    def __enter__(self) -> "TerminalInterface":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def setup(self):
        """Enter fullscreen mode and raw keyboard input.

        On failure everything already set up is undone before re-raising,
        since `__exit__` does not run when `__enter__` raises.
        """
        try:
            self.write(self.term.enter_fullscreen + clear_screen(self.term))
            self.flush()
            self.is_fullscreen = True
            keyboard_input = Input(keynames='curtsies')
            keyboard_input.__enter__()
            self._input = keyboard_input
            self._disable_flow_control()
        except BaseException:
            self.cleanup()
            raise

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q through instead of pausing output."""
        try:
            self._saved_tty = termios.tcgetattr(sys.stdin)
            new_settings = list(self._saved_tty)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            # IEXTEN would swallow Ctrl-V as "literal next"
            new_settings[3] &= ~termios.IEXTEN
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        except (termios.error, OSError) as e:
            logger.warning(f"Could not disable flow control: {e}")
            self._saved_tty = None

    def cleanup(self):
        """Restore terminal settings and leave fullscreen mode."""
        if self._saved_tty is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, self._saved_tty)
            except (termios.error, OSError) as e:
                logger.warning(f"Could not restore terminal settings: {e}")
            self._saved_tty = None
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            finally:
                self._input = None
        if self.is_fullscreen:
            self.write(clear_screen(self.term) + self.term.exit_fullscreen + show_cursor(self.term))
            self.flush()
            self.is_fullscreen = False

    def write(self, text: str):
        print(text, end='')

    def flush(self):
        sys.stdout.flush()

    def draw_line(self, y: int, text: str, view_width: int):
        """Draw one row, truncated to `view_width`, clearing what follows."""
        self.write(move_to(self.term, 0, y) + text[:view_width] + clear_line(self.term))

    def draw_status(self, y: int, text: str):
        """Draw a row in inverse video."""
        self.write(move_to(self.term, 0, y) + inverse(self.term, text))

    def place_cursor(self, y: int, x: int):
        self.write(move_to(self.term, x, y))

    def hide_cursor(self):
        self.write(hide_cursor(self.term))

    def show_cursor(self):
        self.write(show_cursor(self.term))

    def get_key(self) -> Optional[str]:
        """Block for a single keypress and return its curtsies token."""
        if self._pending_keys:
            return self._pending_keys.pop(0)
        if self._input is None:
            return None
        event = next(self._input)
        if isinstance(event, PasteEvent):
            # A paste arrives as one event; hand its keys out one at a time
            self._pending_keys.extend(event.events)
            return self._pending_keys.pop(0) if self._pending_keys else None
        return str(event)

    @property
    def width(self) -> int:
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self) -> int:
        """Terminal height in rows, status rows included."""
        return self.term.height
