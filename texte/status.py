"""Message bar and status bar text."""

import time
from dataclasses import dataclass, field
from typing import Optional

from .constants import EditorConstants


@dataclass
class StatusMessage:
    """A transient message and the moment it was set."""
    text: str
    time: float = field(default_factory=time.monotonic)

    def is_fresh(self, timeout: float, now: Optional[float] = None) -> bool:
        """True while the message is younger than `timeout` seconds."""
        if now is None:
            now = time.monotonic()
        return now - self.time < timeout


def format_status_bar(file_name: Optional[str], line_count: int, cursor_line: int,
                      width: int, modified: bool = False) -> str:
    """Compose the status bar, padded or truncated to `width`.

    File name and line count sit on the left, the cursor line on the right.
    """
    name = (file_name or EditorConstants.NO_NAME)[:EditorConstants.FILE_NAME_DISPLAY_LIMIT]
    status = f"{name} - {line_count} lines"
    if modified:
        status += EditorConstants.MODIFIED_MARKER
    # The one-past-end line reads as the last line
    line_indicator = f"{min(cursor_line + 1, line_count)} / {line_count}"
    padding = width - len(status) - len(line_indicator)
    if padding > 0:
        status += " " * padding
    return (status + line_indicator)[:width]
