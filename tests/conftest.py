import pytest

from texte.editor import Editor
from texte.settings import EditorSettings


class FakeTerminal:
    """Stands in for TerminalInterface: fixed size, scripted keys, recorded output."""

    def __init__(self, width=20, height=8, keys=()):
        self.width = width
        self.height = height
        self.keys = list(keys)
        self.rows = {}
        self.status = None
        self.cursor = None
        self.entered = False
        self.exited = False

    def __enter__(self):
        self.entered = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.exited = True
        return False

    def get_key(self):
        if not self.keys:
            raise AssertionError("ran out of scripted keys")
        return self.keys.pop(0)

    def draw_line(self, y, text, view_width):
        self.rows[y] = text[:view_width]

    def draw_status(self, y, text):
        self.status = (y, text)

    def place_cursor(self, y, x):
        self.cursor = (y, x)

    def hide_cursor(self):
        pass

    def show_cursor(self):
        pass

    def flush(self):
        pass


@pytest.fixture
def make_editor():
    """Build an Editor on a FakeTerminal with default settings."""
    def factory(width=20, height=8, keys=(), **settings):
        terminal = FakeTerminal(width=width, height=height, keys=keys)
        return Editor(terminal=terminal, settings=EditorSettings(**settings))
    return factory
