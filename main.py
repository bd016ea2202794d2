#!/usr/bin/env python3
"""texte - a minimal terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Navigate
    Type to insert text, Enter to split the line
    Backspace/Delete: Delete character (joins lines at the edges)
    Ctrl-S: Save file
    Ctrl-Q: Quit (asks twice if there are unsaved changes)
"""

import sys

from texte.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
