"""texte CLI entry point.

Allows running via `python -m texte` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .constants import EditorConstants
from .version import get_version_string

USAGE = "usage: texte [--version] [--keytest] [--log PATH] [FILE]"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Echo parsed key events until ESC, using the editor's input stack."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    with TerminalInterface() as term:
        term.write("Keyboard test mode: press keys to see parsed events. Quit with ESC.\r\n")
        term.flush()
        kb = KeyboardHandler(term)
        while True:
            ev = kb.get_key_event()
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            parts = [f"type={ev.key_type.value}", f"value={_escape_bytes(ev.value)}",
                     f"raw='{_escape_bytes(ev.raw)}'"]
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl),
                                           ('shift', ev.is_shift)) if on]
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            term.write(' '.join(parts) + "\r\n")
            term.flush()


def configure_logging(path: Optional[str]) -> None:
    """Send debug records to `path`; without one, logging stays silent."""
    if path:
        logging.basicConfig(
            filename=path,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


def main(argv: Optional[list[str]] = None) -> int:
    # Very small arg parsing: version, keyboard test, log file and optional filename
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return 0

    log_path = None
    if '--log' in args:
        i = args.index('--log')
        if i + 1 >= len(args):
            print(USAGE, file=sys.stderr)
            return 2
        log_path = args[i + 1]
        del args[i:i + 2]
    if len(args) > 1 or (args and args[0].startswith('-')):
        print(USAGE, file=sys.stderr)
        return 2
    configure_logging(log_path)

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    if args:
        editor.load_file(args[0])
    try:
        editor.run()
    except KeyboardInterrupt:
        # Terminal already restored by the editor's context manager
        pass
    print(EditorConstants.GOODBYE_MESSAGE)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
