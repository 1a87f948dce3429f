"""ded CLI entry point.

Allows running via `python -m ded` and provides the console script
defined in `pyproject.toml`.

Usage:
    ded [--log FILE] [FILE]
    ded --keytest
    ded --version
"""

from __future__ import annotations

import logging
import sys

from .version import get_version_string


def _escape_bytes(data: bytes) -> str:
    """Return a printable representation of raw key bytes."""
    return data.decode('latin-1').encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Run an interactive keyboard test using the editor's input stack.

    Prints each decoded key event. Quit with ESC.
    """
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    try:
        term.setup()
        term.write("Keyboard test mode - press keys to see decoded events.\r\n")
        term.write("Quit with ESC.\r\n")
        while True:
            ev = kb.get_key_event()
            if ev is None:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value!r}", f"raw='{_escape_bytes(ev.raw)}'"]
            if ev.is_sequence:
                parts.append("flags=seq")
            term.write(' '.join(parts) + "\r\n")
    finally:
        term.cleanup()


def main() -> None:
    # Very small arg parsing to support keyboard test mode, version, logging and optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    if len(args) >= 2 and args[0] == '--log':
        logging.basicConfig(
            filename=args[1],
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
        args = args[2:]

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .terminal import TerminalError

    try:
        if args and args[0] in ('--keytest', '--keyboard-test'):
            run_keyboard_test()
            return

        editor = Editor()
        if args:
            editor.open_file(args[0])
        editor.run()
    except (TerminalError, OSError) as e:
        logging.getLogger(__name__).error(f"Fatal: {e}")
        print(f"ded: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
