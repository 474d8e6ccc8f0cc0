"""termpad CLI entry point.

Allows running via `python -m termpad` and provides the console script
defined in `pyproject.toml`.

Usage:
    termpad [FILE]
    termpad --version
    termpad --keytest
"""

from __future__ import annotations

import logging
import sys
import termios

from .settings import EditorSettings, load_settings
from .version import get_version_string

logger = logging.getLogger(__name__)


def _escape_text(s: str) -> str:
    """Return a printable representation of raw key text."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging(settings: EditorSettings) -> None:
    """Send log records to the configured file; never to the screen."""
    if not settings.log_file:
        return
    logging.basicConfig(
        filename=settings.log_file,
        level=settings.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def run_keyboard_test() -> None:
    """Print decoded key events until Ctrl-Q is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    print("Keyboard test mode - press keys to see decoded events.")
    print("Quit with Ctrl-Q.")

    term = TerminalInterface()
    kb = KeyboardHandler(term)
    with term.raw_mode:
        while True:
            ev = kb.get_key_event(timeout=None)
            if ev is None:
                continue
            if ev.key_type == KeyType.CTRL and ev.value == 'q':
                break
            parts = [f"type={ev.key_type.value}", f"value={_escape_text(ev.value)}",
                     f"raw='{_escape_text(ev.raw)}'"]
            if ev.is_sequence:
                parts.append("seq")
            # Output post-processing is off in raw mode
            term.write(' '.join(parts) + "\r\n")


def die(editor, context: str, error: BaseException) -> int:
    """Clear the screen and report a fatal error. Returns the exit status."""
    logger.error(f"{context}: {error}")
    try:
        editor.terminal.clear_screen()
    except OSError:
        pass
    print(f"termpad: {context}: {error}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    # Very small arg parsing: version, keyboard test mode and optional filename
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return 0

    settings = load_settings()
    configure_logging(settings)

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor(settings)
    if args:
        try:
            editor.load_file(args[0])
        except OSError as e:
            return die(editor, args[0], e)
    try:
        editor.run()
    except (OSError, termios.error) as e:
        return die(editor, "terminal", e)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
