"""Terminal interface: raw mode via termios, display via Blessed."""

import os
import select
import sys
import termios
from typing import Optional

import blessed

from .constants import EditorConstants
from .view import Frame


class RawMode:
    """Scoped raw-mode acquisition for a terminal file descriptor.

    ``enable()`` saves the current attributes and switches the terminal to
    raw mode; ``disable()`` puts the saved attributes back.  Used as a
    context manager the restore happens on every exit path.
    """

    def __init__(self, fd: Optional[int] = None):
        self._fd = fd
        self._saved: Optional[list] = None

    @property
    def fd(self) -> int:
        if self._fd is None:
            self._fd = sys.stdin.fileno()
        return self._fd

    def enable(self) -> list:
        """Enter raw mode and return the prior settings."""
        prior = termios.tcgetattr(self.fd)
        raw = list(prior)
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK
                    | termios.ISTRIP | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        cc = list(raw[6])
        cc[termios.VMIN] = 0
        cc[termios.VTIME] = EditorConstants.READ_TIMEOUT_DECISECONDS
        raw[6] = cc
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        self._saved = prior
        return prior

    def disable(self, prior: Optional[list] = None):
        """Restore ``prior`` (or the settings saved by ``enable``)."""
        settings = prior if prior is not None else self._saved
        if settings is None:
            return
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, settings)
        self._saved = None

    @property
    def active(self) -> bool:
        return self._saved is not None

    def __enter__(self):
        self.enable()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.disable()
        return False


class TerminalInterface:
    """Handles terminal I/O: raw mode, key bytes and full-frame output."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.raw_mode = RawMode()
        self.is_fullscreen = False

    def setup(self):
        """Enter raw mode and the alternate screen."""
        self.raw_mode.enable()
        self.write(self.term.enter_fullscreen + self.term.clear)
        self.is_fullscreen = True

    def cleanup(self):
        """Leave the alternate screen and restore the terminal attributes."""
        try:
            if self.is_fullscreen:
                self.write(self.term.exit_fullscreen + self.term.normal_cursor)
                self.is_fullscreen = False
        finally:
            self.raw_mode.disable()

    def write(self, data: str):
        # Undecodable bytes kept as surrogates are shown as '?', one cell each
        sys.stdout.write(data.encode(EditorConstants.FILE_ENCODING, errors='replace')
                         .decode(EditorConstants.FILE_ENCODING))
        sys.stdout.flush()

    def clear_screen(self):
        """Clear the screen and home the cursor."""
        self.write(self.term.home + self.term.clear)

    def window_size(self) -> tuple[int, int]:
        """Return ``(rows, cols)``; a zero-sized terminal is an error."""
        rows, cols = self.term.height, self.term.width
        if not rows or not cols:
            raise OSError("getWindowSize: terminal reports a zero size")
        return rows, cols

    def read_byte(self, timeout: Optional[float] = None) -> Optional[int]:
        """Read one byte of input.

        With ``timeout=None`` a single read is attempted, returning after
        the raw-mode read timeout if nothing arrived.  Otherwise select()
        waits at most ``timeout`` seconds first.
        """
        fd = self.raw_mode.fd
        if timeout is not None:
            ready, _, _ = select.select([fd], [], [], timeout)
            if not ready:
                return None
        try:
            data = os.read(fd, 1)
        except BlockingIOError:
            return None
        if not data:
            return None
        return data[0]

    def compose_frame(self, frame: Frame) -> str:
        """Build the escape-sequence string that paints ``frame``."""
        term = self.term
        out = [term.hide_cursor, term.home]
        for y, line in enumerate(frame.lines):
            out.append(term.move(y, 0) + line + term.clear_eol)
        status_y = len(frame.lines)
        if frame.status is not None:
            out.append(term.move(status_y, 0) + term.reverse + frame.status + term.normal)
        if frame.message is not None:
            out.append(term.move(status_y + 1, 0) + frame.message + term.clear_eol)
        out.append(term.move(frame.cursor_y, frame.cursor_x))
        out.append(term.normal_cursor)
        return ''.join(out)

    def draw_frame(self, frame: Frame):
        """Repaint the whole screen in one write."""
        self.write(self.compose_frame(frame))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
