"""Main editor controller."""

import logging
import signal
import time
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .model import TextModel
from .settings import EditorSettings
from .terminal import TerminalInterface
from .view import ScreenPainter, Viewport

logger = logging.getLogger(__name__)

# Seconds to wait for a key before checking for a pending resize
IDLE_TIMEOUT = 0.1


class Editor:
    """Owns the document, the viewport and the terminal for one session."""

    def __init__(self, settings: Optional[EditorSettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.model = TextModel(tab_stop=self.settings.tab_stop)
        self.viewport = Viewport()
        self.painter = ScreenPainter(self.viewport)
        self.command_registry = CommandRegistry()
        self.filename: Optional[str] = None
        self.status_message = ""
        self.status_message_time = 0.0
        self.quit_times = self.settings.quit_times
        self.running = False
        self._resized = False

    # --- Status line ---

    def set_status_message(self, fmt: str, *args):
        """Show a transient message on the message line."""
        self.status_message = fmt % args if args else fmt
        self.status_message_time = time.time()

    def current_message(self, now: Optional[float] = None) -> Optional[str]:
        """Return the status message if it has not expired yet."""
        if not self.status_message:
            return None
        now = time.time() if now is None else now
        if now - self.status_message_time < self.settings.message_timeout:
            return self.status_message
        return None

    # --- Drawing ---

    def update_window_size(self):
        rows, cols = self.terminal.window_size()
        self.viewport.resize(rows, cols)

    def refresh_screen(self):
        """Scroll to the cursor and repaint the whole screen."""
        frame = self.painter.compose(self.model, self.filename, self.current_message())
        self.terminal.draw_frame(frame)

    # --- Signals ---

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        self._resized = True

    def _apply_pending_resize(self) -> bool:
        """Re-read the window size if SIGWINCH arrived since the last check."""
        if not self._resized:
            return False
        self._resized = False
        self.update_window_size()
        return True

    def _handle_terminate(self, signum, frame):
        """Turn SIGTERM/SIGHUP into SystemExit so finalizers restore the terminal."""
        del frame  # Unused
        raise SystemExit(f"termpad: terminated by signal {signum}")

    def _install_signal_handlers(self) -> dict:
        previous = {}
        handlers = {
            signal.SIGWINCH: self._handle_resize,
            signal.SIGTERM: self._handle_terminate,
            signal.SIGHUP: self._handle_terminate,
        }
        for signum, handler in handlers.items():
            previous[signum] = signal.signal(signum, handler)
        return previous

    # --- Main loop ---

    def run(self):
        """Run the main editor loop.

        The terminal is restored on every exit path, including exceptions.
        """
        previous_handlers = self._install_signal_handlers()
        try:
            self.terminal.setup()
            self.update_window_size()
            self.set_status_message(EditorConstants.HELP_MESSAGE)
            self.running = True
            need_draw = True
            while self.running:
                if self._apply_pending_resize():
                    need_draw = True
                if need_draw:
                    self.refresh_screen()
                    need_draw = False
                key_event = self.keyboard.get_key_event(timeout=IDLE_TIMEOUT)
                if key_event is None:
                    continue
                self.process_keypress(key_event)
                need_draw = True
        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)
            self.terminal.cleanup()

    def process_keypress(self, key_event: KeyEvent):
        """Perform the state transition for one key."""
        command = self.command_registry.lookup(key_event)
        if command.resets_quit:
            self.quit_times = self.settings.quit_times
        command.execute(self, key_event)

    def request_quit(self):
        """Quit, asking for confirmation when there are unsaved changes."""
        if self.model.dirty and self.quit_times > 0:
            self.set_status_message(EditorConstants.QUIT_WARNING, self.quit_times)
            self.quit_times -= 1
            return
        self.running = False

    # --- Prompt ---

    def prompt(self, template: str) -> Optional[str]:
        """Read a line of input on the message line.

        ``template`` contains one ``%s`` where the typed text is shown.
        Returns the text on Enter, or None if the user pressed Escape.
        """
        text = ""
        need_draw = True
        while True:
            if self._apply_pending_resize():
                need_draw = True
            if need_draw:
                self.set_status_message(template, text)
                self.refresh_screen()
                need_draw = False
            key_event = self.keyboard.get_key_event(timeout=IDLE_TIMEOUT)
            if key_event is None:
                continue
            need_draw = True
            if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
                self.set_status_message("")
                return None
            if key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
                if text:
                    self.set_status_message("")
                    return text
            elif (key_event.key_type == KeyType.SPECIAL and key_event.value in ('backspace', 'delete')) or \
                 (key_event.key_type == KeyType.CTRL and key_event.value == 'h'):
                text = text[:-1]
            elif key_event.key_type == KeyType.REGULAR and key_event.value.isprintable():
                text += key_event.value

    # --- Files ---

    def load_file(self, filename: str):
        """Load a file into the editor, one row per line.

        Trailing ``\\n`` and ``\\r`` characters are stripped from each line.
        Errors opening or reading the file propagate to the caller.
        """
        model = TextModel(tab_stop=self.settings.tab_stop)
        with open(filename, 'rb') as f:
            for raw_line in f:
                line = raw_line.decode(EditorConstants.FILE_ENCODING,
                                       errors=EditorConstants.FILE_ERRORS)
                model.buffer.insert_row(model.numrows, line.rstrip('\r\n'))
        model.dirty = False
        self.model = model
        self.viewport.rowoff = self.viewport.coloff = 0
        self.filename = filename
        logger.info(f"Loaded {model.numrows} lines from {filename}")

    def save_file(self) -> bool:
        """Write the document to disk.

        Prompts for a filename when the buffer is untitled.  Failures are
        reported on the message line and leave the dirty flag set.

        Returns:
            True if save succeeded, False otherwise
        """
        if self.filename is None:
            filename = self.prompt(EditorConstants.SAVE_PROMPT)
            if filename is None:
                self.set_status_message(EditorConstants.SAVE_ABORTED_MESSAGE)
                return False
            self.filename = filename

        data = self.model.buffer.rows_to_text().encode(
            EditorConstants.FILE_ENCODING, errors=EditorConstants.FILE_ERRORS)
        try:
            with open(self.filename, 'wb') as f:
                f.write(data)
        except OSError as e:
            logger.warning(f"Could not save {self.filename}: {e}")
            self.set_status_message(EditorConstants.SAVE_ERROR_MESSAGE, e.strerror or str(e))
            return False

        self.model.dirty = False
        self.set_status_message(EditorConstants.SAVED_MESSAGE, len(data))
        logger.info(f"Saved {len(data)} bytes to {self.filename}")
        return True
