"""Keyboard input decoding from raw terminal bytes."""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import EditorConstants


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a decoded keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw characters read from the terminal
    is_ctrl: bool = False
    is_sequence: bool = False


ESC = '\x1b'
BACKSPACE = '\x7f'

# ESC [ <letter>
_CSI_LETTERS = {
    'A': 'up',
    'B': 'down',
    'C': 'right',
    'D': 'left',
    'H': 'home',
    'F': 'end',
}

# ESC [ <digit> ~
_CSI_TILDE = {
    '1': 'home',
    '3': 'delete',
    '4': 'end',
    '5': 'page_up',
    '6': 'page_down',
    '7': 'home',
    '8': 'end',
}

# ESC O <letter>
_SS3_LETTERS = {
    'H': 'home',
    'F': 'end',
}


def _utf8_length(lead: int) -> int:
    """Number of bytes in the UTF-8 sequence starting with ``lead``.

    Returns 1 for bytes that cannot start a multi-byte sequence.
    """
    if lead >= 0xF8:
        return 1
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class _State(Enum):
    GROUND = "ground"
    ESCAPE = "escape"  # saw ESC
    CSI = "csi"  # saw ESC [
    CSI_PARAM = "csi_param"  # saw ESC [ <digit>
    SS3 = "ss3"  # saw ESC O
    UTF8 = "utf8"  # inside a multi-byte character


class KeyDecoder:
    """Finite-state parser turning a byte stream into key events.

    Bytes are fed one at a time with :meth:`feed`.  A complete key yields
    a :class:`KeyEvent`; an incomplete escape sequence yields None until
    more bytes arrive.  When input stalls in the middle of a sequence the
    caller calls :meth:`timeout`, which resolves the pending bytes to a
    plain Escape key.

    A byte that cuts a UTF-8 character short completes two keys at once:
    the truncated character and whatever the byte starts.  The second one
    is queued and handed out by :meth:`next_event`.
    """

    def __init__(self):
        self._ready: deque[KeyEvent] = deque()
        self.reset()

    def reset(self):
        self._state = _State.GROUND
        self._pending = bytearray()
        self._needed = 0

    @property
    def pending(self) -> bool:
        """True while a multi-byte key is partially read."""
        return self._state is not _State.GROUND

    def feed(self, byte: int) -> Optional[KeyEvent]:
        """Consume one byte and return the next complete key, if any."""
        event = self._step(byte)
        if event is not None:
            self._ready.append(event)
        return self.next_event()

    def next_event(self) -> Optional[KeyEvent]:
        """Return a decoded key that has not been handed out yet."""
        if self._ready:
            return self._ready.popleft()
        return None

    def _step(self, byte: int) -> Optional[KeyEvent]:
        self._pending.append(byte)
        ch = chr(byte)

        if self._state is _State.GROUND:
            if ch == ESC:
                self._state = _State.ESCAPE
                return None
            if byte >= 0x80:
                needed = _utf8_length(byte) - 1
                if needed == 0:
                    # Stray continuation byte or invalid lead byte
                    return self._finish(self._text(self._take()))
                self._state = _State.UTF8
                self._needed = needed
                return None
            return self._finish(self.parse_char(self._take()))

        if self._state is _State.ESCAPE:
            if ch == '[':
                self._state = _State.CSI
                return None
            if ch == 'O':
                self._state = _State.SS3
                return None
            return self._finish(self._escape())

        if self._state is _State.CSI:
            if ch.isdigit():
                self._state = _State.CSI_PARAM
                return None
            return self._finish(self._special(_CSI_LETTERS.get(ch)))

        if self._state is _State.CSI_PARAM:
            digit = chr(self._pending[-2])
            if ch == '~':
                return self._finish(self._special(_CSI_TILDE.get(digit)))
            return self._finish(self._escape())

        if self._state is _State.SS3:
            return self._finish(self._special(_SS3_LETTERS.get(ch)))

        # UTF8 continuation bytes
        if not 0x80 <= byte <= 0xBF:
            # Truncated character: emit what was read, then start over with this byte
            self._pending.pop()
            self._ready.append(self._finish(self._text(self._take())))
            return self._step(byte)
        self._needed -= 1
        if self._needed > 0:
            return None
        return self._finish(self._text(self._take()))

    def timeout(self) -> Optional[KeyEvent]:
        """Input stalled: resolve a partial escape sequence to Escape.

        A partial UTF-8 character is emitted as text instead.
        """
        if self._state is _State.GROUND:
            return None
        if self._state is _State.UTF8:
            return self._finish(self._text(self._take()))
        return self._finish(self._escape())

    def _take(self) -> bytearray:
        data = self._pending
        self._pending = bytearray()
        return data

    def _finish(self, event: KeyEvent) -> KeyEvent:
        self.reset()
        return event

    def _escape(self) -> KeyEvent:
        self._take()
        return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=ESC)

    @staticmethod
    def _text(data: bytearray) -> KeyEvent:
        # Same error policy as files, so typed bytes are saved unchanged
        text = bytes(data).decode(EditorConstants.FILE_ENCODING,
                                  errors=EditorConstants.FILE_ERRORS)
        return KeyEvent(key_type=KeyType.REGULAR, value=text, raw=text)

    def _special(self, name: Optional[str]) -> KeyEvent:
        if name is None:
            return self._escape()
        raw = self._take().decode('ascii', errors='replace')
        return KeyEvent(key_type=KeyType.SPECIAL, value=name, raw=raw, is_sequence=True)

    @staticmethod
    def parse_char(data) -> KeyEvent:
        """Classify a single byte that is not part of a sequence."""
        key_str = chr(data[0])
        if key_str == '\r':
            return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
        if key_str == BACKSPACE:
            return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
        if key_str == ESC:
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
        o = ord(key_str)
        # Ctrl-A .. Ctrl-Z, except Tab which is ordinary text
        if 1 <= o <= 26 and key_str != '\t':
            ch = chr(ord('a') + o - 1)
            return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)
        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)


class KeyboardHandler:
    """Reads bytes from the terminal and decodes them into key events."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface
        self.decoder = KeyDecoder()

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Return the next key event.

        With ``timeout=None`` this blocks until a key is read.  Otherwise
        None is returned if no complete key arrives in time.
        """
        while True:
            event = self.decoder.next_event()
            if event is not None:
                return event
            byte = self.terminal.read_byte(timeout)
            if byte is None:
                if self.decoder.pending:
                    return self.decoder.timeout()
                if timeout is not None:
                    return None
                continue
            event = self.decoder.feed(byte)
            if event is not None:
                return event
