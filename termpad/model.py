from dataclasses import dataclass
from typing import Optional

from .buffer import Row, TextBuffer
from .constants import EditorConstants
from .render import cx_to_rx


@dataclass
class CursorPosition:
    """Cursor in logical coordinates.

    ``cy`` may equal the number of rows, meaning "one past the last row";
    typing there appends a new row.
    """
    cx: int = 0
    cy: int = 0


class TextModel:
    buffer: TextBuffer
    cursor_position: CursorPosition

    def __init__(self, lines: Optional[list[str]] = None,
                 tab_stop: int = EditorConstants.TAB_STOP):
        self.buffer = TextBuffer(lines, tab_stop=tab_stop)
        self.cursor_position = CursorPosition()

    @property
    def numrows(self) -> int:
        return self.buffer.numrows

    @property
    def dirty(self) -> bool:
        return self.buffer.dirty

    @dirty.setter
    def dirty(self, value: bool):
        self.buffer.dirty = value

    @property
    def current_row(self) -> Optional[Row]:
        return self.buffer.row(self.cursor_position.cy)

    @property
    def rx(self) -> int:
        """Rendered column of the cursor, derived from cx and the row."""
        row = self.current_row
        if row is None:
            return 0
        return cx_to_rx(row.chars, self.cursor_position.cx, self.buffer.tab_stop)

    def lines(self) -> list[str]:
        return self.buffer.lines()

    # --- Editing ---

    def insert_char(self, ch: str):
        """Insert ``ch`` at the cursor and advance past it."""
        pos = self.cursor_position
        if pos.cy == self.buffer.numrows:
            self.buffer.insert_row(self.buffer.numrows, "")
        self.buffer.insert_char(pos.cy, pos.cx, ch)
        pos.cx += 1

    def insert_newline(self):
        """Split the current row at the cursor and move to the new row."""
        pos = self.cursor_position
        if pos.cx == 0:
            self.buffer.insert_row(pos.cy, "")
        else:
            tail = self.buffer.truncate_row(pos.cy, pos.cx)
            self.buffer.insert_row(pos.cy + 1, tail)
        pos.cy += 1
        pos.cx = 0

    def delete_char(self):
        """Delete the character before the cursor (backspace).

        At the start of a row the row is joined onto the previous one.
        """
        pos = self.cursor_position
        if pos.cy == self.buffer.numrows:
            return
        if pos.cx == 0 and pos.cy == 0:
            return
        if pos.cx > 0:
            self.buffer.delete_char(pos.cy, pos.cx - 1)
            pos.cx -= 1
        else:
            previous = self.buffer[pos.cy - 1]
            pos.cx = len(previous)
            self.buffer.append_to_row(pos.cy - 1, self.buffer[pos.cy].chars)
            self.buffer.delete_row(pos.cy)
            pos.cy -= 1

    # --- Movement ---

    def move_left(self):
        pos = self.cursor_position
        if pos.cx > 0:
            pos.cx -= 1
        elif pos.cy > 0:
            pos.cy -= 1
            pos.cx = len(self.buffer[pos.cy])
        self._clamp_cx()

    def move_right(self):
        pos = self.cursor_position
        row = self.current_row
        if row is not None and pos.cx < len(row):
            pos.cx += 1
        elif row is not None and pos.cx == len(row):
            pos.cy += 1
            pos.cx = 0
        self._clamp_cx()

    def move_up(self):
        pos = self.cursor_position
        if pos.cy > 0:
            pos.cy -= 1
        self._clamp_cx()

    def move_down(self):
        pos = self.cursor_position
        if pos.cy < self.buffer.numrows:
            pos.cy += 1
        self._clamp_cx()

    def move_beginning_of_line(self):
        self.cursor_position.cx = 0

    def move_end_of_line(self):
        row = self.current_row
        if row is not None:
            self.cursor_position.cx = len(row)

    def _clamp_cx(self):
        """Keep cx inside the row the cursor landed on."""
        row = self.current_row
        rowlen = len(row) if row is not None else 0
        if self.cursor_position.cx > rowlen:
            self.cursor_position.cx = rowlen
