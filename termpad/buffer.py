"""Row storage for the editor.

The buffer is an ordered list of rows.  Each row keeps its raw
characters together with the tab-expanded rendering, and the rendering
is rebuilt on every write so that the two never drift apart.
"""

from typing import Optional

from .constants import EditorConstants
from .render import render_tabs


class Row:
    """A single line of text, without its trailing newline."""

    def __init__(self, chars: str = "", tab_stop: int = EditorConstants.TAB_STOP):
        self.tab_stop = tab_stop
        self._chars = ""
        self.render = ""
        self.chars = chars

    @property
    def chars(self) -> str:
        return self._chars

    @chars.setter
    def chars(self, value: str):
        self._chars = value
        self.render = render_tabs(value, self.tab_stop)

    def __len__(self):
        return len(self._chars)

    def __repr__(self):
        return f"Row({self._chars!r})"

    def insert_char(self, at: int, ch: str):
        """Insert ``ch`` at ``at``; out-of-range positions append."""
        if at < 0 or at > len(self._chars):
            at = len(self._chars)
        self.chars = self._chars[:at] + ch + self._chars[at:]

    def delete_char(self, at: int) -> bool:
        """Delete the character at ``at``. Returns False if out of range."""
        if at < 0 or at >= len(self._chars):
            return False
        self.chars = self._chars[:at] + self._chars[at + 1:]
        return True

    def append(self, text: str):
        self.chars = self._chars + text

    def truncate(self, at: int) -> str:
        """Cut the row at ``at`` and return the removed tail."""
        tail = self._chars[at:]
        self.chars = self._chars[:at]
        return tail


class TextBuffer:
    """Ordered sequence of rows plus the document dirty flag."""

    def __init__(self, lines: Optional[list[str]] = None,
                 tab_stop: int = EditorConstants.TAB_STOP):
        self.tab_stop = tab_stop
        self.rows: list[Row] = [Row(line, tab_stop) for line in (lines or [])]
        self.dirty = False

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def __len__(self):
        return len(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def row(self, index: int) -> Optional[Row]:
        """Return the row at ``index`` or None past the end of the document."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def insert_row(self, at: int, content: str = ""):
        """Insert a new row at ``at``, shifting later rows down.

        ``at`` must be in ``[0, numrows]``.
        """
        if at < 0 or at > len(self.rows):
            raise IndexError(f"row index {at} out of range 0..{len(self.rows)}")
        self.rows.insert(at, Row(content, self.tab_stop))
        self.dirty = True

    def delete_row(self, at: int):
        if at < 0 or at >= len(self.rows):
            return
        del self.rows[at]
        self.dirty = True

    def insert_char(self, row_index: int, at: int, ch: str):
        self.rows[row_index].insert_char(at, ch)
        self.dirty = True

    def delete_char(self, row_index: int, at: int):
        if self.rows[row_index].delete_char(at):
            self.dirty = True

    def append_to_row(self, row_index: int, text: str):
        self.rows[row_index].append(text)
        self.dirty = True

    def truncate_row(self, row_index: int, at: int) -> str:
        tail = self.rows[row_index].truncate(at)
        self.dirty = True
        return tail

    def lines(self) -> list[str]:
        """Return the raw content of every row."""
        return [row.chars for row in self.rows]

    def rows_to_text(self) -> str:
        """Serialize the document: every row followed by a single newline."""
        return ''.join(row.chars + '\n' for row in self.rows)
