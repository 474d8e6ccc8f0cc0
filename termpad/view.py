"""Viewport scrolling and full-frame composition.

The viewport tracks which part of the document is visible.  Offsets are
in rendered space: ``rowoff`` is the first visible row and ``coloff`` the
first visible rendered column.  Scrolling is minimal: an offset moves
only as far as needed to bring the cursor back on screen.
"""

from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants
from .model import TextModel


@dataclass
class Frame:
    """Everything needed to repaint the screen once."""
    lines: list[str]
    # None when the terminal is too short to show the line
    status: Optional[str]
    message: Optional[str]
    cursor_y: int
    cursor_x: int


class Viewport:
    rowoff: int
    coloff: int
    screenrows: int
    screencols: int
    height: int

    def __init__(self, screenrows: int = 0, screencols: int = 0):
        self.rowoff = 0
        self.coloff = 0
        self.screenrows = screenrows
        self.screencols = screencols
        self.height = screenrows + EditorConstants.STATUS_LINES
        # Cursor column computed by the last scroll(), used for painting
        self.rx = 0

    def resize(self, height: int, width: int):
        """Fit the text area to a terminal of ``height`` x ``width`` cells.

        Two rows are reserved for the status and message lines.  A
        terminal shorter than that keeps one text row and drops the
        bottom lines that do not fit.
        """
        self.height = height
        self.screenrows = max(1, height - EditorConstants.STATUS_LINES)
        self.screencols = max(1, width)

    def scroll(self, model: TextModel):
        """Adjust offsets so the cursor is inside the visible rectangle."""
        pos = model.cursor_position
        self.rx = model.rx

        if pos.cy < self.rowoff:
            self.rowoff = pos.cy
        if pos.cy >= self.rowoff + self.screenrows:
            self.rowoff = pos.cy - self.screenrows + 1

        if self.rx < self.coloff:
            self.coloff = self.rx
        if self.rx >= self.coloff + self.screencols:
            self.coloff = self.rx - self.screencols + 1

    def page_up(self, model: TextModel):
        """Move the cursor up by one screen of rows."""
        for _ in range(self.screenrows):
            model.move_up()

    def page_down(self, model: TextModel):
        """Move the cursor down by one screen of rows."""
        for _ in range(self.screenrows):
            model.move_down()

    def visible_lines(self, model: TextModel) -> list[str]:
        """Return the rendered text of every visible screen row."""
        lines = []
        for y in range(self.screenrows):
            filerow = self.rowoff + y
            if filerow < model.numrows:
                render = model.buffer[filerow].render
                lines.append(render[self.coloff:self.coloff + self.screencols])
            else:
                lines.append("")
        return lines


class ScreenPainter:
    """Compose a complete frame from the model, viewport and status text."""

    def __init__(self, viewport: Viewport):
        self.viewport = viewport

    def status_bar(self, model: TextModel, filename: Optional[str]) -> str:
        width = self.viewport.screencols
        name = (filename or EditorConstants.NO_NAME)[:EditorConstants.FILENAME_STATUS_WIDTH]
        modified = "(modified)" if model.dirty else ""
        left = f"{name} - {model.numrows} lines {modified}"[:width]
        right = f"{model.cursor_position.cy + 1}/{model.numrows}"
        if len(left) + len(right) <= width:
            return left + " " * (width - len(left) - len(right)) + right
        return left.ljust(width)

    def message_bar(self, message: Optional[str]) -> str:
        if not message:
            return ""
        return message[:self.viewport.screencols]

    def compose(self, model: TextModel, filename: Optional[str] = None,
                message: Optional[str] = None) -> Frame:
        """Scroll to the cursor, then build the frame to draw."""
        vp = self.viewport
        vp.scroll(model)
        return Frame(
            lines=vp.visible_lines(model),
            status=self.status_bar(model, filename) if vp.height > vp.screenrows else None,
            message=self.message_bar(message) if vp.height > vp.screenrows + 1 else None,
            cursor_y=model.cursor_position.cy - vp.rowoff,
            cursor_x=vp.rx - vp.coloff,
        )
