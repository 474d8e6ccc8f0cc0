"""termpad - a minimal terminal text editor."""

import logging

from .buffer import Row, TextBuffer
from .model import TextModel, CursorPosition
from .render import render_tabs, cx_to_rx
from .view import Viewport, ScreenPainter, Frame

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Row',
    'TextBuffer',
    'TextModel',
    'CursorPosition',
    'render_tabs',
    'cx_to_rx',
    'Viewport',
    'ScreenPainter',
    'Frame',
]
