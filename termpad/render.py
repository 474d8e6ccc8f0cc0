"""Tab expansion and the mapping between logical and rendered columns.

A row is stored as its raw characters.  What the terminal shows is the
*rendered* form, where every tab is replaced by one or more spaces so
that the following character lands on a multiple of the tab stop.  The
cursor lives in logical columns (``cx``) but is drawn in rendered
columns (``rx``); ``cx_to_rx`` converts between the two using the
same rule as :func:`render_tabs`, so it never disagrees with the
cached rendering.
"""

from .constants import EditorConstants


def render_tabs(chars: str, tab_stop: int = EditorConstants.TAB_STOP) -> str:
    """Return ``chars`` with tabs expanded to spaces.

    A tab always emits at least one space, then pads until the output
    column is a multiple of ``tab_stop``.
    """
    if '\t' not in chars:
        return chars
    out: list[str] = []
    col = 0
    for ch in chars:
        if ch == '\t':
            out.append(' ')
            col += 1
            while col % tab_stop != 0:
                out.append(' ')
                col += 1
        else:
            out.append(ch)
            col += 1
    return ''.join(out)


def cx_to_rx(chars: str, cx: int, tab_stop: int = EditorConstants.TAB_STOP) -> int:
    """Map logical column ``cx`` to its column in the rendered row."""
    rx = 0
    for ch in chars[:cx]:
        if ch == '\t':
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx
