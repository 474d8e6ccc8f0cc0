"""Tests for frame composition and terminal output."""

import io
from unittest.mock import patch

from termpad.model import TextModel
from termpad.terminal import TerminalInterface
from termpad.view import Frame, ScreenPainter, Viewport


class FakeTerm:
    """Terminal stand-in that renders capabilities as readable tokens."""
    hide_cursor = "<hide>"
    normal_cursor = "<show>"
    home = "<home>"
    clear = "<clear>"
    clear_eol = "<eol>"
    reverse = "<rev>"
    normal = "<normal>"
    enter_fullscreen = "<fs>"
    exit_fullscreen = "</fs>"
    height = 6
    width = 20

    def move(self, y, x):
        return f"<{y},{x}>"


def make_painter(rows, cols):
    vp = Viewport()
    vp.resize(rows, cols)
    return ScreenPainter(vp)


def test_visible_lines_show_render_and_empty_rows():
    m = TextModel(["a\tb", "second"])
    painter = make_painter(6, 20)
    frame = painter.compose(m)
    assert frame.lines == ["a   b", "second", "", ""]


def test_lines_are_clipped_to_screen_width():
    m = TextModel(["0123456789abcdef"])
    painter = make_painter(4, 5)
    frame = painter.compose(m)
    assert frame.lines[0] == "01234"


def test_horizontal_offset_slices_render():
    m = TextModel(["0123456789abcdef", "short"])
    painter = make_painter(4, 5)
    m.cursor_position.cx = 12
    frame = painter.compose(m)
    assert painter.viewport.coloff == 8
    assert frame.lines == ["89abc", ""]
    assert frame.cursor_x == 4
    assert frame.cursor_y == 0


def test_cursor_position_is_relative_to_offsets():
    m = TextModel([f"line {i}" for i in range(30)])
    painter = make_painter(12, 40)
    m.cursor_position.cy = 20
    m.cursor_position.cx = 3
    frame = painter.compose(m)
    assert painter.viewport.rowoff == 11
    assert frame.cursor_y == 9
    assert frame.cursor_x == 3
    assert frame.lines[0] == "line 11"


def test_cursor_drawn_after_tab():
    m = TextModel(["\tx"])
    painter = make_painter(5, 20)
    m.cursor_position.cx = 1
    frame = painter.compose(m)
    assert frame.cursor_x == 4


def test_status_bar_layout():
    m = TextModel(["a", "b", "c"])
    painter = make_painter(5, 40)
    m.cursor_position.cy = 1
    status = painter.status_bar(m, "notes.txt")
    assert len(status) == 40
    assert status.startswith("notes.txt - 3 lines ")
    assert status.endswith("2/3")


def test_status_bar_shows_modified_and_no_name():
    m = TextModel()
    m.insert_char("x")
    painter = make_painter(5, 40)
    status = painter.status_bar(m, None)
    assert status.startswith("[No Name] - 1 lines (modified)")


def test_status_bar_truncates_long_filename():
    m = TextModel(["a"])
    painter = make_painter(5, 80)
    status = painter.status_bar(m, "a" * 30 + ".txt")
    assert status.startswith("a" * 20 + " - 1 lines")


def test_status_bar_drops_right_part_when_too_narrow():
    m = TextModel(["a"])
    painter = make_painter(5, 10)
    status = painter.status_bar(m, "file.txt")
    assert status == "file.txt -"


def test_message_is_clipped():
    painter = make_painter(5, 8)
    assert painter.message_bar("a long message") == "a long m"
    assert painter.message_bar(None) == ""


def test_compose_frame_paints_everything_in_order():
    terminal = TerminalInterface(terminal=FakeTerm())
    frame = Frame(lines=["ab", ""], status="STATUS", message="hi", cursor_y=1, cursor_x=0)
    out = terminal.compose_frame(frame)
    assert out == (
        "<hide><home>"
        "<0,0>ab<eol>"
        "<1,0><eol>"
        "<2,0><rev>STATUS<normal>"
        "<3,0>hi<eol>"
        "<1,0><show>"
    )


def test_draw_frame_writes_once():
    terminal = TerminalInterface(terminal=FakeTerm())
    frame = Frame(lines=["x"], status="s", message="", cursor_y=0, cursor_x=1)
    with patch.object(terminal, 'write') as mock_write:
        terminal.draw_frame(frame)
    mock_write.assert_called_once_with(terminal.compose_frame(frame))


def test_two_row_terminal_drops_message_line():
    painter = make_painter(2, 20)
    frame = painter.compose(TextModel(["a"]), "f.txt", "hello")
    assert frame.lines == ["a"]
    assert frame.status.startswith("f.txt - 1 lines")
    assert frame.message is None


def test_one_row_terminal_shows_text_only():
    painter = make_painter(1, 20)
    frame = painter.compose(TextModel(["a"]), "f.txt", "hello")
    assert frame.lines == ["a"]
    assert frame.status is None
    assert frame.message is None


def test_compose_frame_skips_lines_that_do_not_fit():
    terminal = TerminalInterface(terminal=FakeTerm())
    frame = Frame(lines=["ab"], status=None, message=None, cursor_y=0, cursor_x=2)
    assert terminal.compose_frame(frame) == "<hide><home><0,0>ab<eol><0,2><show>"


def test_write_shows_undecodable_bytes_as_question_marks():
    terminal = TerminalInterface(terminal=FakeTerm())
    with patch('termpad.terminal.sys.stdout', new_callable=io.StringIO) as out:
        terminal.write("a\udce9b")
    assert out.getvalue() == "a?b"
