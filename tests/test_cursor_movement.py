"""Tests for the cursor movement rules."""

from termpad.model import TextModel, CursorPosition


def make_model(lines, cx=0, cy=0):
    m = TextModel(lines)
    m.cursor_position = CursorPosition(cx=cx, cy=cy)
    return m


def test_left_moves_within_row():
    m = make_model(["abc"], cx=2)
    m.move_left()
    assert m.cursor_position == CursorPosition(1, 0)


def test_left_at_column_zero_goes_to_end_of_previous_row():
    m = make_model(["abc", "de"], cx=0, cy=1)
    m.move_left()
    assert m.cursor_position == CursorPosition(3, 0)


def test_left_at_origin_stays():
    m = make_model(["abc"])
    m.move_left()
    assert m.cursor_position == CursorPosition(0, 0)


def test_right_moves_within_row():
    m = make_model(["abc"], cx=1)
    m.move_right()
    assert m.cursor_position == CursorPosition(2, 0)


def test_right_at_end_of_row_goes_to_next_row():
    m = make_model(["abc", "de"], cx=3)
    m.move_right()
    assert m.cursor_position == CursorPosition(0, 1)


def test_right_at_end_of_last_row_goes_past_end():
    m = make_model(["abc"], cx=3)
    m.move_right()
    assert m.cursor_position == CursorPosition(0, 1)
    # No row here, so right does nothing
    m.move_right()
    assert m.cursor_position == CursorPosition(0, 1)


def test_down_clamps_at_numrows():
    m = make_model(["a", "b"])
    for _ in range(5):
        m.move_down()
    assert m.cursor_position.cy == 2


def test_up_clamps_at_zero():
    m = make_model(["a", "b"], cy=1)
    for _ in range(5):
        m.move_up()
    assert m.cursor_position.cy == 0


def test_vertical_move_clamps_cx_to_shorter_row():
    m = make_model(["long line", "ab"], cx=8)
    m.move_down()
    assert m.cursor_position == CursorPosition(2, 1)


def test_moving_past_last_row_sets_cx_to_zero():
    m = make_model(["abc"], cx=3)
    m.move_down()
    assert m.cursor_position == CursorPosition(0, 1)


def test_home_and_end():
    m = make_model(["hello"], cx=2)
    m.move_end_of_line()
    assert m.cursor_position.cx == 5
    m.move_beginning_of_line()
    assert m.cursor_position.cx == 0


def test_end_past_last_row_does_nothing():
    m = make_model(["hello"], cy=1)
    m.move_end_of_line()
    assert m.cursor_position == CursorPosition(0, 1)


def test_movement_does_not_dirty_buffer():
    m = make_model(["abc", "def"])
    m.move_right()
    m.move_down()
    m.move_left()
    m.move_up()
    assert m.dirty is False
