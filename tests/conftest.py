import pytest
from unittest.mock import Mock

from termpad.editor import Editor
from termpad.settings import EditorSettings


@pytest.fixture
def editor():
    """Editor wired to a mock terminal with a 24x80 screen."""
    terminal = Mock()
    terminal.window_size.return_value = (24, 80)
    ed = Editor(settings=EditorSettings(), terminal=terminal)
    ed.update_window_size()
    return ed
