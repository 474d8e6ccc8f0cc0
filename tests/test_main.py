"""Tests for the command line entry point."""

from unittest.mock import patch

from termpad.__main__ import main


def test_version_flag(capsys):
    with patch('termpad.__main__.get_version_string', return_value="termpad 0.1.0 (abc1234 today)"):
        assert main(["--version"]) == 0
    assert "termpad 0.1.0" in capsys.readouterr().out


def test_missing_file_is_fatal(tmp_path, capsys):
    missing = tmp_path / "missing.txt"
    with patch('termpad.__main__.load_settings') as mock_settings, \
         patch('termpad.editor.Editor.run') as mock_run, \
         patch('termpad.terminal.TerminalInterface.clear_screen'):
        from termpad.settings import EditorSettings
        mock_settings.return_value = EditorSettings()
        assert main([str(missing)]) == 1
    mock_run.assert_not_called()
    err = capsys.readouterr().err
    assert err.startswith(f"termpad: {missing}: ")


def test_opens_file_and_runs(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("one\ntwo\n")
    from termpad.settings import EditorSettings
    with patch('termpad.__main__.load_settings', return_value=EditorSettings()), \
         patch('termpad.editor.Editor.run', autospec=True) as mock_run:
        assert main([str(path)]) == 0
    editor = mock_run.call_args[0][0]
    assert editor.model.lines() == ["one", "two"]
    assert editor.filename == str(path)


def test_terminal_failure_exits_with_status_1(capsys):
    import termios
    from termpad.settings import EditorSettings
    with patch('termpad.__main__.load_settings', return_value=EditorSettings()), \
         patch('termpad.editor.Editor.run', side_effect=termios.error(25, "Inappropriate ioctl for device")), \
         patch('termpad.terminal.TerminalInterface.clear_screen'):
        assert main([]) == 1
    assert "termpad: terminal:" in capsys.readouterr().err
