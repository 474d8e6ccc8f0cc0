"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    # Commands other than Quit reset the pending quit confirmation
    resets_quit = True

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        self._move(editor, key_event)

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the movement."""
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_left()


class RightCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_right()


class UpLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_down()


class BeginningOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_beginning_of_line()


class EndOfLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_end_of_line()


class PageUpCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.page_up(editor.model)


class PageDownCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.viewport.page_down(editor.model)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""
        pass


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.delete_char()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.insert_newline()


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        for char in key_event.value:
            editor.model.insert_char(char)


class InsertRawCommand(EditCommand):
    """Insert the raw character of an unbound control key."""

    def _edit(self, editor, key_event):
        for char in key_event.raw:
            # Line breaks only enter the document as row splits
            if char in '\r\n':
                continue
            editor.model.insert_char(char)


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        self._execute_system(editor, key_event)

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""
        pass


class QuitCommand(SystemCommand):
    resets_quit = False

    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.save_file()


class RefreshCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        # Every keypress repaints the screen already
        pass


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register((KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
        self.register((KeyType.SPECIAL, 'end'), EndOfLineCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.CTRL, 'j'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.CTRL, 'h'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), BackspaceCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'l'), RefreshCommand())
        self.register((KeyType.SPECIAL, 'escape'), RefreshCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def lookup(self, key_event: 'KeyEvent') -> EditorCommand:
        """Return the command bound to ``key_event``.

        Unbound keys insert their text, so control characters without a
        binding go into the document unchanged.
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is not None:
            return command
        if key_event.key_type == KeyType.CTRL:
            return _INSERT_RAW
        if key_event.key_type == KeyType.REGULAR:
            return _INSERT_TEXT
        return _NO_OP


_INSERT_TEXT = InsertTextCommand()
_INSERT_RAW = InsertRawCommand()
_NO_OP = RefreshCommand()
