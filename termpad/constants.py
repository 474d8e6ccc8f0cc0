"""Constants and configuration defaults for the termpad editor."""


class EditorConstants:
    """Central configuration constants for the editor."""

    # Rendering
    TAB_STOP = 4  # Tabs expand to the next multiple of this column
    STATUS_LINES = 2  # Status bar + message bar below the text area
    FILENAME_STATUS_WIDTH = 20  # Max filename characters shown in the status bar
    NO_NAME = "[No Name]"

    # Status messages
    MESSAGE_TIMEOUT = 5  # Seconds a transient message stays visible
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
    SAVE_PROMPT = "Save as: %s (ESC to cancel)"
    SAVE_ABORTED_MESSAGE = "Save aborted"
    SAVED_MESSAGE = "%d bytes written to disk"
    SAVE_ERROR_MESSAGE = "Can't save! I/O error: %s"
    QUIT_WARNING = "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit."

    # Quitting
    QUIT_TIMES = 3  # Extra Ctrl-Q presses needed to discard unsaved changes

    # Terminal
    READ_TIMEOUT_DECISECONDS = 1  # VTIME: a read returns after 100ms without input

    # File operations
    FILE_ENCODING = "utf-8"
    FILE_ERRORS = "surrogateescape"  # Undecodable bytes survive a load/save round trip
