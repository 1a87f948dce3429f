"""Constants and configuration for the ded editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Row rendering
    TAB_STOP = 4  # Tabs expand to the next multiple of this column
    FILLER_MARKER = "~"  # Drawn on screen rows past the end of the buffer

    # Screen layout
    RESERVED_LINES = 2  # Status line and message line

    # Status messages
    MESSAGE_TIMEOUT = 5  # Seconds a status message stays visible
    FILENAME_DISPLAY_WIDTH = 20  # Characters of the filename shown in the status line
    HELP_MESSAGE = "Help | :q  = quit | :w = save | :wq = save and quit | Ctrl-A = help"

    # Keyboard timing
    INPUT_TIMEOUT = 0.1  # Poll interval while waiting for the first byte of a key (seconds)
    ESCAPE_SEQUENCE_TIMEOUT = 0.1  # Timeout for each further byte of an escape sequence (seconds)

    # File operations
    TEMP_FILE_EXT = ".ded"  # Suffix of the temporary file written before the atomic rename
    FILE_MODE = 0o644

    # Prompts
    COMMAND_PROMPT = ":%s"
    SAVE_AS_PROMPT = "Save as: %s [ESC to Cancel]"

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
