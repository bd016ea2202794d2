"""Constants and configuration for the texte editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Rendering
    TAB_STOP = 4  # Spaces a tab expands to on screen (storage keeps the tab)
    EMPTY_ROW_MARKER = "~"  # Drawn on rows past the end of the buffer
    STATUS_ROWS = 2  # Status bar + message bar below the text area

    # Status bar
    FILE_NAME_DISPLAY_LIMIT = 30  # File names are truncated to this many characters
    NO_NAME = "[No Name]"
    MODIFIED_MARKER = " (modified)"

    # Status messages
    STATUS_MESSAGE_TIMEOUT = 5.0  # Seconds a message stays in the message bar
    INITIAL_STATUS = "HELP: Ctrl-S = save | Ctrl-Q = quit"
    FILE_OPENED_MESSAGE = "file opened"
    NEW_FILE_MESSAGE = "new file: {}"
    OPEN_ERROR_MESSAGE = "error: could not open file: {}"
    SAVED_MESSAGE = "Saved to {}"
    SAVE_PROMPT = "Save as: {}"
    SAVE_CANCELLED_MESSAGE = "Save cancelled"
    QUIT_CONFIRM_MESSAGE = "Unsaved changes! Press Ctrl-Q again to quit."

    # Welcome screen for an empty session
    WELCOME_MESSAGE = "texte -- v{}"
    GOODBYE_MESSAGE = "see you soon :)"
