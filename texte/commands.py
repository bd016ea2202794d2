"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .coordinator import Intent
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """


class IntentCommand(EditorCommand):
    """Hands a navigation or edit intent to the coordinator."""

    def __init__(self, intent: Intent):
        self.intent = intent

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        return editor.coordinator.apply(self.intent)


class InsertTextCommand(EditorCommand):
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        char = key_event.value
        # Filter out control characters
        if not char or (ord(char[0]) < 32 and char != '\t') or char == '\x7f':
            return False
        return editor.coordinator.apply(Intent.INSERT_CHAR, char)


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """System commands don't modify document content directly."""
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement
        for name, intent in (
            ('left', Intent.LEFT),
            ('right', Intent.RIGHT),
            ('up', Intent.UP),
            ('down', Intent.DOWN),
            ('page_up', Intent.PAGE_UP),
            ('page_down', Intent.PAGE_DOWN),
            ('home', Intent.HOME),
            ('end', Intent.END),
        ):
            self.register((KeyType.SPECIAL, name), IntentCommand(intent))
        self.register((KeyType.CTRL, 'a'), IntentCommand(Intent.HOME))
        self.register((KeyType.CTRL, 'e'), IntentCommand(Intent.END))

        # Editing
        self.register((KeyType.SPECIAL, 'backspace'), IntentCommand(Intent.BACKSPACE))
        self.register((KeyType.CTRL, 'h'), IntentCommand(Intent.BACKSPACE))
        self.register((KeyType.SPECIAL, 'delete'), IntentCommand(Intent.DELETE))
        self.register((KeyType.CTRL, 'd'), IntentCommand(Intent.DELETE))
        self.register((KeyType.SPECIAL, 'enter'), IntentCommand(Intent.NEWLINE))

        # System
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the document was modified
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        return False
