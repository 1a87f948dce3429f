"""Command pattern implementation for modal key dispatch."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .cursor import Direction, Mode
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """
        pass


class MoveCommand(EditorCommand):
    """Move the cursor one step in a direction."""

    def __init__(self, direction: Direction):
        self.direction = direction

    def execute(self, editor, key_event):
        editor.session.move_cursor(self.direction)


class PageCommand(MoveCommand):
    def execute(self, editor, key_event):
        editor.session.page(self.direction)


class LineStartCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.move_line_start()


class LineEndCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.move_line_end()


class NoOpCommand(EditorCommand):
    def execute(self, editor, key_event):
        pass


class InsertModeCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.enter_insert_mode()


class AppendCommand(EditorCommand):
    """Enter INSERT mode one column to the right of the cursor."""

    def execute(self, editor, key_event):
        session = editor.session
        session.enter_insert_mode()
        if session.buffer.numrows and session.cursor.cx < session.current_row_size():
            session.move_cursor(Direction.RIGHT)


class NormalModeCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.enter_normal_mode()


class OpenLineBelowCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.open_line_below()


class OpenLineAboveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.open_line_above()


class InsertTextCommand(EditorCommand):
    def execute(self, editor, key_event):
        code = key_event.code
        # Filter out control characters
        if (code >= 0x20 and code != 0x7f) or code == 0x09:
            editor.session.insert_char(code)


class InsertNewlineCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.insert_newline()


class BackspaceCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.delete_char()


class ForwardDeleteCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.forward_delete()


class DeleteUnderCursorCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.delete_char_under_cursor()


class HelpCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.show_help()


class CommandLineCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.run_command_line()


KeySpec = Tuple[KeyType, str]


class CommandRegistry:
    """Maps (mode, key) to commands.

    Each mode has its own table. Keys missing from it fall back to the
    table shared by both modes; in INSERT mode remaining regular keys are
    inserted as text.
    """

    def __init__(self):
        self._commands: Dict[Mode, Dict[KeySpec, EditorCommand]] = {mode: {} for mode in Mode}
        self._common: Dict[KeySpec, EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement in both modes
        self.register((KeyType.SPECIAL, 'left'), MoveCommand(Direction.LEFT))
        self.register((KeyType.SPECIAL, 'right'), MoveCommand(Direction.RIGHT))
        self.register((KeyType.SPECIAL, 'up'), MoveCommand(Direction.UP))
        self.register((KeyType.SPECIAL, 'down'), MoveCommand(Direction.DOWN))
        self.register((KeyType.SPECIAL, 'page_up'), PageCommand(Direction.UP))
        self.register((KeyType.SPECIAL, 'page_down'), PageCommand(Direction.DOWN))
        self.register((KeyType.SPECIAL, 'home'), LineStartCommand())
        self.register((KeyType.SPECIAL, 'end'), LineEndCommand())
        self.register((KeyType.CTRL, 'a'), HelpCommand())

        # NORMAL mode
        normal = Mode.NORMAL
        self.register((KeyType.REGULAR, 'h'), MoveCommand(Direction.LEFT), normal)
        self.register((KeyType.REGULAR, 'j'), MoveCommand(Direction.DOWN), normal)
        self.register((KeyType.REGULAR, 'k'), MoveCommand(Direction.UP), normal)
        self.register((KeyType.REGULAR, 'l'), MoveCommand(Direction.RIGHT), normal)
        self.register((KeyType.REGULAR, 'i'), InsertModeCommand(), normal)
        self.register((KeyType.REGULAR, 'a'), AppendCommand(), normal)
        self.register((KeyType.REGULAR, 'o'), OpenLineBelowCommand(), normal)
        self.register((KeyType.REGULAR, 'O'), OpenLineAboveCommand(), normal)
        self.register((KeyType.REGULAR, 'x'), DeleteUnderCursorCommand(), normal)
        self.register((KeyType.REGULAR, '0'), LineStartCommand(), normal)
        self.register((KeyType.REGULAR, '$'), LineEndCommand(), normal)
        self.register((KeyType.REGULAR, ':'), CommandLineCommand(), normal)
        self.register((KeyType.SPECIAL, 'escape'), NoOpCommand(), normal)

        # INSERT mode
        insert = Mode.INSERT
        self.register((KeyType.SPECIAL, 'escape'), NormalModeCommand(), insert)
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand(), insert)
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand(), insert)
        self.register((KeyType.SPECIAL, 'delete'), ForwardDeleteCommand(), insert)

    def register(self, key: KeySpec, command: EditorCommand, mode: Optional[Mode] = None):
        """Register a command for a key, in one mode or (mode=None) in both."""
        if mode is None:
            self._common[key] = command
        else:
            self._commands[mode][key] = command

    def get_command(self, mode: Mode, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key in a mode."""
        key = (key_type, value)
        command = self._commands[mode].get(key) or self._common.get(key)
        if command is None and mode == Mode.INSERT and key_type == KeyType.REGULAR:
            return self._insert_text
        return command

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event in the current mode.

        The cursor is re-clamped for the resulting mode afterwards.

        Returns:
            True if a command handled the key
        """
        session = editor.session
        command = self.get_command(session.mode, key_event.key_type, key_event.value)
        if command is None:
            return False
        command.execute(editor, key_event)
        session.clamp_cursor()
        return True
