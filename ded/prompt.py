"""Message-line prompt and the ``:`` command language."""

import logging
from typing import Optional, TYPE_CHECKING

from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor

logger = logging.getLogger(__name__)


class CommandPrompt:
    """Reads a line of text on the message line.

    The prompt redraws the screen after every key so the typed text is
    visible in place of the status message.
    """

    def __init__(self, editor: 'Editor'):
        self.editor = editor

    def ask(self, template: str) -> Optional[str]:
        """Prompt for input.

        Args:
            template: Message shown while typing; ``%s`` is replaced by the input.

        Returns:
            The entered text, or None if the prompt was cancelled with ESC.
        """
        session = self.editor.session
        text = ""
        while True:
            session.set_status_message(template % text)
            self.editor.refresh_screen()

            key_event = self.editor.keyboard.wait_key_event()
            if key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
                text = text[:-1]
            elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
                session.set_status_message("")
                return None
            elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
                if text:
                    session.set_status_message("")
                    return text
            elif key_event.key_type == KeyType.REGULAR:
                # Printable ASCII only
                if 0x20 <= key_event.code < 0x7f:
                    text += key_event.value


def execute_command(editor: 'Editor', command: str):
    """Run one ``:`` command.

    Supported commands: ``w``, ``wq``, ``q``, ``q!`` and ``o <path>``.
    Anything else is reported as invalid on the message line.
    """
    session = editor.session
    command = command.rstrip(' \t')
    logger.debug(f"Command: {command!r}")

    if command == 'w':
        editor.save()
    elif command == 'wq':
        if editor.save():
            editor.quit()
    elif command == 'q':
        if session.modified:
            session.set_status_message("You have Unsaved Changes. Type :q! to exit without saving.")
        else:
            editor.quit()
    elif command == 'q!':
        editor.quit()
    elif command.startswith('o ') and command[2:].strip():
        if session.filename is not None:
            session.set_status_message("Already a file is open")
        elif session.buffer.numrows > 0:
            session.set_status_message("Unsaved Changes detected")
        else:
            editor.open_file(command[2:].strip())
    else:
        session.set_status_message("Invalid Command")
