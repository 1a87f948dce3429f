"""Main editor controller."""

import logging
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .fileio import SaveError, read_rows, temp_path_for, write_atomic
from .keyboard import KeyboardHandler, KeyEvent
from .prompt import CommandPrompt, execute_command
from .session import EditorSession
from .settings import Settings, load_settings
from .terminal import TerminalInterface
from .view import FrameRenderer

logger = logging.getLogger(__name__)


class Editor:
    """Modal text editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[Settings] = None):
        """Initialize the editor components."""
        self.settings = settings or load_settings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.renderer = FrameRenderer(self.terminal.term)
        self.session = EditorSession(
            tab_stop=self.settings.tab_stop,
            message_timeout=self.settings.message_timeout,
        )
        self.command_registry = CommandRegistry()  # Command pattern for key handling
        self.prompt = CommandPrompt(self)
        self.running = False

    @property
    def filename(self) -> Optional[str]:
        return self.session.filename

    @property
    def modified(self) -> bool:
        return self.session.modified

    def run(self):
        """Run the main editor loop until a quit command.

        The terminal is restored on the way out, including when a fatal
        error propagates.
        """
        try:
            self.terminal.setup()
            self.update_screen_size()
            self.show_help()
            self.running = True

            need_draw = True
            while self.running:
                if need_draw:
                    self.refresh_screen()
                    need_draw = False

                key_event = self.keyboard.get_key_event()
                if key_event is None:
                    if self.terminal.consume_resize():
                        self.update_screen_size()
                        need_draw = True
                    continue

                self.handle_key_event(key_event)
                need_draw = True

            self.terminal.clear_screen()
        finally:
            self.terminal.cleanup()

    def update_screen_size(self):
        """Size the viewport to the terminal, minus the status and message lines."""
        rows, cols = self.terminal.screen_size()
        viewport = self.session.viewport
        viewport.screenrows = max(1, rows - EditorConstants.RESERVED_LINES)
        viewport.screencols = cols
        logger.debug(f"Screen size {viewport.screenrows}x{viewport.screencols}")

    def refresh_screen(self):
        """Draw one frame."""
        self.terminal.write(self.renderer.render(self.session))

    def handle_key_event(self, key_event: KeyEvent):
        """Dispatch a key in the current mode."""
        if not self.command_registry.execute(self, key_event):
            logger.debug(f"Unbound key {key_event.raw!r} in {self.session.mode.value} mode")

    def show_help(self):
        self.session.set_status_message(EditorConstants.HELP_MESSAGE)

    def quit(self):
        self.running = False

    def run_command_line(self):
        """Prompt for a ``:`` command and execute it."""
        command = self.prompt.ask(EditorConstants.COMMAND_PROMPT)
        if command is None:
            self.session.set_status_message("Command Aborted")
            return
        execute_command(self, command)

    def open_file(self, filename: str):
        """Load a file into the editor, creating it if it does not exist.

        Raises:
            OSError: the file could not be created or read.
        """
        rows = read_rows(filename)
        self.session.load_lines(rows)
        self.session.filename = filename
        self.session.modified = False
        logger.info(f"Opened {filename} ({len(rows)} lines)")

    def save(self) -> bool:
        """Save the buffer, prompting for a file name if there is none.

        Returns:
            True if the file was written
        """
        if self.session.filename is None:
            filename = self.prompt.ask(EditorConstants.SAVE_AS_PROMPT)
            if filename is None:
                self.session.set_status_message("Save Aborted")
                return False
            self.session.filename = filename
        return self.save_file(self.session.filename)

    def save_file(self, filename: str) -> bool:
        """Save the buffer to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        session = self.session
        data = session.buffer.rows_to_text()
        try:
            write_atomic(filename, data, self.settings.temp_file_ext)
        except SaveError as e:
            logger.warning(f"Saving {filename} failed: {e}")
            session.set_status_message(self._save_error_message(filename, e))
            return False

        session.filename = filename
        session.modified = False
        session.set_status_message(f'"{filename}" {session.buffer.numrows}L, {len(data)}B written')
        return True

    def _save_error_message(self, filename: str, error: SaveError) -> str:
        if error.step == 'create':
            temp_filename = temp_path_for(filename, self.settings.temp_file_ext)
            return f'Couldn\'t create temp file "{temp_filename}": {error.reason}'
        if error.step == 'truncate':
            return f"ftruncate failed: {error.reason}"
        if error.step == 'write':
            return f"Failed to write changes to temp file: {error.reason}"
        return f'Couldn\'t overwrite "{filename}": {error.reason}'
