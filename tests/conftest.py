"""Shared fixtures: an editor wired to a scripted terminal."""

import blessed
import pytest

from ded.editor import Editor
from ded.settings import Settings


class MockTerminal:
    """Terminal double that replays queued input bytes and records frames."""

    def __init__(self, rows=10, cols=40):
        self.term = blessed.Terminal(force_styling=None)
        self.rows = rows
        self.cols = cols
        self.frames = []
        self.calls = []
        self._input = []
        self._idle_reads = 0
        self._resized = False

    def feed(self, data: bytes):
        """Queue bytes to be read one at a time."""
        self._input.extend(bytes([b]) for b in data)

    def pause(self):
        """Queue a read timeout."""
        self._input.append(None)

    def read_byte(self, timeout=None):
        if self._input:
            item = self._input.pop(0)
            if isinstance(item, tuple):
                # A resize wakes the reader without input
                self.rows, self.cols = item
                self._resized = True
                return None
            if item is not None:
                self._idle_reads = 0
                return item
            return None
        self._idle_reads += 1
        if self._idle_reads > 100:
            raise RuntimeError("test input exhausted")
        return None

    def write(self, frame):
        self.frames.append(frame)

    def screen_size(self):
        return self.rows, self.cols

    def resize(self, rows, cols):
        """Queue a window size change after the input fed so far."""
        self._input.append((rows, cols))

    def consume_resize(self):
        resized, self._resized = self._resized, False
        return resized

    def setup(self):
        self.calls.append('setup')

    def cleanup(self):
        self.calls.append('cleanup')

    def clear_screen(self):
        self.calls.append('clear_screen')


@pytest.fixture
def terminal():
    return MockTerminal()


@pytest.fixture
def editor(terminal):
    ed = Editor(terminal=terminal, settings=Settings())
    ed.update_screen_size()
    return ed


def send_keys(editor, *chunks):
    """Type the chunks of bytes and dispatch the decoded keys.

    A short pause (a read timeout) follows every chunk, so a chunk ending
    in a lone ESC is seen as the ESC key. All chunks are queued up front so
    that prompts opened by earlier keys read the later chunks.
    """
    terminal = editor.terminal
    for chunk in chunks:
        terminal.feed(chunk)
        terminal.pause()
    while terminal._input:
        event = editor.keyboard.get_key_event()
        if event is not None:
            editor.handle_key_event(event)
