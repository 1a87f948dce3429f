"""Terminal interface using Blessed for output capabilities and raw mode."""

import os
import select
import signal
import sys
import termios
from typing import Optional

import blessed

from .constants import EditorConstants


class TerminalError(Exception):
    """The terminal cannot be used for editing."""


class TerminalInterface:
    """Handles terminal I/O: raw byte input, frame output and window size."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._raw_context = None
        self._resize_pipe_r: Optional[int] = None
        self._resize_pipe_w: Optional[int] = None
        self._original_winch_handler = None
        self._resized = False

    def setup(self):
        """Enter raw mode and fullscreen.

        Raises:
            TerminalError: stdin is not a terminal or raw mode failed.
        """
        if not sys.stdin.isatty():
            raise TerminalError("standard input is not a terminal")
        try:
            self._raw_context = self.term.raw()
            self._raw_context.__enter__()
        except termios.error as e:
            self._raw_context = None
            raise TerminalError(f"cannot enter raw mode: {e}") from e

        print(self.term.enter_fullscreen, end='', flush=True)
        self.is_fullscreen = True

        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()
        self._original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)

    def cleanup(self):
        """Exit fullscreen and raw mode, restoring the terminal."""
        if self._original_winch_handler is not None:
            signal.signal(signal.SIGWINCH, self._original_winch_handler)
            self._original_winch_handler = None
        for fd in (self._resize_pipe_r, self._resize_pipe_w):
            if fd is not None:
                os.close(fd)
        self._resize_pipe_r = self._resize_pipe_w = None

        if self.is_fullscreen:
            print(self.term.exit_fullscreen + self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False
        if self._raw_context is not None:
            try:
                self._raw_context.__exit__(None, None, None)
            finally:
                self._raw_context = None

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame # Unused
        self._resized = True
        # Write to pipe to wake up select()
        if self._resize_pipe_w is not None:
            os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def consume_resize(self) -> bool:
        """Return True once after each terminal resize."""
        resized, self._resized = self._resized, False
        return resized

    def screen_size(self) -> tuple[int, int]:
        """Return the terminal size as (rows, columns).

        Raises:
            TerminalError: the size could not be determined.
        """
        rows, cols = self.term.height, self.term.width
        if not cols or not rows:
            raise TerminalError("cannot determine terminal size")
        return rows, cols

    def read_byte(self, timeout: Optional[float] = None) -> Optional[bytes]:
        """Read a single byte from stdin.

        Args:
            timeout: Seconds to wait (None blocks until input or a resize).

        Returns:
            One byte, or None on timeout or when woken by a resize.
        """
        fd = sys.stdin.fileno()
        watch = [fd]
        if self._resize_pipe_r is not None:
            watch.append(self._resize_pipe_r)
        ready, _, _ = select.select(watch, [], [], timeout)
        if self._resize_pipe_r is not None and self._resize_pipe_r in ready:
            # Clear the pipe
            os.read(self._resize_pipe_r, 1024)
            return None
        if fd not in ready:
            return None
        return os.read(fd, 1) or None

    def write(self, frame: str):
        """Write a complete frame to the terminal."""
        data = frame.encode('utf-8', 'surrogateescape')
        fd = sys.stdout.fileno()
        while data:
            written = os.write(fd, data)
            data = data[written:]

    def clear_screen(self):
        """Clear the entire screen."""
        self.write(self.term.clear + self.term.home)
