"""Editing session state.

The session owns everything the main loop mutates: the row buffer, the
cursor, the input mode, the viewport, the file name and the transient
status message. Cursor-aware edits (typing, splitting and joining rows)
live here so they can be exercised without a terminal.
"""

import time
from typing import Optional

from .constants import EditorConstants
from .cursor import Cursor, Direction, Mode, clamp_cx, move_cursor
from .model import TextBuffer
from .view import Viewport


class EditorSession:
    """State of one editing session."""

    def __init__(self, lines=None, tab_stop: int = EditorConstants.TAB_STOP,
                 message_timeout: float = EditorConstants.MESSAGE_TIMEOUT):
        self.buffer = TextBuffer(lines, tab_stop=tab_stop)
        self.cursor = Cursor()
        self.mode = Mode.NORMAL
        self.viewport = Viewport()
        self.filename: Optional[str] = None
        self.message_timeout = message_timeout
        self.status_message = ""
        self.status_time = 0.0

    @property
    def modified(self) -> bool:
        return self.buffer.modified

    @modified.setter
    def modified(self, value: bool):
        self.buffer.modified = value

    def load_lines(self, lines: list[bytes]):
        """Replace the buffer contents, leaving it unmodified."""
        self.buffer = TextBuffer(lines, tab_stop=self.buffer.tab_stop)
        self.cursor = Cursor()
        self.viewport.rowoff = 0
        self.viewport.coloff = 0

    # --- Status message ---

    def set_status_message(self, message: str, now: Optional[float] = None):
        self.status_message = message
        self.status_time = time.time() if now is None else now

    def visible_message(self, now: Optional[float] = None) -> str:
        """Return the status message if it has not expired yet."""
        if not self.status_message:
            return ""
        now = time.time() if now is None else now
        if now - self.status_time < self.message_timeout:
            return self.status_message
        return ""

    # --- Cursor ---

    def current_row_size(self) -> int:
        return self.buffer.row_size(self.cursor.cy)

    def move_cursor(self, direction: Direction):
        move_cursor(self.buffer, self.cursor, direction, self.mode)

    def clamp_cursor(self):
        """Re-apply the current mode's column clamp."""
        self.cursor.cx = clamp_cx(self.cursor.cx, self.current_row_size(), self.mode)

    def page(self, direction: Direction):
        for _ in range(self.viewport.screenrows):
            self.move_cursor(direction)

    def move_line_start(self):
        self.cursor.cx = 0

    def move_line_end(self):
        if self.cursor.cy < self.buffer.numrows:
            self.cursor.cx = self.current_row_size()
        self.clamp_cursor()

    def enter_insert_mode(self):
        self.mode = Mode.INSERT

    def enter_normal_mode(self):
        self.mode = Mode.NORMAL
        self.clamp_cursor()

    # --- Editing ---

    def insert_char(self, ch: int):
        """Insert one byte at the cursor and advance past it."""
        cursor = self.cursor
        if cursor.cy == self.buffer.numrows:
            self.buffer.insert_row(self.buffer.numrows, b"")
        self.buffer.insert_char(cursor.cy, cursor.cx, ch)
        cursor.cx += 1

    def insert_newline(self):
        """Split the current row at the cursor."""
        cursor = self.cursor
        if cursor.cx == 0:
            self.buffer.insert_row(cursor.cy, b"")
        else:
            row = self.buffer[cursor.cy]
            self.buffer.insert_row(cursor.cy + 1, row.chars[cursor.cx:])
            self.buffer.truncate_row(cursor.cy, cursor.cx)
        cursor.cy += 1
        cursor.cx = 0

    def delete_char(self):
        """Delete the byte before the cursor, joining rows at column 0."""
        cursor = self.cursor
        if cursor.cy == self.buffer.numrows:
            return
        if cursor.cx == 0 and cursor.cy == 0:
            return
        if cursor.cx > 0:
            self.buffer.delete_char(cursor.cy, cursor.cx - 1)
            cursor.cx -= 1
        else:
            previous = self.buffer[cursor.cy - 1]
            cursor.cx = previous.size
            self.buffer.append_string(cursor.cy - 1, self.buffer[cursor.cy].chars)
            self.buffer.delete_row(cursor.cy)
            cursor.cy -= 1

    def delete_char_under_cursor(self):
        """Delete the byte under the cursor (NORMAL ``x``)."""
        if self.current_row_size() == 0:
            return
        self.cursor.cx += 1
        self.delete_char()

    def forward_delete(self):
        """Delete at the cursor, joining the next row at end of row."""
        cursor = self.cursor
        if cursor.cy >= self.buffer.numrows:
            return
        at_row_end = cursor.cx >= self.current_row_size()
        if at_row_end and cursor.cy >= self.buffer.numrows - 1:
            return
        self.move_cursor(Direction.RIGHT)
        self.delete_char()

    def open_line_below(self):
        """Open an empty row below the cursor and put the cursor on it."""
        self.mode = Mode.INSERT
        if self.buffer.numrows == 0:
            self.buffer.insert_row(0, b"")
        self.cursor.cy = min(self.cursor.cy, self.buffer.numrows - 1)
        self.cursor.cx = self.current_row_size()
        self.insert_newline()

    def open_line_above(self):
        """Open an empty row at the cursor, pushing the current row down."""
        self.mode = Mode.INSERT
        self.buffer.insert_row(self.cursor.cy, b"")
        self.cursor.cx = 0
