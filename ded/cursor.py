from dataclasses import dataclass
from enum import Enum

from .model import TextBuffer


class Mode(Enum):
    """Input modes."""
    NORMAL = "NORMAL"
    INSERT = "INSERT"


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


@dataclass
class Cursor:
    """Logical cursor position.

    cx is a byte offset into the row's chars, cy a row index. rx is the
    render column of cx and is only valid after the last scroll.
    """
    cx: int = 0
    cy: int = 0
    rx: int = 0


def clamp_cx(cx: int, size: int, mode: Mode) -> int:
    """Clamp a column to a row of the given size.

    NORMAL mode keeps the cursor on the last character; INSERT mode allows
    it to sit one past the end, ready to append.
    """
    if cx > size:
        cx = size
    if mode == Mode.NORMAL and cx == size:
        cx -= 1
    return max(0, cx)


def move_cursor(buffer: TextBuffer, cursor: Cursor, direction: Direction, mode: Mode):
    """Move the cursor one step and re-clamp it to the row it lands on."""
    row = buffer.row_at(cursor.cy)

    if direction == Direction.LEFT:
        if cursor.cx > 0:
            cursor.cx -= 1
        elif cursor.cy > 0:
            cursor.cy -= 1
            cursor.cx = buffer[cursor.cy].size
    elif direction == Direction.RIGHT:
        if row is not None and cursor.cx < row.size:
            cursor.cx += 1
        elif (row is not None and cursor.cx == row.size and mode == Mode.INSERT
              and cursor.cy < buffer.numrows - 1):
            cursor.cy += 1
            cursor.cx = 0
    elif direction == Direction.UP:
        if cursor.cy > 0:
            cursor.cy -= 1
    elif direction == Direction.DOWN:
        if cursor.cy < buffer.numrows - 1:
            cursor.cy += 1

    cursor.cx = clamp_cx(cursor.cx, buffer.row_size(cursor.cy), mode)
