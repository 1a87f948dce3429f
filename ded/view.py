"""Viewport scrolling and frame rendering."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .constants import EditorConstants
from .cursor import Cursor
from .model import TextBuffer

if TYPE_CHECKING:
    import blessed
    from .session import EditorSession


@dataclass
class Viewport:
    """The window of rows and render columns currently on screen."""
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0

    def scroll(self, buffer: TextBuffer, cursor: Cursor):
        """Recompute rx and move the offsets so the cursor is visible.

        The cursor itself is never changed apart from its derived rx.
        """
        cursor.rx = 0
        row = buffer.row_at(cursor.cy)
        if row is not None:
            cursor.rx = row.cx_to_rx(cursor.cx)

        if cursor.cy < self.rowoff:
            self.rowoff = cursor.cy
        if cursor.cy >= self.rowoff + self.screenrows:
            self.rowoff = cursor.cy - self.screenrows + 1
        if cursor.rx < self.coloff:
            self.coloff = cursor.rx
        if cursor.rx >= self.coloff + self.screencols:
            self.coloff = cursor.rx - self.screencols + 1


def _bytes_to_screen(data: bytes) -> str:
    # Round-trips arbitrary bytes; the frame is encoded the same way on write
    return data.decode('utf-8', 'surrogateescape')


class FrameRenderer:
    """Composes one complete output frame for the terminal.

    Capabilities (cursor movement, clearing, attributes) come from a
    blessed Terminal. The frame is returned as a single string so that the
    caller can flush it with one write.
    """

    def __init__(self, term: 'blessed.Terminal'):
        self.term = term

    def render(self, session: 'EditorSession', now: Optional[float] = None) -> str:
        """Scroll the session's viewport and return the frame for it."""
        term = self.term
        viewport = session.viewport
        cursor = session.cursor
        viewport.scroll(session.buffer, cursor)

        out = [term.hide_cursor, term.home]
        out.extend(self.draw_rows(session))
        out.append(self.draw_status_bar(session))
        out.append(self.draw_message(session, now))
        out.append(term.move_yx(cursor.cy - viewport.rowoff, cursor.rx - viewport.coloff))
        out.append(term.normal_cursor)
        return ''.join(out)

    def draw_rows(self, session: 'EditorSession') -> list[str]:
        viewport = session.viewport
        buffer = session.buffer
        lines = []
        for y in range(viewport.screenrows):
            filerow = y + viewport.rowoff
            if filerow >= buffer.numrows:
                text = EditorConstants.FILLER_MARKER
            else:
                render = buffer[filerow].render
                text = _bytes_to_screen(render[viewport.coloff:viewport.coloff + viewport.screencols])
            lines.append(text + self.term.clear_eol + "\r\n")
        return lines

    def draw_status_bar(self, session: 'EditorSession') -> str:
        """Mode, filename and modified marker on the left; position on the right."""
        buffer = session.buffer
        cursor = session.cursor
        width = session.viewport.screencols

        name = session.filename[:EditorConstants.FILENAME_DISPLAY_WIDTH] if session.filename else "[No Name]"
        modified = "| [modified]" if session.modified else ""
        status = f"{session.mode.value} | {name} {modified}"
        percent = 100 * (cursor.cy + 1) // buffer.numrows if buffer.numrows else 0
        rstatus = f"{percent}% | {cursor.cy + 1}:{cursor.cx + 1}"

        status = status[:width]
        padding = width - len(status)
        if padding >= len(rstatus):
            status += " " * (padding - len(rstatus)) + rstatus
        else:
            status += " " * padding
        return self.term.bold + self.term.reverse + status + self.term.normal + "\r\n"

    def draw_message(self, session: 'EditorSession', now: Optional[float] = None) -> str:
        message = session.visible_message(now)
        return self.term.clear_eol + message[:session.viewport.screencols]
