"""Row store: the lines of text being edited."""

from typing import Iterator, Optional

from .constants import EditorConstants


class Row:
    """One line of text.

    ``chars`` holds the bytes of the line without its newline. ``render`` is
    the same line with tabs expanded to spaces; every mutation goes through
    a method that recomputes it, so it is never stale.
    """

    def __init__(self, chars: bytes = b"", tab_stop: int = EditorConstants.TAB_STOP):
        self.tab_stop = tab_stop
        self._chars = bytearray(chars)
        self.render = b""
        self.update_render()

    @property
    def chars(self) -> bytes:
        return bytes(self._chars)

    @property
    def size(self) -> int:
        return len(self._chars)

    def __len__(self):
        return len(self._chars)

    def __repr__(self):
        return f"Row({self.chars!r})"

    def update_render(self):
        """Recompute ``render`` from ``chars``."""
        out = bytearray()
        for byte in self._chars:
            if byte == 0x09:
                out.append(0x20)
                while len(out) % self.tab_stop != 0:
                    out.append(0x20)
            else:
                out.append(byte)
        self.render = bytes(out)

    def cx_to_rx(self, cx: int) -> int:
        """Map a byte offset in ``chars`` to its column in ``render``."""
        rx = 0
        for byte in self._chars[:cx]:
            if byte == 0x09:
                rx += (self.tab_stop - 1) - (rx % self.tab_stop)
            rx += 1
        return rx

    def insert_char(self, idx: int, ch: int):
        if idx < 0 or idx > len(self._chars):
            idx = len(self._chars)
        self._chars.insert(idx, ch)
        self.update_render()

    def delete_char(self, idx: int) -> bool:
        if idx < 0 or idx >= len(self._chars):
            return False
        del self._chars[idx]
        self.update_render()
        return True

    def append_string(self, text: bytes):
        self._chars.extend(text)
        self.update_render()

    def truncate(self, size: int):
        del self._chars[max(0, size):]
        self.update_render()


class TextBuffer:
    """Ordered sequence of rows, addressed by index.

    Every mutation sets ``modified``; the session clears it after a load
    or a successful save.
    """

    def __init__(self, lines=None, tab_stop: int = EditorConstants.TAB_STOP):
        self.tab_stop = tab_stop
        self.rows: list[Row] = [Row(line, tab_stop) for line in (lines or [])]
        self.modified = False

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def __len__(self):
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, idx: int) -> Row:
        return self.rows[idx]

    def row_at(self, idx: int) -> Optional[Row]:
        """Return the row at idx, or None past the end of the buffer."""
        if 0 <= idx < len(self.rows):
            return self.rows[idx]
        return None

    def row_size(self, idx: int) -> int:
        row = self.row_at(idx)
        return row.size if row is not None else 0

    def lines(self) -> list[bytes]:
        return [row.chars for row in self.rows]

    def insert_row(self, idx: int, text: bytes = b""):
        if idx < 0 or idx > len(self.rows):
            return
        self.rows.insert(idx, Row(text, self.tab_stop))
        self.modified = True

    def delete_row(self, idx: int):
        if idx < 0 or idx >= len(self.rows):
            return
        del self.rows[idx]
        self.modified = True

    def insert_char(self, row_idx: int, idx: int, ch: int):
        row = self.row_at(row_idx)
        if row is None:
            return
        row.insert_char(idx, ch)
        self.modified = True

    def delete_char(self, row_idx: int, idx: int):
        row = self.row_at(row_idx)
        if row is not None and row.delete_char(idx):
            self.modified = True

    def append_string(self, row_idx: int, text: bytes):
        row = self.row_at(row_idx)
        if row is None:
            return
        row.append_string(text)
        self.modified = True

    def truncate_row(self, row_idx: int, size: int):
        row = self.row_at(row_idx)
        if row is None or size >= row.size:
            return
        row.truncate(size)
        self.modified = True

    def rows_to_text(self) -> bytes:
        """Serialize the buffer: each row followed by a newline."""
        return b"".join(row.chars + b"\n" for row in self.rows)
