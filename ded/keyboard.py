"""Keyboard input: decoding raw terminal bytes into key events."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants


ESC = 0x1b


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: bytes  # The bytes read from the terminal
    is_sequence: bool = False

    @property
    def code(self) -> int:
        """The byte a regular key inserts."""
        return self.raw[0]


# Escape sequences, without the leading ESC
ESCAPE_SEQUENCES = {
    b'[A': 'up',
    b'[B': 'down',
    b'[C': 'right',
    b'[D': 'left',
    b'[H': 'home',
    b'[F': 'end',
    b'[1~': 'home',
    b'[3~': 'delete',
    b'[4~': 'end',
    b'[5~': 'page_up',
    b'[6~': 'page_down',
    b'[7~': 'home',
    b'[8~': 'end',
    b'OA': 'up',
    b'OB': 'down',
    b'OC': 'right',
    b'OD': 'left',
    b'OH': 'home',
    b'OF': 'end',
}


def escape_event() -> KeyEvent:
    return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=b'\x1b')


def _decode_byte(byte: int) -> KeyEvent:
    raw = bytes([byte])
    if byte == 0x0d:
        return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=raw)
    if byte in (0x08, 0x7f):
        # Ctrl-H and DEL both erase backwards
        return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=raw)
    if byte == 0x09:
        return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw=raw)
    if byte == ESC:
        return escape_event()
    if 1 <= byte <= 26:
        return KeyEvent(key_type=KeyType.CTRL, value=chr(ord('a') + byte - 1), raw=raw)
    if byte < 0x20:
        return KeyEvent(key_type=KeyType.CTRL, value=f'0x{byte:02x}', raw=raw)
    return KeyEvent(key_type=KeyType.REGULAR, value=raw.decode('latin-1'), raw=raw)


def decode_key(data: bytes) -> Optional[KeyEvent]:
    """Decode the bytes read so far into one key event.

    Returns None when ``data`` is a proper prefix of an escape sequence and
    more input is needed. Unrecognized sequences decode to ESC; the bytes
    that were read for them are dropped.
    """
    if not data:
        return None
    if data[0] != ESC:
        return _decode_byte(data[0])
    if len(data) == 1:
        return None

    introducer = data[1:2]
    if introducer not in (b'[', b'O'):
        return escape_event()
    if len(data) == 2:
        return None

    # ESC [ <digit> needs one more byte, the terminating '~'
    if introducer == b'[' and 0x30 <= data[2] <= 0x39 and len(data) == 3:
        return None

    value = ESCAPE_SEQUENCES.get(bytes(data[1:]))
    if value is None:
        return escape_event()
    return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=bytes(data), is_sequence=True)


class KeyboardHandler:
    """Reads bytes from the terminal and turns them into key events."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = EditorConstants.INPUT_TIMEOUT) -> Optional[KeyEvent]:
        """Read one key.

        Waits up to ``timeout`` seconds for the first byte and returns None
        if nothing arrived. Once a key has started, further bytes of an
        escape sequence are awaited with the escape-sequence timeout; if one
        does not arrive in time the key is reported as ESC.
        """
        first = self.terminal.read_byte(timeout)
        if not first:
            return None

        data = first
        while True:
            event = decode_key(data)
            if event is not None:
                return event
            more = self.terminal.read_byte(EditorConstants.ESCAPE_SEQUENCE_TIMEOUT)
            if not more:
                return escape_event()
            data += more

    def wait_key_event(self) -> KeyEvent:
        """Block until a key arrives."""
        while True:
            event = self.get_key_event()
            if event is not None:
                return event
