"""ded - a minimal modal terminal text editor."""

import logging

from .model import Row, TextBuffer
from .cursor import Cursor, Mode
from .session import EditorSession

# Log output is opt-in (ded --log FILE); never write over the editor screen
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Row',
    'TextBuffer',
    'Cursor',
    'Mode',
    'EditorSession',
]
