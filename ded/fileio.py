"""Reading and atomically writing plain-text files."""

import errno
import logging
import os

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class SaveError(Exception):
    """A save step failed; the target file was left untouched.

    Attributes:
        step: The step that failed ('create', 'truncate', 'write' or 'rename').
        error: The underlying OSError.
    """

    def __init__(self, step: str, error: OSError):
        super().__init__(f"{step} failed: {error.strerror or error}")
        self.step = step
        self.error = error

    @property
    def reason(self) -> str:
        return self.error.strerror or str(self.error)


def read_rows(path: str) -> list[bytes]:
    """Read a file into a list of lines, creating it empty if missing.

    Trailing ``\\n`` and ``\\r`` bytes are stripped from every line.

    Raises:
        OSError: the file could not be created or read.
    """
    if not os.path.exists(path):
        logger.info(f"Creating empty file {path}")
        fd = os.open(path, os.O_RDWR | os.O_CREAT, EditorConstants.FILE_MODE)
        os.close(fd)

    with open(path, 'rb') as f:
        content = f.read()

    lines = content.split(b'\n')
    if lines[-1] == b'':
        lines.pop()
    rows = [line.rstrip(b'\r\n') for line in lines]
    logger.debug(f"Read {len(rows)} lines from {path}")
    return rows


def temp_path_for(filename: str, ext: str = EditorConstants.TEMP_FILE_EXT) -> str:
    return filename + ext


def write_atomic(filename: str, data: bytes, temp_ext: str = EditorConstants.TEMP_FILE_EXT):
    """Write data to filename through a temporary file and a rename.

    The bytes go to ``<filename><temp_ext>`` first; only after the whole
    content has been written and synced is the temp file renamed over the
    target, so the target is never seen half written.

    Raises:
        SaveError: naming the step that failed.
    """
    temp_filename = temp_path_for(filename, temp_ext)

    try:
        fd = os.open(temp_filename, os.O_RDWR | os.O_CREAT, EditorConstants.FILE_MODE)
    except OSError as e:
        raise SaveError('create', e) from e

    try:
        try:
            os.ftruncate(fd, len(data))
        except OSError as e:
            raise SaveError('truncate', e) from e

        try:
            view = memoryview(data)
            while view:
                written = os.write(fd, view)
                if written == 0:
                    raise OSError(errno.EIO, "short write")
                view = view[written:]
            os.fsync(fd)  # Ensure data is written to disk
        except OSError as e:
            raise SaveError('write', e) from e
    except SaveError:
        os.close(fd)
        _remove_quietly(temp_filename)
        raise
    os.close(fd)

    # Atomic rename - this is atomic on POSIX systems
    try:
        os.replace(temp_filename, filename)
    except OSError as e:
        _remove_quietly(temp_filename)
        raise SaveError('rename', e) from e

    logger.info(f"Wrote {len(data)} bytes to {filename}")


def _remove_quietly(path: str):
    # Clean up temp file if it exists
    try:
        os.remove(path)
    except OSError:
        logger.debug(f"Could not remove temp file {path}")
