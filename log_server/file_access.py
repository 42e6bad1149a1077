"""File length and bounded byte-range reads."""

import os
import stat
import logging

logger = logging.getLogger(__name__)


class FileAccessError(Exception):
    """Base class for failures reading a log file."""


class FileUnavailableError(FileAccessError):
    """Metadata could not be read, or the file could not be opened."""


class ShortReadError(FileAccessError):
    """Fewer bytes were available than requested."""


def file_length(path: str) -> int:
    """Return the current size of the regular file at *path* in bytes.

    Raises:
        FileUnavailableError: If the file is missing, unreadable, or not a
            regular file. A missing file is never reported as zero length.
    """
    try:
        st = os.stat(path)
    except (OSError, ValueError) as e:
        logger.warning("Could not get the size of the log file at %s: %s", path, e)
        raise FileUnavailableError(path) from e

    if not stat.S_ISREG(st.st_mode):
        logger.warning("Not a regular file: %s", path)
        raise FileUnavailableError(path)
    return st.st_size


def read_range(path: str, start: int, length: int) -> str:
    """Read exactly *length* bytes at offset *start* and decode them as UTF-8.

    Malformed UTF-8 is replaced with U+FFFD rather than raising.

    Raises:
        FileUnavailableError: If the file cannot be opened.
        ShortReadError: If the file holds fewer than ``start + length`` bytes.
    """
    if start < 0 or length < 0:
        raise ValueError(f"invalid range: start={start}, length={length}")

    try:
        f = open(path, "rb")
    except OSError as e:
        logger.warning("Could not open log file %s: %s", path, e)
        raise FileUnavailableError(path) from e

    with f:
        size = os.fstat(f.fileno()).st_size
        if start > size:
            raise ShortReadError(f"{path}: offset {start} beyond end of file ({size} bytes)")
        f.seek(start)
        data = f.read(length)

    if len(data) < length:
        raise ShortReadError(f"{path}: expected {length} bytes at offset {start}, got {len(data)}")
    return data.decode("utf-8", errors="replace")
