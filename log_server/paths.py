"""Path normalization and validation for requested log files."""

import re

LOG_EXTENSION = ".log"

_DRIVE_PREFIX_RE = re.compile(r"^[A-Za-z]:")
_BACKSLASH_RUN_RE = re.compile(r"\\+")


class InvalidPathError(ValueError):
    """Raised when a requested path is not a permissible log file location."""


def normalize_path(raw: str) -> str:
    """Strip a leading drive letter and collapse backslash runs into ``/``.

    ``C:\\games\\logs\\server.log`` becomes ``/games/logs/server.log``.
    """
    path = _DRIVE_PREFIX_RE.sub("", raw, count=1)
    return _BACKSLASH_RUN_RE.sub("/", path)


def validate_log_path(raw: str) -> str:
    """Normalize *raw* and return it if it names a log file inside a directory.

    The accepted shape is ``<anything>/<subdir>/<stem>.log``: at least three
    ``/``-separated segments (the first may be empty for absolute paths), a
    non-empty parent directory, and a final segment with a non-empty stem and
    the ``.log`` extension. Any ``..`` segment is a traversal attempt.

    Raises:
        InvalidPathError: If the path is rejected.
    """
    path = normalize_path(raw)

    if "\x00" in path:
        raise InvalidPathError("path contains a NUL byte")

    segments = path.split("/")
    if ".." in segments:
        raise InvalidPathError(f"path traversal in {path!r}")

    if len(segments) < 3:
        raise InvalidPathError(f"log file must be inside a named directory: {path!r}")

    parent, filename = segments[-2], segments[-1]
    if not parent:
        raise InvalidPathError(f"empty parent directory in {path!r}")
    if not filename.endswith(LOG_EXTENSION) or len(filename) == len(LOG_EXTENSION):
        raise InvalidPathError(f"not a {LOG_EXTENSION} file: {path!r}")

    return path


def is_valid_log_path(raw: str) -> bool:
    """Boolean form of :func:`validate_log_path`."""
    try:
        validate_log_path(raw)
    except InvalidPathError:
        return False
    return True
