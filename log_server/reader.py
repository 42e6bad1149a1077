"""Incremental log reader: returns only the bytes appended since the last poll."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from log_server.file_access import (
    FileUnavailableError,
    ShortReadError,
    file_length,
    read_range,
)
from log_server.paths import InvalidPathError, validate_log_path
from log_server.state import DEFAULT_TTL_SECONDS, ReadState, ReadStateTable
from log_server.tokens import generate_token

logger = logging.getLogger(__name__)


class ReadError(str, Enum):
    INVALID_PATH = "invalid_path"
    FILE_UNAVAILABLE = "file_unavailable"
    SHORT_READ = "short_read"


@dataclass(frozen=True)
class LogFile:
    """Result of one poll. ``content`` is None on failure, "" when nothing is new."""

    content: str | None = None
    next_key: str | None = None
    error: ReadError | None = None

    @property
    def success(self) -> bool:
        return self.content is not None


class IncrementalLogReader:
    """Tracks how much of each file every client has already received.

    Each successful poll issues a new token and retires the one presented,
    so an active client holds exactly one live record. Records of clients
    that stop polling are removed once they reach the TTL.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, time_func=None,
                 token_generator: Callable[[], str] = generate_token, verbose: bool = True):
        self._table = ReadStateTable(ttl_seconds, time_func)
        self._token_generator = token_generator
        self._verbose = verbose

    @property
    def table(self) -> ReadStateTable:
        return self._table

    @property
    def active_sessions(self) -> int:
        return len(self._table)

    def sweep(self) -> int:
        """Drop expired records. Returns the number removed."""
        return self._table.sweep()

    def read_file(self, path: str, token: str) -> LogFile:
        """Return the content appended to *path* since *token* was issued.

        An unknown or expired token starts a fresh session from offset 0.
        Failures return a LogFile with no content and no token, and leave
        the table untouched.
        """
        self._table.sweep()

        try:
            path = validate_log_path(path)
        except InvalidPathError as e:
            if self._verbose:
                logger.info("Rejected log path: %s", e)
            return LogFile(error=ReadError.INVALID_PATH)

        try:
            current_size = file_length(path)
        except FileUnavailableError:
            return LogFile(error=ReadError.FILE_UNAVAILABLE)

        with self._table.lock:
            last_size = 0
            predecessor = None
            previous = self._table.lookup(token)
            if previous is not None:
                predecessor = previous.token
                if current_size < previous.size:
                    logger.warning("Log file %s shrank from %d to %d bytes, restarting from offset 0",
                                   path, previous.size, current_size)
                else:
                    last_size = previous.size

            delta = current_size - last_size
            if delta > 0:
                try:
                    content = read_range(path, last_size, delta)
                except ShortReadError as e:
                    logger.warning("Short read: %s", e)
                    return LogFile(error=ReadError.SHORT_READ)
                except FileUnavailableError:
                    return LogFile(error=ReadError.FILE_UNAVAILABLE)
            else:
                content = ""

            next_key = self._table.issue_token(self._token_generator)
            self._table.rotate(
                ReadState(
                    size=current_size,
                    observed_at=self._table.now(),
                    token=next_key,
                    predecessor_token=predecessor,
                ),
                retire=predecessor,
            )

        logger.debug("Served %d new byte(s) of %s, token %s -> %s", delta, path, token, next_key)
        return LogFile(content=content, next_key=next_key)
