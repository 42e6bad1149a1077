"""Per-token read state and the thread-safe table that holds it."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30.0


@dataclass(frozen=True)
class ReadState:
    """File size delivered to a client, filed under the token it was issued."""

    size: int
    observed_at: float
    token: str
    predecessor_token: str | None = None

    def is_expired(self, now: float, ttl: float) -> bool:
        # A wall clock stepped backwards gives a negative age; treat it as zero.
        age = max(0.0, now - self.observed_at)
        return age >= ttl


class ReadStateTable:
    """Maps tokens to ReadState records, dropping records older than the TTL.

    Every method takes the table lock. Callers that need several operations
    to happen atomically hold ``table.lock`` around them; the lock is
    reentrant so the methods can still be called inside that block.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, time_func=None):
        self._ttl = ttl_seconds
        self._time_func = time_func or time.time
        self._states: dict[str, ReadState] = {}
        self._lock = threading.RLock()

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def now(self) -> float:
        return self._time_func()

    def sweep(self) -> int:
        """Remove every expired record. Returns the number removed."""
        with self._lock:
            now = self.now()
            expired = [t for t, s in self._states.items() if s.is_expired(now, self._ttl)]
            for token in expired:
                del self._states[token]
        if expired:
            logger.debug("Swept %d expired read state(s)", len(expired))
        return len(expired)

    def lookup(self, token: str) -> ReadState | None:
        """Return the live record for *token*, or None if absent or expired."""
        with self._lock:
            state = self._states.get(token)
            if state is None or state.is_expired(self.now(), self._ttl):
                return None
            return state

    def issue_token(self, generator: Callable[[], str]) -> str:
        """Draw tokens from *generator* until one is not already live."""
        with self._lock:
            token = generator()
            while token in self._states:
                logger.info("Token collision on %s, regenerating", token)
                token = generator()
            return token

    def rotate(self, state: ReadState, retire: str | None = None):
        """Insert *state* and remove the record filed under *retire*."""
        with self._lock:
            self._states[state.token] = state
            if retire is not None and retire != state.token:
                self._states.pop(retire, None)

    def get(self, token: str) -> ReadState | None:
        """Return the record for *token* regardless of age.

        Inspection helper for tests and diagnostics; request handling goes
        through :meth:`lookup`.
        """
        with self._lock:
            return self._states.get(token)

    def tokens(self) -> list[str]:
        """Snapshot of stored tokens, for tests and diagnostics."""
        with self._lock:
            return list(self._states)

    def __contains__(self, token: str) -> bool:
        with self._lock:
            return token in self._states

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
