"""Continuation token generation."""

import random
import string

TOKEN_ALPHABET = string.ascii_uppercase + string.digits
TOKEN_LENGTH = 8

# Seeded from os.urandom, never from the clock.
_rng = random.SystemRandom()


def generate_token(length: int = TOKEN_LENGTH, rng: random.Random | None = None) -> str:
    """Return a random token of *length* characters from A-Z and 0-9."""
    rng = rng or _rng
    return "".join(rng.choice(TOKEN_ALPHABET) for _ in range(length))
