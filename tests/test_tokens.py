"""Tests for continuation token generation."""

import random

from log_server.tokens import TOKEN_ALPHABET, TOKEN_LENGTH, generate_token


class TestGenerateToken:
    def test_length(self):
        assert len(generate_token()) == TOKEN_LENGTH == 8

    def test_alphabet(self):
        for _ in range(200):
            assert set(generate_token()) <= set(TOKEN_ALPHABET)

    def test_alphabet_is_uppercase_and_digits(self):
        assert len(TOKEN_ALPHABET) == 36
        assert TOKEN_ALPHABET.startswith("ABC")
        assert TOKEN_ALPHABET.endswith("789")

    def test_tokens_differ(self):
        tokens = {generate_token() for _ in range(1000)}
        assert len(tokens) == 1000

    def test_custom_length(self):
        assert len(generate_token(length=12)) == 12

    def test_injected_rng_is_deterministic(self):
        a = generate_token(rng=random.Random(42))
        b = generate_token(rng=random.Random(42))
        assert a == b
