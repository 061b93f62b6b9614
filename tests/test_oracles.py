"""
Tests for the AES helpers, padding and the encryption oracles
"""

import random

import pytest
from Crypto.Util.Padding import pad, unpad

from blockbreak.errors import LengthMismatch
from blockbreak.oracles import (
    EcbOracle,
    RandomModeOracle,
    cbc_decrypt,
    cbc_encrypt,
    ecb_decrypt,
    ecb_encrypt,
    random_bytes,
)

KEY = b"YELLOW SUBMARINE"


def test_pad_yellow_submarine():
    assert pad(b"YELLOW SUBMARINE", 20) == b"YELLOW SUBMARINE\x04\x04\x04\x04"


def test_pad_full_block_when_aligned():
    assert pad(b"55", 2) == b"55\x02\x02"
    assert pad(b"", 16) == b"\x10" * 16


def test_pad_strip_round_trip():
    for length in range(40):
        data = bytes(range(length))
        for block_size in (1, 8, 16, 20, 255):
            padded = pad(data, block_size)
            assert len(padded) % block_size == 0
            assert padded[:-padded[-1]] == data


def test_ecb_round_trip():
    plaintext = pad(b"attack at dawn", 16)
    assert ecb_decrypt(KEY, ecb_encrypt(KEY, plaintext)) == plaintext


def test_cbc_round_trip():
    iv = bytes(range(16))
    plaintext = pad(b"attack at dawn, retreat at noon", 16)
    assert cbc_decrypt(KEY, iv, cbc_encrypt(KEY, iv, plaintext)) == plaintext


def test_unaligned_input_rejected():
    with pytest.raises(LengthMismatch):
        ecb_encrypt(KEY, b"short")
    with pytest.raises(LengthMismatch):
        cbc_decrypt(KEY, bytes(16), b"x" * 17)


def test_random_bytes_seeded():
    assert random_bytes(random.Random(3), 16) == random_bytes(random.Random(3), 16)
    assert len(random_bytes(random.Random(3), 5)) == 5


def test_ecb_oracle_is_reproducible():
    first = EcbOracle(b"secret", random.Random(1), prefix_range=(5, 10))
    second = EcbOracle(b"secret", random.Random(1), prefix_range=(5, 10))
    assert first.key == second.key
    assert first.prefix == second.prefix
    assert first(b"hello") == second(b"hello")
    assert 5 <= len(first.prefix) <= 10


def test_ecb_oracle_appends_secret():
    oracle = EcbOracle(b"what", random.Random(2))
    assert oracle.prefix == b""
    assert unpad(ecb_decrypt(oracle.key, oracle(b"so ")), 16) == b"so what"


def test_random_mode_oracle_uses_both_modes():
    oracle = RandomModeOracle(random.Random(5))
    modes = {oracle.encrypt(b"A" * 64)[1] for _ in range(40)}
    assert len(modes) == 2
    assert len(oracle(b"A" * 64)) % 16 == 0
