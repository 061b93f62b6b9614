"""
Tests for the single-byte XOR cracker
"""

import random

import pytest

from blockbreak.errors import NoPlausibleCandidate
from blockbreak.oracles import random_bytes
from blockbreak.xor.single_byte import crack_single_byte_xor, find_single_byte_xor, score_single_byte_keys, xor_bytes

CRYPTOPALS_CIPHER = bytes.fromhex("1b37373331363f78151b7f2b783431333d78397828372d363c78373e783a393b3736")


def test_xor_is_an_involution():
    data = b"any buffer \x00\xff will do"
    for key in (0, 1, 0x58, 0xff):
        assert xor_bytes(xor_bytes(data, bytes([key])), bytes([key])) == data


def test_xor_cycles_key():
    assert xor_bytes(b"\x00\x00\x00\x00\x00", b"\x01\x02") == b"\x01\x02\x01\x02\x01"
    assert xor_bytes(b"", b"\x01") == b""


def test_xor_empty_key():
    with pytest.raises(ValueError):
        xor_bytes(b"data", b"")


def test_cryptopals_message():
    """Known single-byte XOR challenge decodes with key 88"""
    cand = crack_single_byte_xor(CRYPTOPALS_CIPHER)
    assert cand.key == 88, f"Expected key 88, got {cand.key}"
    assert cand.text == "Cooking MC's like a pound of bacon"


def test_a_different_and_16():
    cipher = xor_bytes(b"a different", bytes([16]))
    cand = crack_single_byte_xor(cipher)
    assert (cand.key, cand.text) == (16, "a different")


def test_all_candidates_scored():
    candidates = score_single_byte_keys(CRYPTOPALS_CIPHER)
    assert [c.key for c in candidates] == list(range(256))
    assert all(c.score == 0.0 for c in candidates if not c.decoded)


def test_ties_keep_last_key():
    """'E' (key 0x45) and 'e' (key 0x65) score the same, the later key wins"""
    cand = crack_single_byte_xor(b"\x00")
    assert cand.key == 0x65
    assert cand.text == "e"


def test_empty_ciphertext():
    with pytest.raises(NoPlausibleCandidate):
        crack_single_byte_xor(b"")


def test_no_decodable_candidate():
    """Every key leaves one of the two bytes as an invalid UTF-8 sequence"""
    with pytest.raises(NoPlausibleCandidate):
        crack_single_byte_xor(b"\x00\x80")


def test_find_single_byte_xor_among_noise():
    rng = random.Random(4)
    plaintext = b"Now that the party is jumping\n"
    lines = [random_bytes(rng, len(plaintext)) for _ in range(5)]
    lines.insert(2, xor_bytes(plaintext, bytes([53])))

    index, cand = find_single_byte_xor(lines)
    assert index == 2, f"Expected line 2, got {index}"
    assert cand.key == 53
    assert cand.plaintext == plaintext


def test_find_single_byte_xor_skips_undecodable():
    lines = [b"\x00\x80", xor_bytes(b"the end", b"\x07")]
    index, cand = find_single_byte_xor(lines)
    assert (index, cand.text) == (1, "the end")


def test_find_single_byte_xor_nothing_decodes():
    with pytest.raises(NoPlausibleCandidate):
        find_single_byte_xor([b"\x00\x80", b""])
