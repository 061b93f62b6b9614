#!/usr/bin/env python3
"""
Repeating-key XOR (Vigenere over bytes) ciphertext-only attack.

Principle:
  1. Key size: for each candidate size, compare the first four size-byte
     blocks pairwise. The Hamming distance between blocks encrypted with the
     same key bytes is the distance between plaintext bytes, which is small
     for English. Normalized by the bit length of a block, the smallest
     average distance marks the key size.
  2. Transpose: byte i goes to column i mod K, so every column is a
     single-byte XOR ciphertext.
  3. Crack each column with the single-byte attack, the column keys in order
     form the repeating key.
"""

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Optional

import numpy as np

from ..config import KEY_SIZE_BLOCKS, MAX_KEY_SIZE
from ..errors import LengthMismatch
from .single_byte import crack_single_byte_xor, xor_bytes


@dataclass(frozen=True)
class RepeatingKeyResult:
    key: bytes
    plaintext: bytes

    @property
    def key_size(self) -> int:
        return len(self.key)

    @property
    def text(self) -> str:
        return self.plaintext.decode("utf-8", errors="replace")


def repeating_key_xor(data: bytes, key: bytes) -> bytes:
    """Encrypt (or decrypt) data with key cycled to its length."""
    return xor_bytes(data, key)


def hamming_distance(a: bytes, b: bytes) -> int:
    """Number of differing bits between two equal-length buffers."""
    if len(a) != len(b):
        raise LengthMismatch(f"cannot compare {len(a)} bytes with {len(b)} bytes")
    diff = np.frombuffer(xor_bytes(a, b), dtype=np.uint8) if a else np.zeros(0, dtype=np.uint8)
    return int(np.unpackbits(diff).sum())


def key_size_distances(cipher: bytes, max_key_size: int = MAX_KEY_SIZE) -> Dict[int, float]:
    """
    Normalized average Hamming distance for every testable key size.

    A size is testable when the ciphertext holds KEY_SIZE_BLOCKS full blocks
    of that size, so short ciphertexts cap the search range.
    """
    largest = min(max_key_size, len(cipher) // KEY_SIZE_BLOCKS)
    if largest < 1:
        raise LengthMismatch(
            f"ciphertext of {len(cipher)} bytes is too short to estimate a key size "
            f"(need at least {KEY_SIZE_BLOCKS})"
        )

    distances = {}
    for size in range(1, largest + 1):
        blocks = [cipher[i * size:(i + 1) * size] for i in range(KEY_SIZE_BLOCKS)]
        pairs = list(combinations(blocks, 2))
        average = sum(hamming_distance(x, y) for x, y in pairs) / len(pairs)
        distances[size] = average / (size * 8)
    return distances


def find_key_size(cipher: bytes, max_key_size: int = MAX_KEY_SIZE) -> int:
    """Key size with the smallest normalized distance (smallest size on ties)."""
    distances = key_size_distances(cipher, max_key_size)
    return min(distances, key=lambda size: (distances[size], size))


def transpose(cipher: bytes, key_size: int) -> List[bytes]:
    """Split cipher into key_size columns of equal length (trailing bytes dropped)."""
    if key_size < 1:
        raise ValueError("key size must be positive")
    height = len(cipher) // key_size
    usable = cipher[:key_size * height]
    return [usable[column::key_size] for column in range(key_size)]


def crack_repeating_xor(cipher: bytes, key_size: Optional[int] = None,
                        max_key_size: int = MAX_KEY_SIZE, verbose: bool = False) -> RepeatingKeyResult:
    """
    Recover the key and plaintext of a repeating-key XOR ciphertext.

    key_size skips the estimation step when the key length is already known.
    """
    if key_size is None:
        key_size = find_key_size(cipher, max_key_size)
        if verbose:
            print(f"[+] Estimated key size: {key_size}")

    columns = transpose(cipher, key_size)
    if not columns[0]:
        raise LengthMismatch(f"ciphertext of {len(cipher)} bytes is shorter than key size {key_size}")

    key = bytes(crack_single_byte_xor(column).key for column in columns)
    if verbose:
        print(f"[+] Key: {key!r}")
    return RepeatingKeyResult(key, repeating_key_xor(cipher, key))
