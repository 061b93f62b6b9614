#!/usr/bin/env python3
"""
ECB mode detection.

In ECB each block is encrypted independently, so identical plaintext blocks
give identical ciphertext blocks. A ciphertext with a repeated block was
almost certainly produced in ECB mode; CBC chains blocks and hides repetition.
Short or non-repetitive plaintexts can still slip through undetected.
"""

from collections import Counter
from enum import Enum
from typing import Iterable, List, Optional

from ..config import BLOCK_SIZE
from ..errors import LengthMismatch


class EncryptionMode(Enum):
    ECB = "ecb"
    CBC = "cbc"


def split_blocks(data: bytes, block_size: int = BLOCK_SIZE, strict: bool = False) -> List[bytes]:
    """
    Cut data into block_size slices.

    A trailing partial block is dropped, or rejected when strict is set.
    """
    if block_size < 1:
        raise ValueError("block size must be positive")
    if strict and len(data) % block_size:
        raise LengthMismatch(f"{len(data)} bytes is not a multiple of the block size {block_size}")
    return [data[i:i + block_size] for i in range(0, len(data) - block_size + 1, block_size)]


def count_repeated_blocks(cipher: bytes, block_size: int = BLOCK_SIZE) -> int:
    blocks = split_blocks(cipher, block_size)
    return len(blocks) - len(Counter(blocks))


def is_ecb(cipher: bytes, block_size: int = BLOCK_SIZE) -> bool:
    """True when any two blocks of cipher are identical."""
    return count_repeated_blocks(cipher, block_size) > 0


def find_ecb_ciphertext(ciphers: Iterable[bytes], block_size: int = BLOCK_SIZE) -> Optional[int]:
    """Index of the first ciphertext with a repeated block, None if there is none."""
    for index, cipher in enumerate(ciphers):
        if is_ecb(cipher, block_size):
            return index
    return None


def detect_mode(cipher: bytes, block_size: int = BLOCK_SIZE) -> EncryptionMode:
    return EncryptionMode.ECB if is_ecb(cipher, block_size) else EncryptionMode.CBC
