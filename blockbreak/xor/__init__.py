"""XOR cipher attacks: single-byte and repeating-key."""

from .single_byte import Candidate, crack_single_byte_xor, find_single_byte_xor, score_single_byte_keys, xor_bytes
from .repeating_key import (
    RepeatingKeyResult,
    crack_repeating_xor,
    find_key_size,
    hamming_distance,
    key_size_distances,
    repeating_key_xor,
    transpose,
)

__all__ = [
    "Candidate",
    "RepeatingKeyResult",
    "crack_repeating_xor",
    "crack_single_byte_xor",
    "find_key_size",
    "find_single_byte_xor",
    "hamming_distance",
    "key_size_distances",
    "repeating_key_xor",
    "score_single_byte_keys",
    "transpose",
    "xor_bytes",
]
