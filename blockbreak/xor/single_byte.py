#!/usr/bin/env python3
"""
Single-byte XOR brute-force.

Principle:
  - XOR the ciphertext with each of the 256 possible key bytes
  - Keep candidates that decode as UTF-8 text
  - Rank them with the English frequency score, best one is the key

When several keys reach the best score the last one tried (highest key
value) wins. The same rule picks the winner among several ciphertexts.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from ..errors import NoPlausibleCandidate
from ..scoring import weight_characters


@dataclass(frozen=True)
class Candidate:
    key: int
    plaintext: bytes
    text: Optional[str]  # None when plaintext is not valid UTF-8
    score: float

    @property
    def decoded(self) -> bool:
        return self.text is not None


def xor_bytes(data: bytes, key: bytes) -> bytes:
    """XOR data with key repeated over its whole length."""
    if not key:
        raise ValueError("key must not be empty")
    data_array = np.frombuffer(data, dtype=np.uint8)
    key_array = np.resize(np.frombuffer(key, dtype=np.uint8), len(data_array))
    return np.bitwise_xor(data_array, key_array).tobytes()


def _decode_with_key(cipher: bytes, key: int) -> Candidate:
    plaintext = xor_bytes(cipher, bytes([key]))
    try:
        text = plaintext.decode("utf-8")
    except UnicodeDecodeError:
        return Candidate(key, plaintext, None, 0.0)
    return Candidate(key, plaintext, text, weight_characters(text))


def score_single_byte_keys(cipher: bytes) -> List[Candidate]:
    """All 256 candidates, in key order."""
    return [_decode_with_key(cipher, key) for key in range(256)]


def _best(candidates: Iterable[Candidate]) -> Optional[Candidate]:
    best = None
    for cand in candidates:
        if not cand.decoded:
            continue
        # >= : last maximum wins
        if best is None or cand.score >= best.score:
            best = cand
    return best


def crack_single_byte_xor(cipher: bytes) -> Candidate:
    """Most plausible single-byte key for cipher."""
    if not cipher:
        raise NoPlausibleCandidate("empty ciphertext")
    best = _best(score_single_byte_keys(cipher))
    if best is None:
        raise NoPlausibleCandidate("no key decodes the ciphertext as text")
    return best


def find_single_byte_xor(ciphers: Iterable[bytes], verbose: bool = False) -> Tuple[int, Candidate]:
    """
    Find which ciphertext of a collection was encrypted with single-byte XOR.

    Returns (index, candidate) of the most plausible decryption across all
    ciphertexts. Ciphertexts with no decodable key are skipped.
    """
    best_index, best = -1, None
    for index, cipher in enumerate(tqdm(list(ciphers), disable=not verbose, desc="Scanning")):
        try:
            cand = crack_single_byte_xor(cipher)
        except NoPlausibleCandidate:
            continue
        if best is None or cand.score >= best.score:
            best_index, best = index, cand

    if best is None:
        raise NoPlausibleCandidate("no ciphertext decodes as text")
    if verbose:
        print(f"[+] Line {best_index}: key=0x{best.key:02x} text={best.text!r}")
    return best_index, best
