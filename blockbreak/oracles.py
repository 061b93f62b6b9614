#!/usr/bin/env python3
"""
Encryption oracles and the AES helpers they are built from.

An oracle is any callable taking attacker-chosen bytes and returning a
ciphertext. The key, the random prefix and the secret live inside the
oracle, the attacks never see them.

All randomness comes from an explicit random.Random so a seed makes an
oracle reproducible.
"""

import base64
import random
from typing import Optional, Tuple

import requests
from Crypto.Cipher import AES
from Crypto.Util.Padding import pad

from .config import BLOCK_SIZE
from .ecb.detect import EncryptionMode
from .errors import LengthMismatch

# Random padding added around the input by RandomModeOracle
RANDOM_PAD_RANGE = (5, 10)


def _check_aligned(data: bytes, name: str):
    if len(data) % AES.block_size:
        raise LengthMismatch(f"{name} of {len(data)} bytes is not a multiple of {AES.block_size}")


def ecb_encrypt(key: bytes, plaintext: bytes) -> bytes:
    _check_aligned(plaintext, "plaintext")
    return AES.new(key, AES.MODE_ECB).encrypt(plaintext)


def ecb_decrypt(key: bytes, ciphertext: bytes) -> bytes:
    _check_aligned(ciphertext, "ciphertext")
    return AES.new(key, AES.MODE_ECB).decrypt(ciphertext)


def cbc_encrypt(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    _check_aligned(plaintext, "plaintext")
    return AES.new(key, AES.MODE_CBC, iv).encrypt(plaintext)


def cbc_decrypt(key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    _check_aligned(ciphertext, "ciphertext")
    return AES.new(key, AES.MODE_CBC, iv).decrypt(ciphertext)


def random_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(n))


class EcbOracle:
    """
    AES-ECB(key, pad(prefix + data + secret)).

    The key and, when prefix_range is given, a prefix of random length and
    content are drawn once at construction.
    """

    def __init__(self, secret: bytes, rng: Optional[random.Random] = None,
                 prefix_range: Optional[Tuple[int, int]] = None):
        rng = rng or random.Random()
        self.secret = secret
        self.key = random_bytes(rng, BLOCK_SIZE)
        if prefix_range is None:
            self.prefix = b""
        else:
            low, high = prefix_range
            self.prefix = random_bytes(rng, rng.randint(low, high))

    def __call__(self, data: bytes) -> bytes:
        return ecb_encrypt(self.key, pad(self.prefix + data + self.secret, BLOCK_SIZE))


class RandomModeOracle:
    """
    Encrypts under ECB or CBC at random and reports which one it used.

    Every call surrounds the input with 5 to 10 random bytes on each side,
    then flips a coin for the mode (random IV for CBC). The key is fixed.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.key = random_bytes(self.rng, BLOCK_SIZE)

    def _surround(self, data: bytes) -> bytes:
        before = random_bytes(self.rng, self.rng.randint(*RANDOM_PAD_RANGE))
        after = random_bytes(self.rng, self.rng.randint(*RANDOM_PAD_RANGE))
        return before + data + after

    def encrypt(self, data: bytes) -> Tuple[bytes, EncryptionMode]:
        plaintext = pad(self._surround(data), BLOCK_SIZE)
        if self.rng.random() < 0.5:
            return ecb_encrypt(self.key, plaintext), EncryptionMode.ECB
        iv = random_bytes(self.rng, BLOCK_SIZE)
        return cbc_encrypt(self.key, iv, plaintext), EncryptionMode.CBC

    def __call__(self, data: bytes) -> bytes:
        return self.encrypt(data)[0]


class RemoteOracle:
    """Oracle served over HTTP by blockbreak.ecb.oracle_server."""

    def __init__(self, base_url: str, session=None, timeout: float = 10):
        self.url = base_url.rstrip("/") + "/api/encrypt"
        self.session = session or requests.Session()
        self.timeout = timeout

    def __call__(self, data: bytes) -> bytes:
        response = self.session.post(
            self.url,
            json={"data": base64.b64encode(data).decode()},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return base64.b64decode(response.json()["ciphertext"])
