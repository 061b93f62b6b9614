#!/usr/bin/env python3
"""
ECB Oracle Attack - Byte-at-a-time recovery of a secret suffix
Exploits ECB mode deterministic encryption weakness

The oracle encrypts [random prefix] + chosen input + secret under a fixed key.

Principle:
  1. Block size: feed a growing filler until the output grows, the jump is
     the block size
  2. Sanity: identical input must give identical output, and repeated
     filler blocks must give repeated ciphertext blocks (ECB)
  3. Prefix: the first block changed by a one-byte input difference holds
     the end of the prefix, the filler needed to push the difference out of
     that block gives the exact offset. Filler then aligns chosen input on a
     block boundary and the prefix blocks are cut from every answer
  4. Secret length: the padded length minus the filler needed for the next
     length jump
  5. For each secret byte, pad the input so that the byte is the last one of
     a block. Encrypt window + c for all 256 values of c, where window holds
     the last B-1 known bytes, and match the target block against the
     resulting byte map.
"""

from typing import Callable, Dict, Optional

from tqdm import tqdm

from ..config import FILLER, MAX_BLOCK_SIZE, PROBE_BYTES
from ..errors import OracleContractViolation
from .detect import is_ecb, split_blocks

Oracle = Callable[[bytes], bytes]


def find_block_size(oracle: Oracle, max_block_size: int = MAX_BLOCK_SIZE) -> int:
    """Detects the block size by observing ciphertext length changes"""
    initial_length = len(oracle(b""))

    for i in range(1, max_block_size + 1):
        new_length = len(oracle(FILLER * i))
        if new_length > initial_length:
            return new_length - initial_length

    raise OracleContractViolation(f"output length did not change within {max_block_size} bytes of input")


def check_deterministic(oracle: Oracle, block_size: int):
    probe = FILLER * block_size
    if oracle(probe) != oracle(probe):
        raise OracleContractViolation("oracle is not deterministic")


def check_ecb(oracle: Oracle, block_size: int):
    # three filler blocks always cover two aligned ones, whatever the prefix
    ciphertext = oracle(FILLER * (3 * block_size))
    split_blocks(ciphertext, block_size, strict=True)
    if not is_ecb(ciphertext, block_size):
        raise OracleContractViolation("no repeated block for repeated input, oracle is not ECB")


def _first_differing_block(a: bytes, b: bytes, block_size: int) -> Optional[int]:
    for index, (x, y) in enumerate(zip(split_blocks(a, block_size), split_blocks(b, block_size))):
        if x != y:
            return index
    return None


def find_prefix_length(oracle: Oracle, block_size: int) -> int:
    """
    Length of the unknown prefix the oracle puts in front of our input.

    A single differing input byte first changes block k, the one holding the
    end of the prefix. Filler is then added in front of the differing byte
    until block k stops changing: n filler bytes complete the block, so the
    prefix is (k + 1) * block_size - n bytes long.
    """
    first, second = PROBE_BYTES
    k = _first_differing_block(oracle(first), oracle(second), block_size)
    if k is None:
        raise OracleContractViolation("input does not change the output, cannot locate the prefix")

    start = k * block_size
    for n in range(1, block_size + 1):
        a = oracle(FILLER * n + first)[start:start + block_size]
        b = oracle(FILLER * n + second)[start:start + block_size]
        if a == b:
            return start + block_size - n

    raise OracleContractViolation(f"prefix block {k} never stabilised, wrong block size?")


def aligned_oracle(oracle: Oracle, block_size: int, prefix_length: int) -> Oracle:
    """
    Wrap oracle so that chosen input starts a fresh block.

    Filler completes the last prefix block and the prefix blocks are cut
    from the output, leaving ECB(input + secret).
    """
    align = -prefix_length % block_size
    skip = prefix_length + align

    def query(data: bytes) -> bytes:
        return oracle(FILLER * align + data)[skip:]

    return query


def find_secret_length(oracle: Oracle, block_size: int) -> int:
    """Detects secret length by observing when padding causes a new block"""
    initial_length = len(oracle(b""))

    for i in range(1, block_size + 1):
        new_length = len(oracle(FILLER * i))
        if new_length > initial_length:
            return initial_length - i

    raise OracleContractViolation(f"output length did not change with block size {block_size}")


def build_byte_map(oracle: Oracle, window: bytes, block_size: int) -> Dict[bytes, int]:
    """
    Map the first output block of window + c to c, for every byte c.

    window is the last block_size - 1 known bytes. The map is only valid for
    this window.
    """
    byte_map = {}
    for c in range(256):
        block = oracle(window + bytes([c]))[:block_size]
        byte_map[block] = c

    # a block cipher is a permutation, colliding blocks mean a broken oracle
    if len(byte_map) != 256:
        raise OracleContractViolation(f"byte map has {len(byte_map)} distinct blocks instead of 256")
    return byte_map


def recover_secret(oracle: Oracle, block_size: Optional[int] = None,
                   verbose: bool = False) -> bytes:
    """Recovers the secret byte-by-byte using ECB oracle attack"""
    if block_size is None:
        block_size = find_block_size(oracle)
    if verbose:
        print(f"[+] Block Size: {block_size} bytes")

    check_deterministic(oracle, block_size)
    check_ecb(oracle, block_size)
    if verbose:
        print("[+] ECB mode confirmed")

    prefix_length = find_prefix_length(oracle, block_size)
    query = aligned_oracle(oracle, block_size, prefix_length)
    secret_length = find_secret_length(query, block_size)
    if verbose:
        print(f"[+] Prefix Length: {prefix_length} bytes")
        print(f"[+] Secret Length: {secret_length} bytes")
        print("[*] Recovering secret...")

    recovered = b""
    known = FILLER * (block_size - 1)
    for i in tqdm(range(secret_length), disable=not verbose, desc="Recovering"):
        # Align target byte to end of block
        padding = FILLER * (block_size - (i % block_size) - 1)
        start = block_size * (i // block_size)
        target_block = query(padding)[start:start + block_size]

        window = known[-(block_size - 1):] if block_size > 1 else b""
        byte_map = build_byte_map(query, window, block_size)
        if target_block not in byte_map:
            raise OracleContractViolation(
                f"no candidate matches secret byte {i} of {secret_length}, recovered so far: {recovered!r}"
            )
        recovered += bytes([byte_map[target_block]])
        known += recovered[-1:]

    if verbose:
        print(f"[+] Recovered Secret: {recovered!r}")
    return recovered
