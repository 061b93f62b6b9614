"""ECB mode detection and chosen-plaintext attacks."""

from .detect import EncryptionMode, count_repeated_blocks, detect_mode, find_ecb_ciphertext, is_ecb, split_blocks
from .oracle_attack import (
    aligned_oracle,
    build_byte_map,
    check_deterministic,
    check_ecb,
    find_block_size,
    find_prefix_length,
    find_secret_length,
    recover_secret,
)

__all__ = [
    "EncryptionMode",
    "aligned_oracle",
    "build_byte_map",
    "check_deterministic",
    "check_ecb",
    "count_repeated_blocks",
    "detect_mode",
    "find_block_size",
    "find_ecb_ciphertext",
    "find_prefix_length",
    "find_secret_length",
    "is_ecb",
    "recover_secret",
    "split_blocks",
]
