#!/usr/bin/env python3
"""
English plausibility scoring.

Principle:
  - Rank "ETAOIN SHRDLU" from commonest to rarest (13 symbols, space included)
  - A character found at rank r weighs 13 - r, anything else weighs 0
  - The score is the average weight per character
"""

from types import MappingProxyType
from typing import Optional

from .config import WEIGHTS

# 'E' -> 13, 'T' -> 12, ..., 'U' -> 1
WEIGHT_TABLE = MappingProxyType({ch: len(WEIGHTS) - rank for rank, ch in enumerate(WEIGHTS)})


def weight_characters(text: str) -> float:
    """Average frequency weight of the characters of text (0.0 for empty text)."""
    if not text:
        return 0.0
    total = sum(WEIGHT_TABLE.get(ch, 0) for ch in text.upper())
    return total / len(text)


def score_bytes(data: bytes) -> Optional[float]:
    """Score raw bytes as UTF-8 text, None when they do not decode."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return weight_characters(text)
