"""
blockbreak - cryptanalysis of repeating-key XOR and AES-ECB.

  - scoring: English plausibility of decoded text
  - xor: single-byte and repeating-key XOR cracking
  - ecb: ECB detection and byte-at-a-time oracle attack
  - oracles: AES helpers and the encryption oracles the attacks target
"""

from .errors import CrackError, LengthMismatch, NoPlausibleCandidate, OracleContractViolation

__version__ = "0.1.0"

__all__ = [
    "CrackError",
    "LengthMismatch",
    "NoPlausibleCandidate",
    "OracleContractViolation",
]
