"""Exceptions raised by the attacks."""


class CrackError(Exception):
    """Base class for every failure reported by blockbreak."""


class LengthMismatch(CrackError, ValueError):
    """Buffer has the wrong shape (unequal lengths, unaligned blocks, too short)."""


class NoPlausibleCandidate(CrackError):
    """No candidate key decodes the ciphertext into valid text."""


class OracleContractViolation(CrackError):
    """
    The encryption oracle does not behave like a deterministic ECB oracle:
    output changes for identical input, no repeated blocks, no length jump,
    or a byte-map lookup misses before the end of the secret.
    """
