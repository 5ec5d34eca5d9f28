"""Precondition errors raised by the cipher core.

Every error subclasses ``ValueError`` so callers that already guard with
``except ValueError`` keep working. Decrypting with the wrong key or IV is
not an error: AES has no integrity check and simply yields wrong plaintext.
"""


class AESError(ValueError):
    """Base class for all cipher precondition violations."""


class InvalidKeySizeError(AESError):
    """Key size in bits is not one of 128, 192 or 256."""


class KeyLengthError(AESError):
    """Key buffer length does not match the declared key size."""


class BlockSizeError(AESError):
    """A block, round key or IV is not exactly 16 bytes."""


class BlockAlignmentError(AESError):
    """Content length is not a multiple of the 16-byte block size."""


class ScheduleError(AESError):
    """Expanded key schedule does not agree with the round count."""
