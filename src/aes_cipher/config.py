"""Cipher configuration object."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidKeySizeError
from .key_schedule import KEY_SIZES, num_key_words, num_rounds

SUPPORTED_MODES = ("ecb", "cbc")


@dataclass
class CipherConfig:
    """Configuration for a mode-of-operation run.

    Validated on construction so that a bad key size or mode is rejected
    before any key material is touched.
    """

    # Key size in bits: 128, 192 or 256
    key_size_bits: int = 128

    # Mode of operation: "ecb" or "cbc"
    mode: str = "ecb"

    # Worker threads for parallelizable block steps (ECB, CBC decrypt)
    workers: int = 1

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.key_size_bits not in KEY_SIZES:
            raise InvalidKeySizeError(
                f"Key size must be 128, 192 or 256 bits, got {self.key_size_bits}"
            )
        if self.mode not in SUPPORTED_MODES:
            raise ValueError(f"Unknown mode: {self.mode}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

    @classmethod
    def for_key(cls, key: bytes, mode: str = "ecb", workers: int = 1) -> CipherConfig:
        """Build a config whose key size is inferred from ``key``."""
        return cls(key_size_bits=len(key) * 8, mode=mode, workers=workers)

    @property
    def rounds(self) -> int:
        """Number of cipher rounds for the configured key size."""
        return num_rounds(self.key_size_bits)

    @property
    def key_words(self) -> int:
        """Number of 32-bit key words."""
        return num_key_words(self.key_size_bits)

    @property
    def key_length(self) -> int:
        """Expected key length in bytes."""
        return self.key_size_bits // 8
