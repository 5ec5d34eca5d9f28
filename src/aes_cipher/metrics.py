"""Avalanche measurements for the block cipher.

Flipping a single input bit (plaintext or key) should change roughly half
of the 128 ciphertext bits. A broken round transform usually shows up here
as a mean far from 0.5, which makes this a useful smoke test.
"""

from __future__ import annotations

import random
import secrets
from dataclasses import dataclass, field
from typing import Any

from .block import encrypt
from .key_schedule import BLOCK_SIZE, key_expansion, num_key_words, num_rounds

AVALANCHE_TARGETS = ("plaintext", "key")


def hamming_distance(a: bytes, b: bytes) -> int:
    """Count differing bits between two equal-length byte strings."""
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {len(a)} vs {len(b)}")
    return sum(bin(x ^ y).count("1") for x, y in zip(a, b))


def flip_bit(data: bytes, bit: int) -> bytes:
    """Return a copy of ``data`` with bit ``bit`` inverted (bit 0 = MSB of byte 0)."""
    if not 0 <= bit < len(data) * 8:
        raise ValueError(f"Bit index must be 0..{len(data) * 8 - 1}, got {bit}")
    out = bytearray(data)
    out[bit // 8] ^= 0x80 >> (bit % 8)
    return bytes(out)


@dataclass
class AvalancheResult:
    """Summary of an avalanche run."""

    key_size: int
    target: str
    samples: int
    mean_fraction: float = 0.0
    min_fraction: float = 0.0
    max_fraction: float = 0.0
    fractions: list[float] = field(default_factory=list, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "key_size": self.key_size,
            "target": self.target,
            "samples": self.samples,
            "mean_fraction": self.mean_fraction,
            "min_fraction": self.min_fraction,
            "max_fraction": self.max_fraction,
        }


def _encrypt_block(key: bytes, key_size: int, plaintext: bytes) -> bytes:
    block = bytearray(plaintext)
    encrypt(block, key_expansion(key, key_size), num_rounds(key_size))
    return bytes(block)


def measure_avalanche(
    key_size: int = 128,
    samples: int = 100,
    target: str = "plaintext",
    seed: int | None = None,
) -> AvalancheResult:
    """Measure how many ciphertext bits change after a one-bit input flip.

    Args:
        key_size: Key size in bits (128, 192 or 256)
        samples: Number of random (key, plaintext, bit) trials
        target: Which input to flip: "plaintext" or "key"
        seed: Optional seed for reproducible trials

    Returns:
        AvalancheResult with per-trial fractions of flipped output bits
    """
    if target not in AVALANCHE_TARGETS:
        raise ValueError(f"Unknown avalanche target: {target}")
    if samples < 1:
        raise ValueError(f"samples must be >= 1, got {samples}")

    key_len = num_key_words(key_size) * 4
    rng = random.Random(seed) if seed is not None else None

    def random_bytes(count: int) -> bytes:
        if rng is None:
            return secrets.token_bytes(count)
        return rng.randbytes(count)

    def random_bit(limit: int) -> int:
        if rng is None:
            return secrets.randbelow(limit)
        return rng.randrange(limit)

    fractions = []
    for _ in range(samples):
        key = random_bytes(key_len)
        plaintext = random_bytes(BLOCK_SIZE)
        baseline = _encrypt_block(key, key_size, plaintext)

        if target == "plaintext":
            plaintext = flip_bit(plaintext, random_bit(BLOCK_SIZE * 8))
        else:
            key = flip_bit(key, random_bit(key_len * 8))

        flipped = _encrypt_block(key, key_size, plaintext)
        fractions.append(hamming_distance(baseline, flipped) / (BLOCK_SIZE * 8))

    return AvalancheResult(
        key_size=key_size,
        target=target,
        samples=samples,
        mean_fraction=sum(fractions) / len(fractions),
        min_fraction=min(fractions),
        max_fraction=max(fractions),
        fractions=fractions,
    )
