"""AES key schedule (Rijndael key expansion) for 128/192/256-bit keys.

The schedule is a flat ``bytes`` object of ``16 * (rounds + 1)`` bytes.
Round ``r`` uses bytes ``[16*r, 16*r + 16)``: round 0 is the pre-whitening
key addition and round ``rounds`` is the final round key.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidKeySizeError, KeyLengthError, ScheduleError
from .tables import SBOX, round_constant


BLOCK_SIZE = 16

# key size in bits -> (key words, rounds)
KEY_SIZES: dict[int, tuple[int, int]] = {
    128: (4, 10),
    192: (6, 12),
    256: (8, 14),
}

VALID_ROUNDS = frozenset(rounds for _, rounds in KEY_SIZES.values())


def _lookup(key_size: int) -> tuple[int, int]:
    if key_size not in KEY_SIZES:
        raise InvalidKeySizeError(
            f"Key size must be 128, 192 or 256 bits, got {key_size}"
        )
    return KEY_SIZES[key_size]


def num_rounds(key_size: int) -> int:
    """Number of cipher rounds for a key size in bits (10, 12 or 14)."""
    return _lookup(key_size)[1]


def num_key_words(key_size: int) -> int:
    """Number of 32-bit words in a key of the given size (4, 6 or 8)."""
    return _lookup(key_size)[0]


def validate_key(key: bytes, key_size: int) -> None:
    """Check that a key buffer matches its declared size.

    Raises:
        InvalidKeySizeError: If key_size is not 128, 192 or 256
        KeyLengthError: If len(key) disagrees with key_size
    """
    expected = num_key_words(key_size) * 4
    if len(key) != expected:
        raise KeyLengthError(
            f"Key must be {expected} bytes for AES-{key_size}, got {len(key)}"
        )


def key_expansion(key: bytes, key_size: int) -> bytes:
    """Expand a cipher key into the full round-key schedule.

    Args:
        key: 16, 24 or 32 byte cipher key (not modified)
        key_size: Key size in bits (128, 192 or 256)

    Returns:
        ``16 * (rounds + 1)`` bytes of round-key material

    Raises:
        InvalidKeySizeError: If key_size is not supported
        KeyLengthError: If the key length does not match key_size
    """
    validate_key(key, key_size)
    nk = num_key_words(key_size)
    total_words = 4 * (num_rounds(key_size) + 1)

    # Initialize with original key
    w = [list(key[i:i + 4]) for i in range(0, 4 * nk, 4)]

    for i in range(nk, total_words):
        temp = w[i - 1][:]
        if i % nk == 0:
            # RotWord + SubWord + Rcon
            temp = [SBOX[temp[1]], SBOX[temp[2]], SBOX[temp[3]], SBOX[temp[0]]]
            temp[0] ^= round_constant(i // nk)
        elif nk > 6 and i % nk == 4:
            # AES-256 only: SubWord without rotation or constant
            temp = [SBOX[b] for b in temp]
        w.append([w[i - nk][j] ^ temp[j] for j in range(4)])

    return bytes(b for word in w for b in word)


def get_round_key(schedule: bytes, round_num: int) -> bytes:
    """Extract the 16-byte round key for ``round_num`` from a schedule.

    Raises:
        ScheduleError: If the round lies outside the schedule
    """
    available = len(schedule) // BLOCK_SIZE
    if not 0 <= round_num < available:
        raise ScheduleError(
            f"Round must be 0..{available - 1}, got {round_num}"
        )
    start = BLOCK_SIZE * round_num
    return bytes(schedule[start:start + BLOCK_SIZE])


def check_schedule(schedule: bytes, rounds: int) -> None:
    """Verify a schedule/rounds pair before it drives a block operation.

    The round count is carried by the caller, never inferred from the
    schedule length.

    Raises:
        ScheduleError: If rounds is invalid or the lengths disagree
    """
    if rounds not in VALID_ROUNDS:
        raise ScheduleError(f"Rounds must be 10, 12 or 14, got {rounds}")
    expected = BLOCK_SIZE * (rounds + 1)
    if len(schedule) != expected:
        raise ScheduleError(
            f"Schedule must be {expected} bytes for {rounds} rounds, "
            f"got {len(schedule)}"
        )


@dataclass(frozen=True)
class KeySchedule:
    """An expanded key together with the round count it was built for."""

    round_keys: bytes
    rounds: int
    key_size: int

    @classmethod
    def from_key(cls, key: bytes, key_size: int) -> KeySchedule:
        """Expand ``key`` and bind it to its round count."""
        return cls(
            round_keys=key_expansion(key, key_size),
            rounds=num_rounds(key_size),
            key_size=key_size,
        )

    def round_key(self, round_num: int) -> bytes:
        """16-byte round key for ``round_num``."""
        return get_round_key(self.round_keys, round_num)

    def __len__(self) -> int:
        return len(self.round_keys)
