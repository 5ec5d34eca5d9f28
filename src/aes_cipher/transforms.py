"""The four AES round transformations and their inverses.

Each transform mutates a 16-byte ``bytearray`` state in place and returns
``None``. The state is column-major::

    [0, 4,  8, 12]
    [1, 5,  9, 13]
    [2, 6, 10, 14]
    [3, 7, 11, 15]
"""

from __future__ import annotations

from .galois import (
    multiply2,
    multiply3,
    multiply9,
    multiply11,
    multiply13,
    multiply14,
)
from .tables import SBOX, INV_SBOX


def add_round_key(state: bytearray, round_key: bytes) -> None:
    """XOR state with round key. Self-inverse."""
    for i in range(16):
        state[i] ^= round_key[i]


def sub_bytes(state: bytearray) -> None:
    """Apply S-box to each byte."""
    for i in range(16):
        state[i] = SBOX[state[i]]


def inv_sub_bytes(state: bytearray) -> None:
    """Apply inverse S-box to each byte."""
    for i in range(16):
        state[i] = INV_SBOX[state[i]]


def _rotate_row(state: bytearray, row: int, shift: int) -> None:
    cells = [state[row + 4 * col] for col in range(4)]
    cells = cells[shift:] + cells[:shift]
    for col in range(4):
        state[row + 4 * col] = cells[col]


def shift_rows(state: bytearray) -> None:
    """Rotate row r left by r positions; row 0 is untouched."""
    for row in range(1, 4):
        _rotate_row(state, row, row)


def inv_shift_rows(state: bytearray) -> None:
    """Rotate row r right by r positions; row 0 is untouched."""
    for row in range(1, 4):
        _rotate_row(state, row, 4 - row)


def mix_single_column(col: list[int]) -> list[int]:
    """Multiply one column by the MixColumns matrix."""
    a0, a1, a2, a3 = col
    return [
        multiply2(a0) ^ multiply3(a1) ^ a2 ^ a3,
        a0 ^ multiply2(a1) ^ multiply3(a2) ^ a3,
        a0 ^ a1 ^ multiply2(a2) ^ multiply3(a3),
        multiply3(a0) ^ a1 ^ a2 ^ multiply2(a3),
    ]


def inv_mix_single_column(col: list[int]) -> list[int]:
    """Multiply one column by the InvMixColumns matrix."""
    a0, a1, a2, a3 = col
    return [
        multiply14(a0) ^ multiply11(a1) ^ multiply13(a2) ^ multiply9(a3),
        multiply9(a0) ^ multiply14(a1) ^ multiply11(a2) ^ multiply13(a3),
        multiply13(a0) ^ multiply9(a1) ^ multiply14(a2) ^ multiply11(a3),
        multiply11(a0) ^ multiply13(a1) ^ multiply9(a2) ^ multiply14(a3),
    ]


def mix_columns(state: bytearray) -> None:
    """Mix columns."""
    for col in range(4):
        start = col * 4
        state[start:start + 4] = bytes(mix_single_column(list(state[start:start + 4])))


def inv_mix_columns(state: bytearray) -> None:
    """Inverse mix columns."""
    for col in range(4):
        start = col * 4
        state[start:start + 4] = bytes(inv_mix_single_column(list(state[start:start + 4])))
