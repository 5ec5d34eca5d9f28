"""
Utility functions for byte/state conversions and hex formatting.

AES state is 4x4 bytes in column-major order:
  state[row][col] where row, col in [0..3]

Column-major mapping from 16-byte array:
  byte[0]  -> state[0][0]
  byte[1]  -> state[1][0]
  byte[2]  -> state[2][0]
  byte[3]  -> state[3][0]
  byte[4]  -> state[0][1]
  ...
  byte[15] -> state[3][3]
"""

from __future__ import annotations

from .errors import BlockSizeError


def bytes_to_state(data: bytes) -> list[list[int]]:
    """
    Convert 16 bytes to 4x4 AES state (column-major).

    Args:
        data: 16 bytes of input

    Returns:
        4x4 list of integers (0-255)
    """
    if len(data) != 16:
        raise BlockSizeError(f"Expected 16 bytes, got {len(data)}")

    state = [[0 for _ in range(4)] for _ in range(4)]
    for col in range(4):
        for row in range(4):
            state[row][col] = data[col * 4 + row]
    return state


def state_to_bytes(state: list[list[int]]) -> bytes:
    """
    Convert 4x4 AES state to 16 bytes (column-major).
    """
    return bytes(state[row][col] for col in range(4) for row in range(4))


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Convert hex string to bytes.

    Whitespace is ignored so grouped input such as "0011 2233" is accepted.
    """
    return bytes.fromhex("".join(hex_str.split()))


def bytes_to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hex string.
    """
    return bytes(data).hex()


def format_state_grid(state: list[list[int]]) -> str:
    """
    Format state as a readable 4x4 grid.

    Returns multi-line string like:
      2b 28 ab 09
      7e ae f7 cf
      15 d2 15 4f
      16 a6 88 3c
    """
    lines = []
    for row in range(4):
        row_hex = [f"{state[row][col]:02x}" for col in range(4)]
        lines.append("  " + " ".join(row_hex))
    return "\n".join(lines)


def format_bytes_grid(data: bytes) -> str:
    """
    Format 16 bytes as a readable 4x4 grid (column-major view).
    """
    return format_state_grid(bytes_to_state(data))


def xor_into(target: bytearray, offset: int, mask: bytes) -> None:
    """
    XOR ``mask`` into ``target`` starting at ``offset``, in place.
    """
    for i, m in enumerate(mask):
        target[offset + i] ^= m


def require_mutable(buf: object, what: str) -> None:
    """
    Reject buffers that cannot be mutated in place.

    Raises:
        TypeError: If buf is not a bytearray
    """
    if not isinstance(buf, bytearray):
        raise TypeError(
            f"{what} must be a bytearray (modified in place), "
            f"got {type(buf).__name__}"
        )
