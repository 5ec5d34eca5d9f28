"""Tests for state/hex helpers."""

import pytest

from aes_cipher.errors import BlockSizeError
from aes_cipher.utils import (
    bytes_to_hex,
    bytes_to_state,
    format_bytes_grid,
    hex_to_bytes,
    require_mutable,
    state_to_bytes,
    xor_into,
)


FIPS_KEY = "2b7e151628aed2a6abf7158809cf4f3c"


class TestStateConversion:
    """Column-major state layout."""

    def test_column_major(self) -> None:
        state = bytes_to_state(bytes(range(16)))
        assert state[0] == [0, 4, 8, 12]
        assert state[3] == [3, 7, 11, 15]

    def test_round_trip(self) -> None:
        data = hex_to_bytes(FIPS_KEY)
        assert state_to_bytes(bytes_to_state(data)) == data

    def test_wrong_size(self) -> None:
        with pytest.raises(BlockSizeError, match="Expected 16 bytes"):
            bytes_to_state(bytes(15))

    def test_grid(self) -> None:
        grid = format_bytes_grid(hex_to_bytes(FIPS_KEY))
        assert grid.split("\n")[0] == "  2b 28 ab 09"
        assert grid.split("\n")[3] == "  16 a6 88 3c"


class TestHex:
    """Hex conversions."""

    def test_whitespace_ignored(self) -> None:
        assert hex_to_bytes("00 11\n22") == b"\x00\x11\x22"

    def test_bytearray_to_hex(self) -> None:
        assert bytes_to_hex(bytearray(b"\xab\xcd")) == "abcd"

    def test_invalid_hex(self) -> None:
        with pytest.raises(ValueError):
            hex_to_bytes("xyz")


class TestBuffers:
    """In-place buffer helpers."""

    def test_xor_into(self) -> None:
        target = bytearray(b"\x00\x00\xf0\x0f")
        xor_into(target, 2, b"\xff\xff")
        assert target == bytearray(b"\x00\x00\x0f\xf0")

    def test_require_mutable(self) -> None:
        require_mutable(bytearray(1), "Block")
        with pytest.raises(TypeError, match="Block must be a bytearray"):
            require_mutable(b"\x00", "Block")
