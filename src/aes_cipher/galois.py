"""Byte arithmetic in GF(2^8) with the AES polynomial x^8+x^4+x^3+x+1."""

from __future__ import annotations


def xtime(a: int) -> int:
    """Multiply by x in GF(2^8)."""
    return ((a << 1) ^ 0x1b) & 0xff if a & 0x80 else (a << 1) & 0xff


multiply2 = xtime


def multiply3(a: int) -> int:
    """Multiply by x+1 in GF(2^8): 3*a = 2*a ^ a."""
    return xtime(a) ^ a


def gf_multiply(a: int, b: int) -> int:
    """Multiply two field elements by repeated doubling.

    Args:
        a: First operand (0-255)
        b: Second operand (0-255)

    Returns:
        Product a*b in GF(2^8)
    """
    result = 0
    while b:
        if b & 1:
            result ^= a
        a = xtime(a)
        b >>= 1
    return result


def multiply9(a: int) -> int:
    """9*a = 8*a ^ a."""
    return xtime(xtime(xtime(a))) ^ a


def multiply11(a: int) -> int:
    """11*a = 8*a ^ 2*a ^ a."""
    a2 = xtime(a)
    return xtime(xtime(a2)) ^ a2 ^ a


def multiply13(a: int) -> int:
    """13*a = 8*a ^ 4*a ^ a."""
    a4 = xtime(xtime(a))
    return xtime(a4) ^ a4 ^ a


def multiply14(a: int) -> int:
    """14*a = 8*a ^ 4*a ^ 2*a."""
    a2 = xtime(a)
    a4 = xtime(a2)
    return xtime(a4) ^ a4 ^ a2
