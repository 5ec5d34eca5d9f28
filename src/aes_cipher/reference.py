"""Golden reference AES using PyCryptodome, plus published test vectors."""

from __future__ import annotations

from Crypto.Cipher import AES


def golden_encrypt(key: bytes, plaintext: bytes) -> bytes:
    """Encrypt a single block using PyCryptodome as golden reference.

    Args:
        key: 16, 24 or 32 byte AES key
        plaintext: 16-byte plaintext block

    Returns:
        16-byte ciphertext block

    Raises:
        ValueError: If key or plaintext has the wrong size
    """
    if len(key) not in (16, 24, 32):
        raise ValueError(f"Key must be 16, 24 or 32 bytes, got {len(key)}")
    if len(plaintext) != 16:
        raise ValueError(f"Plaintext must be 16 bytes, got {len(plaintext)}")

    cipher = AES.new(bytes(key), AES.MODE_ECB)
    return cipher.encrypt(bytes(plaintext))


def golden_ecb_encrypt(key: bytes, content: bytes) -> bytes:
    """ECB-encrypt block-aligned content with PyCryptodome."""
    return AES.new(bytes(key), AES.MODE_ECB).encrypt(bytes(content))


def golden_cbc_encrypt(key: bytes, iv: bytes, content: bytes) -> bytes:
    """CBC-encrypt block-aligned content with PyCryptodome."""
    return AES.new(bytes(key), AES.MODE_CBC, iv=bytes(iv)).encrypt(bytes(content))


def validate_against_golden(
    key: bytes, plaintext: bytes, candidate_ciphertext: bytes
) -> tuple[bool, str]:
    """Validate a candidate ciphertext against the golden reference.

    Returns:
        Tuple of (is_correct, error_detail)
    """
    expected = golden_encrypt(key, plaintext)
    if bytes(candidate_ciphertext) == expected:
        return True, ""
    else:
        return False, (
            f"Ciphertext mismatch: expected {expected.hex()}, "
            f"got {bytes(candidate_ciphertext).hex()}"
        )


# FIPS-197 Appendix B and C test vectors
FIPS_197_TEST_VECTORS = [
    # Appendix B - cipher example
    {
        "name": "FIPS-197 Appendix B",
        "key_size": 128,
        "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
        "plaintext": bytes.fromhex("3243f6a8885a308d313198a2e0370734"),
        "ciphertext": bytes.fromhex("3925841d02dc09fbdc118597196a0b32"),
    },
    # Appendix C.1 - AES-128
    {
        "name": "FIPS-197 Appendix C.1",
        "key_size": 128,
        "key": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("69c4e0d86a7b0430d8cdb78070b4c55a"),
    },
    # Appendix C.2 - AES-192
    {
        "name": "FIPS-197 Appendix C.2",
        "key_size": 192,
        "key": bytes.fromhex("000102030405060708090a0b0c0d0e0f1011121314151617"),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("dda97ca4864cdfe06eaf70a0ec0d7191"),
    },
    # Appendix C.3 - AES-256
    {
        "name": "FIPS-197 Appendix C.3",
        "key_size": 256,
        "key": bytes.fromhex(
            "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
        ),
        "plaintext": bytes.fromhex("00112233445566778899aabbccddeeff"),
        "ciphertext": bytes.fromhex("8ea2b7ca516745bfeafc49904b496089"),
    },
    # Additional AES-128 vectors
    {
        "name": "All zeros",
        "key_size": 128,
        "key": bytes.fromhex("00000000000000000000000000000000"),
        "plaintext": bytes.fromhex("00000000000000000000000000000000"),
        "ciphertext": bytes.fromhex("66e94bd4ef8a2c3b884cfa59ca342b2e"),
    },
    {
        "name": "All ones",
        "key_size": 128,
        "key": bytes.fromhex("ffffffffffffffffffffffffffffffff"),
        "plaintext": bytes.fromhex("ffffffffffffffffffffffffffffffff"),
        "ciphertext": bytes.fromhex("bcbf217cb280cf30b2517052193ab979"),
    },
]

# NIST SP 800-38A F.2.1 CBC-AES128.Encrypt
SP800_38A_CBC_AES128 = {
    "key": bytes.fromhex("2b7e151628aed2a6abf7158809cf4f3c"),
    "iv": bytes.fromhex("000102030405060708090a0b0c0d0e0f"),
    "plaintext": bytes.fromhex(
        "6bc1bee22e409f96e93d7e117393172a"
        "ae2d8a571e03ac9c9eb76fac45af8e51"
        "30c81c46a35ce411e5fbc1191a0a52ef"
        "f69f2445df4f9b17ad2b417be66c3710"
    ),
    "ciphertext": bytes.fromhex(
        "7649abac8119b246cee98e9b12e9197d"
        "5086cb9b507219ee95db113a917678b2"
        "73bed6b8e3c1743b7116e69e22229516"
        "3ff1caa1681fac09120eca307586e1a7"
    ),
}
