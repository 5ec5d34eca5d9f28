"""Tests for the click command-line interface."""

import json

from click.testing import CliRunner

from aes_cipher.cli import main
from aes_cipher.reference import SP800_38A_CBC_AES128


FIPS_KEY = "000102030405060708090a0b0c0d0e0f"
FIPS_PT = "00112233445566778899aabbccddeeff"
FIPS_CT = "69c4e0d86a7b0430d8cdb78070b4c55a"


class TestEncryptDecrypt:
    """encrypt / decrypt commands."""

    def test_ecb_encrypt(self) -> None:
        result = CliRunner().invoke(main, ["encrypt", "--key", FIPS_KEY, "--data", FIPS_PT])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == FIPS_CT

    def test_ecb_decrypt(self) -> None:
        result = CliRunner().invoke(main, ["decrypt", "--key", FIPS_KEY, "--data", FIPS_CT])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == FIPS_PT

    def test_cbc_encrypt(self) -> None:
        vec = SP800_38A_CBC_AES128
        result = CliRunner().invoke(main, [
            "encrypt", "--mode", "cbc",
            "--key", vec["key"].hex(),
            "--iv", vec["iv"].hex(),
            "--data", vec["plaintext"].hex(),
        ])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == vec["ciphertext"].hex()

    def test_misaligned_data(self) -> None:
        result = CliRunner().invoke(main, ["encrypt", "--key", FIPS_KEY, "--data", "0011"])
        assert result.exit_code == 1
        assert "multiple of 16" in result.output

    def test_key_size_mismatch(self) -> None:
        result = CliRunner().invoke(main, [
            "encrypt", "--key", FIPS_KEY, "--key-size", "256", "--data", FIPS_PT,
        ])
        assert result.exit_code == 1
        assert "Key must be 32 bytes" in result.output

    def test_cbc_without_iv(self) -> None:
        result = CliRunner().invoke(main, [
            "encrypt", "--mode", "cbc", "--key", FIPS_KEY, "--data", FIPS_PT,
        ])
        assert result.exit_code == 1
        assert "requires an IV" in result.output

    def test_bad_hex(self) -> None:
        result = CliRunner().invoke(main, ["encrypt", "--key", "zz", "--data", FIPS_PT])
        assert result.exit_code != 0


class TestOtherCommands:
    """list, kat, trace and avalanche."""

    def test_list(self) -> None:
        result = CliRunner().invoke(main, ["list"])
        assert result.exit_code == 0
        assert "ecb" in result.output
        assert "cbc" in result.output

    def test_kat(self) -> None:
        result = CliRunner().invoke(main, ["kat", "--verbose"])
        assert result.exit_code == 0, result.output
        assert "KAT PASSED" in result.output
        assert "AES-256" in result.output

    def test_trace(self, tmp_path) -> None:
        trace_path = tmp_path / "trace.jsonl"
        result = CliRunner().invoke(main, ["trace", "--trace-file", str(trace_path)])
        assert result.exit_code == 0, result.output
        assert "3925841d02dc09fbdc118597196a0b32" in result.output
        assert "MixColumns" in result.output

        lines = trace_path.read_text().strip().split("\n")
        assert len(lines) == 40
        assert json.loads(lines[-1])["state"] == "3925841d02dc09fbdc118597196a0b32"

    def test_avalanche(self) -> None:
        result = CliRunner().invoke(main, ["avalanche", "--n", "8", "--seed", "1"])
        assert result.exit_code == 0, result.output
        assert "Mean changed bits" in result.output

    def test_version(self) -> None:
        result = CliRunner().invoke(main, ["--version"])
        assert "0.1.0" in result.output
