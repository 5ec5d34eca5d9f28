"""Tests for single-block encrypt/decrypt."""

import io
import json
import random

import pytest
from Crypto.Cipher import AES

from aes_cipher.block import decrypt, encrypt
from aes_cipher.errors import BlockSizeError, ScheduleError
from aes_cipher.key_schedule import KeySchedule, key_expansion, num_rounds
from aes_cipher.reference import FIPS_197_TEST_VECTORS, validate_against_golden
from aes_cipher.trace import TraceRecorder
from aes_cipher.utils import bytes_to_hex


def random_bytes(n: int, rng: random.Random) -> bytes:
    """Generate n random bytes."""
    return bytes(rng.randint(0, 255) for _ in range(n))


class TestKnownAnswers:
    """FIPS-197 vectors for all three key sizes."""

    @pytest.mark.parametrize("vec", FIPS_197_TEST_VECTORS, ids=lambda v: v["name"])
    def test_encrypt(self, vec: dict) -> None:
        schedule = key_expansion(vec["key"], vec["key_size"])
        block = bytearray(vec["plaintext"])
        encrypt(block, schedule, num_rounds(vec["key_size"]))
        assert bytes(block) == vec["ciphertext"], (
            f"{vec['name']}: expected {vec['ciphertext'].hex()}, "
            f"got {bytes_to_hex(block)}"
        )

    @pytest.mark.parametrize("vec", FIPS_197_TEST_VECTORS, ids=lambda v: v["name"])
    def test_decrypt(self, vec: dict) -> None:
        schedule = key_expansion(vec["key"], vec["key_size"])
        block = bytearray(vec["ciphertext"])
        decrypt(block, schedule, num_rounds(vec["key_size"]))
        assert bytes(block) == vec["plaintext"]

    def test_key_sizes_covered(self) -> None:
        """Vectors exist for every supported key size."""
        sizes = {vec["key_size"] for vec in FIPS_197_TEST_VECTORS}
        assert sizes == {128, 192, 256}


class TestRoundTrip:
    """decrypt(encrypt(block)) == block for random keys and blocks."""

    @pytest.mark.parametrize("key_size", [128, 192, 256])
    def test_random_round_trip(self, key_size: int) -> None:
        """350 random (key, block) pairs per key size."""
        rng = random.Random(key_size)
        rounds = num_rounds(key_size)
        for _ in range(350):
            key = random_bytes(key_size // 8, rng)
            plaintext = random_bytes(16, rng)
            schedule = key_expansion(key, key_size)

            block = bytearray(plaintext)
            encrypt(block, schedule, rounds)
            assert bytes(block) != plaintext
            decrypt(block, schedule, rounds)
            assert bytes(block) == plaintext

    @pytest.mark.parametrize("seed", range(10))
    @pytest.mark.parametrize("key_size", [128, 192, 256])
    def test_matches_pycryptodome(self, seed: int, key_size: int) -> None:
        """Ciphertext agrees with the PyCryptodome reference."""
        rng = random.Random(seed)
        key = random_bytes(key_size // 8, rng)
        plaintext = random_bytes(16, rng)

        block = bytearray(plaintext)
        encrypt(block, key_expansion(key, key_size), num_rounds(key_size))

        correct, detail = validate_against_golden(key, plaintext, block)
        assert correct, detail
        assert bytes(block) == AES.new(key, AES.MODE_ECB).encrypt(plaintext)

    def test_wrong_key_gives_wrong_plaintext(self) -> None:
        """A wrong key is not an error, just wrong output."""
        rng = random.Random(7)
        plaintext = random_bytes(16, rng)
        block = bytearray(plaintext)
        encrypt(block, key_expansion(bytes(16), 128), 10)
        decrypt(block, key_expansion(bytes([1] * 16), 128), 10)
        assert bytes(block) != plaintext


class TestPreconditions:
    """Block-level input validation."""

    @pytest.fixture
    def schedule(self) -> KeySchedule:
        return KeySchedule.from_key(bytes(16), 128)

    @pytest.mark.parametrize("size", [0, 15, 17, 32])
    def test_block_size(self, schedule: KeySchedule, size: int) -> None:
        with pytest.raises(BlockSizeError, match="Block must be 16 bytes"):
            encrypt(bytearray(size), schedule.round_keys, schedule.rounds)
        with pytest.raises(BlockSizeError):
            decrypt(bytearray(size), schedule.round_keys, schedule.rounds)

    def test_immutable_block_rejected(self, schedule: KeySchedule) -> None:
        with pytest.raises(TypeError, match="bytearray"):
            encrypt(bytes(16), schedule.round_keys, schedule.rounds)

    def test_rounds_must_match_schedule(self, schedule: KeySchedule) -> None:
        with pytest.raises(ScheduleError):
            encrypt(bytearray(16), schedule.round_keys, 12)

    def test_schedule_untouched(self, schedule: KeySchedule) -> None:
        before = schedule.round_keys
        block = bytearray(16)
        encrypt(block, schedule.round_keys, schedule.rounds)
        decrypt(block, schedule.round_keys, schedule.rounds)
        assert schedule.round_keys == before


class TestTracing:
    """Per-operation trace records."""

    FIPS = FIPS_197_TEST_VECTORS[0]

    def _encrypt_traced(self, tracer: TraceRecorder) -> bytearray:
        schedule = key_expansion(self.FIPS["key"], 128)
        block = bytearray(self.FIPS["plaintext"])
        encrypt(block, schedule, 10, tracer=tracer)
        return block

    def test_ciphertext_unchanged(self) -> None:
        """Tracing must not alter the ciphertext."""
        block = self._encrypt_traced(TraceRecorder())
        assert bytes(block) == self.FIPS["ciphertext"]

    def test_final_round_has_no_mix_columns(self) -> None:
        tracer = TraceRecorder()
        self._encrypt_traced(tracer)
        records = tracer.get_records()

        # 1 initial + 9 * 4 + 3 final
        assert len(records) == 40
        final_ops = [r["operation"] for r in records if r["round"] == 10]
        assert final_ops == ["SubBytes", "ShiftRows", "AddRoundKey"]
        mix_rounds = {r["round"] for r in records if r["operation"] == "MixColumns"}
        assert mix_rounds == set(range(1, 10))

    def test_round1_intermediates(self) -> None:
        """Recorded states match FIPS-197 Appendix B."""
        tracer = TraceRecorder()
        self._encrypt_traced(tracer)
        by_step = {(r["round"], r["operation"]): r["state"] for r in tracer.get_records()}
        assert by_step[(0, "AddRoundKey")].hex() == "193de3bea0f4e22b9ac68d2ae9f84808"
        assert by_step[(1, "MixColumns")].hex() == "046681e5e0cb199a48f8d37a2806264c"

    def test_decrypt_trace_order(self) -> None:
        tracer = TraceRecorder()
        schedule = key_expansion(self.FIPS["key"], 128)
        block = bytearray(self.FIPS["ciphertext"])
        decrypt(block, schedule, 10, tracer=tracer)

        ops = tracer.operations()
        assert ops[0] == "AddRoundKey"
        assert ops[1:5] == ["InvShiftRows", "InvSubBytes", "AddRoundKey", "InvMixColumns"]
        assert ops[-3:] == ["InvShiftRows", "InvSubBytes", "AddRoundKey"]
        assert ops.count("InvMixColumns") == 9

    def test_jsonl_output(self) -> None:
        buf = io.StringIO()
        self._encrypt_traced(TraceRecorder(trace_file=buf))
        lines = buf.getvalue().strip().split("\n")
        assert len(lines) == 40
        last = json.loads(lines[-1])
        assert last["state"] == self.FIPS["ciphertext"].hex()
        assert last["round"] == 10
        assert last["block_index"] == 0

    def test_verbose_output(self, capsys) -> None:
        self._encrypt_traced(TraceRecorder(verbose=True))
        out = capsys.readouterr().out
        assert "MixColumns" in out
        assert self.FIPS["ciphertext"].hex() in out
