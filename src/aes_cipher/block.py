"""Single-block AES encryption and decryption.

Both functions mutate a 16-byte ``bytearray`` in place. The round count is
passed explicitly alongside the schedule and checked against it.

Round structure (encrypt):
- Round 0: AddRoundKey
- Rounds 1..rounds-1: SubBytes, ShiftRows, MixColumns, AddRoundKey
- Round ``rounds``: SubBytes, ShiftRows, AddRoundKey (no MixColumns)

Decryption mirrors this with the inverse transforms in reverse round order.
Decrypting with the wrong schedule is not detected; it yields garbage.
"""

from __future__ import annotations

from .errors import BlockSizeError
from .key_schedule import BLOCK_SIZE, check_schedule, get_round_key
from .trace import TraceRecorder
from .transforms import (
    add_round_key,
    inv_mix_columns,
    inv_shift_rows,
    inv_sub_bytes,
    mix_columns,
    shift_rows,
    sub_bytes,
)
from .utils import require_mutable


def _check_block(block: bytearray) -> None:
    require_mutable(block, "Block")
    if len(block) != BLOCK_SIZE:
        raise BlockSizeError(f"Block must be 16 bytes, got {len(block)}")


def encrypt(
    block: bytearray,
    schedule: bytes,
    rounds: int,
    tracer: TraceRecorder | None = None,
    block_index: int = 0,
) -> None:
    """Encrypt a single 16-byte block in place.

    Args:
        block: 16-byte plaintext, overwritten with ciphertext
        schedule: Expanded key from ``key_expansion``
        rounds: Round count matching the schedule (10, 12 or 14)
        tracer: Optional trace recorder, fed after every transform
        block_index: Position of the block in its content, for tracing

    Raises:
        BlockSizeError: If the block is not 16 bytes
        ScheduleError: If schedule and rounds disagree
    """
    _check_block(block)
    check_schedule(schedule, rounds)

    def trace(round_num: int, operation: str) -> None:
        if tracer:
            tracer.record(
                block_index=block_index,
                round=round_num,
                operation=operation,
                state=bytes(block),
            )

    add_round_key(block, get_round_key(schedule, 0))
    trace(0, "AddRoundKey")

    for round_num in range(1, rounds):
        sub_bytes(block)
        trace(round_num, "SubBytes")
        shift_rows(block)
        trace(round_num, "ShiftRows")
        mix_columns(block)
        trace(round_num, "MixColumns")
        add_round_key(block, get_round_key(schedule, round_num))
        trace(round_num, "AddRoundKey")

    # Final round (no MixColumns)
    sub_bytes(block)
    trace(rounds, "SubBytes")
    shift_rows(block)
    trace(rounds, "ShiftRows")
    add_round_key(block, get_round_key(schedule, rounds))
    trace(rounds, "AddRoundKey")


def decrypt(
    block: bytearray,
    schedule: bytes,
    rounds: int,
    tracer: TraceRecorder | None = None,
    block_index: int = 0,
) -> None:
    """Decrypt a single 16-byte block in place.

    Args:
        block: 16-byte ciphertext, overwritten with plaintext
        schedule: Expanded key from ``key_expansion``
        rounds: Round count matching the schedule (10, 12 or 14)
        tracer: Optional trace recorder, fed after every transform
        block_index: Position of the block in its content, for tracing

    Raises:
        BlockSizeError: If the block is not 16 bytes
        ScheduleError: If schedule and rounds disagree
    """
    _check_block(block)
    check_schedule(schedule, rounds)

    def trace(round_num: int, operation: str) -> None:
        if tracer:
            tracer.record(
                block_index=block_index,
                round=round_num,
                operation=operation,
                state=bytes(block),
            )

    add_round_key(block, get_round_key(schedule, rounds))
    trace(rounds, "AddRoundKey")

    for round_num in range(rounds - 1, 0, -1):
        inv_shift_rows(block)
        trace(round_num, "InvShiftRows")
        inv_sub_bytes(block)
        trace(round_num, "InvSubBytes")
        add_round_key(block, get_round_key(schedule, round_num))
        trace(round_num, "AddRoundKey")
        inv_mix_columns(block)
        trace(round_num, "InvMixColumns")

    # Final round (no InvMixColumns)
    inv_shift_rows(block)
    trace(0, "InvShiftRows")
    inv_sub_bytes(block)
    trace(0, "InvSubBytes")
    add_round_key(block, get_round_key(schedule, 0))
    trace(0, "AddRoundKey")
