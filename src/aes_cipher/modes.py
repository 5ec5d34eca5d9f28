"""ECB and CBC modes of operation over block-aligned content.

All mode functions transform ``content`` (a ``bytearray`` whose length is
a multiple of 16) in place. No padding is applied; empty content is a
valid no-op. Chaining state lives only for the duration of one call.

ECB encrypts each block independently, so equal plaintext blocks produce
equal ciphertext blocks. It is kept for completeness, not recommended.

CBC decryption with the wrong IV is not detected: only the first block
comes out wrong, the rest still decrypt correctly.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable

from .block import decrypt, encrypt
from .config import CipherConfig
from .errors import BlockAlignmentError, BlockSizeError
from .key_schedule import BLOCK_SIZE, key_expansion, num_rounds
from .trace import TraceRecorder
from .utils import require_mutable, xor_into

BlockFunction = Callable[..., None]


def _prepare(content: bytearray, key: bytes, key_size: int) -> tuple[bytes, int]:
    """Validate inputs and expand the key.

    Returns:
        Tuple of (schedule, rounds)
    """
    rounds = num_rounds(key_size)
    require_mutable(content, "Content")
    if len(content) % BLOCK_SIZE:
        raise BlockAlignmentError(
            f"Content length must be a multiple of 16 bytes, got {len(content)}"
        )
    return key_expansion(key, key_size), rounds


def _check_iv(iv: bytes) -> None:
    if len(iv) != BLOCK_SIZE:
        raise BlockSizeError(f"IV must be 16 bytes, got {len(iv)}")


def _process_block(
    content: bytearray,
    index: int,
    func: BlockFunction,
    schedule: bytes,
    rounds: int,
    tracer: TraceRecorder | None,
) -> None:
    start = index * BLOCK_SIZE
    state = content[start:start + BLOCK_SIZE]
    func(state, schedule, rounds, tracer, index)
    content[start:start + BLOCK_SIZE] = state


def _run_blocks(
    content: bytearray,
    func: BlockFunction,
    schedule: bytes,
    rounds: int,
    workers: int,
    tracer: TraceRecorder | None,
) -> None:
    """Apply ``func`` to every block, optionally across worker threads.

    Each block is copied into its own state buffer and written back to a
    disjoint slice; the schedule is shared read-only.
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    num_blocks = len(content) // BLOCK_SIZE
    if workers == 1 or num_blocks < 2:
        for index in range(num_blocks):
            _process_block(content, index, func, schedule, rounds, tracer)
        return

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_process_block, content, index, func, schedule, rounds, tracer)
            for index in range(num_blocks)
        ]
        for future in futures:
            future.result()


def ecb_encrypt(
    content: bytearray,
    key: bytes,
    key_size: int,
    workers: int = 1,
    tracer: TraceRecorder | None = None,
) -> None:
    """Encrypt content in place using ECB mode.

    Args:
        content: Plaintext, length a multiple of 16, overwritten with ciphertext
        key: 16, 24 or 32 byte key
        key_size: Key size in bits (128, 192 or 256)
        workers: Number of threads for the per-block step
        tracer: Optional trace recorder

    Raises:
        InvalidKeySizeError: If key_size is unsupported
        KeyLengthError: If the key does not match key_size
        BlockAlignmentError: If content is not block-aligned
    """
    schedule, rounds = _prepare(content, key, key_size)
    _run_blocks(content, encrypt, schedule, rounds, workers, tracer)


def ecb_decrypt(
    content: bytearray,
    key: bytes,
    key_size: int,
    workers: int = 1,
    tracer: TraceRecorder | None = None,
) -> None:
    """Decrypt content in place using ECB mode.

    Same arguments and errors as ``ecb_encrypt``.
    """
    schedule, rounds = _prepare(content, key, key_size)
    _run_blocks(content, decrypt, schedule, rounds, workers, tracer)


def cbc_encrypt(
    content: bytearray,
    key: bytes,
    key_size: int,
    iv: bytes,
    tracer: TraceRecorder | None = None,
) -> None:
    """Encrypt content in place using CBC mode.

    Each plaintext block is XORed with the previous ciphertext block (the
    IV for the first block) before encryption. Strictly sequential.

    Args:
        content: Plaintext, length a multiple of 16, overwritten with ciphertext
        key: 16, 24 or 32 byte key
        key_size: Key size in bits (128, 192 or 256)
        iv: 16-byte initialization vector; should be unpredictable per message
        tracer: Optional trace recorder

    Raises:
        InvalidKeySizeError: If key_size is unsupported
        KeyLengthError: If the key does not match key_size
        BlockAlignmentError: If content is not block-aligned
        BlockSizeError: If the IV is not 16 bytes
    """
    schedule, rounds = _prepare(content, key, key_size)
    _check_iv(iv)

    previous = bytes(iv)
    for index in range(len(content) // BLOCK_SIZE):
        start = index * BLOCK_SIZE
        state = content[start:start + BLOCK_SIZE]
        xor_into(state, 0, previous)
        encrypt(state, schedule, rounds, tracer, index)
        content[start:start + BLOCK_SIZE] = state
        previous = bytes(state)


def cbc_decrypt(
    content: bytearray,
    key: bytes,
    key_size: int,
    iv: bytes,
    workers: int = 1,
    tracer: TraceRecorder | None = None,
) -> None:
    """Decrypt content in place using CBC mode.

    The previous ciphertext block needed for each XOR is read from a
    snapshot of the untouched input, so the block-decrypt step can run on
    several workers.

    Args:
        content: Ciphertext, length a multiple of 16, overwritten with plaintext
        key: 16, 24 or 32 byte key
        key_size: Key size in bits (128, 192 or 256)
        iv: The 16-byte IV used at encryption time
        workers: Number of threads for the block-decrypt step
        tracer: Optional trace recorder

    Raises:
        Same as ``cbc_encrypt``
    """
    schedule, rounds = _prepare(content, key, key_size)
    _check_iv(iv)

    ciphertext = bytes(content)
    _run_blocks(content, decrypt, schedule, rounds, workers, tracer)

    previous = bytes(iv)
    for start in range(0, len(ciphertext), BLOCK_SIZE):
        xor_into(content, start, previous)
        previous = ciphertext[start:start + BLOCK_SIZE]


# ------------------------------------------------------------------
# Mode registry
# ------------------------------------------------------------------

def _cbc_encrypt(content, key, key_size, iv, workers=1, tracer=None):
    # CBC encryption cannot be parallelized; workers is accepted and ignored
    cbc_encrypt(content, key, key_size, iv, tracer=tracer)


def _ecb_encrypt(content, key, key_size, iv, workers=1, tracer=None):
    ecb_encrypt(content, key, key_size, workers=workers, tracer=tracer)


def _ecb_decrypt(content, key, key_size, iv, workers=1, tracer=None):
    ecb_decrypt(content, key, key_size, workers=workers, tracer=tracer)


@dataclass(frozen=True)
class Mode:
    """A registered mode of operation."""

    name: str
    description: str
    encrypt: Callable[..., None]
    decrypt: Callable[..., None]
    needs_iv: bool


MODES: dict[str, Mode] = {
    "ecb": Mode(
        name="ecb",
        description="Electronic Codebook (independent blocks, leaks patterns)",
        encrypt=_ecb_encrypt,
        decrypt=_ecb_decrypt,
        needs_iv=False,
    ),
    "cbc": Mode(
        name="cbc",
        description="Cipher Block Chaining (requires a 16-byte IV)",
        encrypt=_cbc_encrypt,
        decrypt=cbc_decrypt,
        needs_iv=True,
    ),
}


def get_mode(name: str) -> Mode:
    """Get mode by name.

    Raises:
        KeyError: If mode not found
    """
    if name not in MODES:
        available = ", ".join(MODES.keys())
        raise KeyError(f"Unknown mode '{name}'. Available: {available}")
    return MODES[name]


def list_modes() -> list[dict[str, str]]:
    """List all available modes with descriptions."""
    return [
        {"name": name, "description": mode.description}
        for name, mode in MODES.items()
    ]


def process(
    content: bytearray,
    key: bytes,
    config: CipherConfig,
    iv: bytes | None = None,
    decrypting: bool = False,
    tracer: TraceRecorder | None = None,
) -> None:
    """Run the mode selected by ``config`` over content, in place.

    Raises:
        ValueError: If an IV is missing for CBC or supplied for ECB
    """
    mode = get_mode(config.mode)
    if mode.needs_iv and iv is None:
        raise ValueError(f"Mode '{mode.name}' requires an IV")
    if not mode.needs_iv and iv is not None:
        raise ValueError(f"Mode '{mode.name}' does not take an IV")

    func = mode.decrypt if decrypting else mode.encrypt
    func(content, key, config.key_size_bits, iv, workers=config.workers, tracer=tracer)
