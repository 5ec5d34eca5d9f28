"""AES block cipher over GF(2^8) with ECB and CBC modes."""

__version__ = "0.1.0"

from .errors import (
    AESError,
    InvalidKeySizeError,
    KeyLengthError,
    BlockSizeError,
    BlockAlignmentError,
    ScheduleError,
)
from .tables import sbox_value, sbox_invert, round_constant
from .key_schedule import (
    KeySchedule,
    num_rounds,
    num_key_words,
    key_expansion,
    get_round_key,
)
from .block import encrypt, decrypt
from .modes import ecb_encrypt, ecb_decrypt, cbc_encrypt, cbc_decrypt
from .config import CipherConfig
from .trace import TraceRecorder

__all__ = [
    "AESError",
    "InvalidKeySizeError",
    "KeyLengthError",
    "BlockSizeError",
    "BlockAlignmentError",
    "ScheduleError",
    "sbox_value",
    "sbox_invert",
    "round_constant",
    "KeySchedule",
    "num_rounds",
    "num_key_words",
    "key_expansion",
    "get_round_key",
    "encrypt",
    "decrypt",
    "ecb_encrypt",
    "ecb_decrypt",
    "cbc_encrypt",
    "cbc_decrypt",
    "CipherConfig",
    "TraceRecorder",
]
