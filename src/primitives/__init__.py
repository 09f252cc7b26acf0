"""
Ledger primitives: bounded 256-bit unsigned integers and their RLP encoding
"""

from .errors import DecodeError, RangeError, VectorFileError
from .rlp import decode_short_string, encode_rlp_string, encode_short_string
from .u256 import U256, U256_MAX, U256_MAX_BYTES, U256Like

__all__ = [
    "DecodeError",
    "RangeError",
    "VectorFileError",
    "decode_short_string",
    "encode_rlp_string",
    "encode_short_string",
    "U256",
    "U256_MAX",
    "U256_MAX_BYTES",
    "U256Like",
]
