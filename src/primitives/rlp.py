"""
Short-string RLP framing used by the U256 wire format.

Only byte strings of at most 55 bytes are handled here; list framing and the
long-length forms belong to the outer codec.
"""

from __future__ import annotations

import logging
from typing import Final

from .errors import DecodeError


logger = logging.getLogger(__name__)

SINGLE_BYTE_MAX: Final[int] = 0x7F
SHORT_STRING_PREFIX: Final[int] = 0x80
SHORT_STRING_MAX_LEN: Final[int] = 55


def _as_bytes(data: object, *, name: str = "data") -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes")
    return bytes(data)


def _reject(reason: str, data: bytes) -> DecodeError:
    logger.debug("rejected RLP buffer (%s): %s", reason, data[:16].hex())
    return DecodeError(reason)


def _require_short(body: bytes) -> None:
    if len(body) > SHORT_STRING_MAX_LEN:
        raise ValueError(f"payload must be at most {SHORT_STRING_MAX_LEN} bytes, got {len(body)}")


def encode_rlp_string(payload: bytes) -> bytes:
    """
    Standard RLP encoding of a short byte string.

    A single byte below 0x80 is its own encoding; anything else gets a
    `0x80 + len` header.
    """
    body = _as_bytes(payload, name="payload")
    _require_short(body)
    if len(body) == 1 and body[0] <= SINGLE_BYTE_MAX:
        return body
    return bytes([SHORT_STRING_PREFIX + len(body)]) + body


def encode_short_string(payload: bytes) -> bytes:
    """
    Frame `payload` with a single `0x80 + len` header byte.

    Unlike `encode_rlp_string()`, a lone byte below 0x80 still gets a header,
    so the framing is uniform for every payload length up to 55.
    """
    body = _as_bytes(payload, name="payload")
    _require_short(body)
    return bytes([SHORT_STRING_PREFIX + len(body)]) + body


def decode_short_string(data: bytes, *, max_length: int = SHORT_STRING_MAX_LEN) -> bytes:
    """
    Parse a buffer produced by `encode_short_string()`.

    Raises:
        DecodeError: If the header is not a string prefix, declares more than
            `max_length` bytes, or disagrees with the remaining byte count
    """
    buf = _as_bytes(data)
    if not isinstance(max_length, int) or isinstance(max_length, bool):
        raise TypeError("max_length must be an int")
    if not (0 <= max_length <= SHORT_STRING_MAX_LEN):
        raise ValueError(f"max_length must be in [0, {SHORT_STRING_MAX_LEN}]: {max_length}")
    if not buf:
        raise _reject("empty input", buf)

    header = buf[0]
    if header < SHORT_STRING_PREFIX:
        raise _reject(f"header byte 0x{header:02x} is not a string length prefix", buf)
    length = header - SHORT_STRING_PREFIX
    if length > max_length:
        raise _reject(f"length exceeds {max_length}", buf)
    payload = buf[1:]
    if len(payload) != length:
        raise _reject(f"length mismatch: header declares {length} bytes, found {len(payload)}", buf)
    return payload
