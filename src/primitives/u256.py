"""
Bounded 256-bit unsigned integer (`U256`) and its canonical byte encoding.

Used to express nonces, asset amounts and counters. Construction accepts
several input shapes but always normalizes to a plain int in [0, 2**256 - 1].

Wire format for one value:
- zero: the single byte 0x00 (RLP of the one-byte string b"\\x00")
- otherwise: header 0x80 + n, then the n-byte minimal big-endian value (1 <= n <= 32)

The decoder also accepts a bare 0x80 (empty payload) as zero for buffers
written with the generic empty-string convention. The encoder never emits it.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, ClassVar, Final, Union

from .errors import DecodeError, RangeError
from .rlp import decode_short_string, encode_rlp_string, encode_short_string


logger = logging.getLogger(__name__)

U256_MAX: Final[int] = (1 << 256) - 1
U256_MAX_BYTES: Final[int] = 32

_DEC_MAX_DIGITS = len(str(U256_MAX))
_HEX_MAX_DIGITS = 2 * U256_MAX_BYTES

_DEC_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")

_ZERO_PAYLOAD = b"\x00"

U256Like = Union["U256", str, int, float, Decimal]


def _describe(raw: object) -> str:
    # Keep error messages bounded; huge ints cannot even be str()-ed on 3.11+.
    if isinstance(raw, int) and raw.bit_length() > 256:
        return f"<{raw.bit_length()}-bit int>"
    text = repr(raw)
    return text if len(text) <= 80 else text[:77] + "..."


def _not_an_integer(raw: object) -> RangeError:
    return RangeError(f"U256 must be a non-negative integer but found {_describe(raw)}")


def _out_of_range() -> RangeError:
    return RangeError("value is out of range for U256")


def _from_int(raw: int) -> int:
    # Drop int subclasses (IntEnum members, ...) so `value` is always a plain int.
    return int(raw)


def _from_float(raw: float) -> int:
    if not math.isfinite(raw) or not raw.is_integer():
        raise _not_an_integer(raw)
    return int(raw)


def _from_decimal(raw: Decimal) -> int:
    if not raw.is_finite():
        raise _not_an_integer(raw)
    if raw < 0:
        raise _not_an_integer(raw)
    if raw != raw.to_integral_value():
        raise _not_an_integer(raw)
    if raw == 0:
        return 0
    # Bound the exponent before int() so 1E+999999999 is not materialized.
    if raw.adjusted() >= _DEC_MAX_DIGITS:
        raise _out_of_range()
    return int(raw)


def _from_str(raw: str) -> int:
    if _HEX_RE.fullmatch(raw):
        digits = raw[2:].lstrip("0")
        if len(digits) > _HEX_MAX_DIGITS:
            raise _out_of_range()
        return int(digits or "0", 16)
    if _DEC_RE.fullmatch(raw):
        digits = raw.lstrip("0")
        if len(digits) > _DEC_MAX_DIGITS:
            raise _out_of_range()
        return int(digits or "0", 10)
    raise _not_an_integer(raw)


# One conversion per accepted input shape; every result goes through
# `_require_in_range()`. `bool` is rejected before this table is consulted.
_PARSERS: Final[tuple[tuple[type, Callable[[Any], int]], ...]] = (
    (str, _from_str),
    (int, _from_int),
    (float, _from_float),
    (Decimal, _from_decimal),
)


def _require_in_range(n: int, raw: object) -> int:
    if n < 0:
        raise _not_an_integer(raw)
    if n > U256_MAX:
        raise _out_of_range()
    return n


def _parse(raw: object) -> int:
    if isinstance(raw, U256):
        return raw.value
    if isinstance(raw, bool):
        raise TypeError("U256 value must not be a bool")
    for kind, convert in _PARSERS:
        if isinstance(raw, kind):
            return _require_in_range(convert(raw), raw)
    raise TypeError(f"unsupported U256 input type: {type(raw).__name__}")


@dataclass(frozen=True, order=True)
class U256:
    """
    Handles 256-bit unsigned integers.

    `U256(x)` accepts another `U256`, a decimal or 0x-prefixed hex string, an
    int, an integral float, or a `Decimal`. After construction `value` is the
    normalized int.

    Raises:
        RangeError: If `x` is negative, non-integral or above `U256_MAX`
        TypeError: If `x` is not one of the accepted input shapes
    """

    value: int

    MAX_VALUE: ClassVar[int] = U256_MAX

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _parse(self.value))

    @classmethod
    def check(cls, param: object) -> bool:
        """Return True if `U256(param)` would succeed. Never raises."""
        try:
            _parse(param)
        except (RangeError, TypeError):
            return False
        return True

    @classmethod
    def ensure(cls, param: U256Like) -> U256:
        return param if isinstance(param, U256) else cls(param)

    @classmethod
    def from_bytes(cls, buffer: bytes) -> U256:
        """
        Strictly decode a buffer produced by `rlp_bytes()`.

        Raises:
            DecodeError: If the declared length exceeds 32, disagrees with the
                remaining byte count, or the payload has a leading zero byte
            TypeError: If `buffer` is not bytes-like
        """
        if not isinstance(buffer, (bytes, bytearray, memoryview)):
            raise TypeError("buffer must be bytes")
        data = bytes(buffer)
        if data == encode_rlp_string(_ZERO_PAYLOAD):
            return cls(0)

        payload = decode_short_string(data, max_length=U256_MAX_BYTES)
        if not payload:
            return cls(0)
        if payload[0] == 0:
            logger.debug("rejected U256 buffer (leading zero byte): %s", data.hex())
            raise DecodeError("non-canonical U256: payload has a leading zero byte")
        return cls(int(payload.hex(), 16))

    def increase(self) -> U256:
        """Return `value + 1`; raises `RangeError` at `U256_MAX` instead of wrapping."""
        return type(self)(self.value + 1)

    def to_encode_object(self) -> bytes:
        if self.value == 0:
            return _ZERO_PAYLOAD
        hex_str = format(self.value, "x")
        if len(hex_str) % 2:
            hex_str = "0" + hex_str
        return bytes.fromhex(hex_str)

    def rlp_bytes(self) -> bytes:
        payload = self.to_encode_object()
        if self.value == 0:
            return encode_rlp_string(payload)
        return encode_short_string(payload)

    def is_equal_to(self, rhs: object) -> bool:
        try:
            return self.value == _parse(rhs)
        except (RangeError, TypeError):
            return False

    def to_string(self, base: int = 10) -> str:
        if base == 10:
            return str(self.value)
        if base == 16:
            return format(self.value, "x")
        raise ValueError(f"base must be 10 or 16, got {base!r}")

    def to_hex(self) -> str:
        return "0x" + self.to_string(16)

    def __str__(self) -> str:
        return self.to_string()

    def __int__(self) -> int:
        return self.value
