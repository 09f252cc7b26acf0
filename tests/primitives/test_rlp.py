# [TESTER] v1

from __future__ import annotations

import pytest

from src.primitives.errors import DecodeError
from src.primitives.rlp import (
    SHORT_STRING_MAX_LEN,
    SHORT_STRING_PREFIX,
    decode_short_string,
    encode_rlp_string,
    encode_short_string,
)


def test_encode_rlp_string() -> None:
    assert encode_rlp_string(b"") == bytes.fromhex("80")
    assert encode_rlp_string(b"\x00") == bytes.fromhex("00")
    assert encode_rlp_string(b"\x7f") == bytes.fromhex("7f")
    assert encode_rlp_string(b"\x80") == bytes.fromhex("8180")
    assert encode_rlp_string(b"dog") == bytes.fromhex("83646f67")
    assert encode_rlp_string(bytearray(b"dog")) == bytes.fromhex("83646f67")
    short = b"a" * SHORT_STRING_MAX_LEN
    assert encode_rlp_string(short) == bytes([SHORT_STRING_PREFIX + 55]) + short


def test_encoders_reject_long_payloads_and_non_bytes() -> None:
    with pytest.raises(ValueError):
        encode_rlp_string(b"a" * 56)
    with pytest.raises(ValueError):
        encode_short_string(b"a" * 56)
    with pytest.raises(TypeError):
        encode_rlp_string("dog")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        decode_short_string("8110")  # type: ignore[arg-type]


def test_short_string_framing_always_has_a_header() -> None:
    assert encode_short_string(b"\x10") == bytes([0x81, 0x10])
    assert encode_short_string(b"") == bytes([0x80])
    assert decode_short_string(bytes([0x81, 0x10])) == b"\x10"
    assert decode_short_string(bytes([0x80])) == b""
    assert decode_short_string(encode_rlp_string(b"dog")) == b"dog"


def test_decode_short_string_errors() -> None:
    with pytest.raises(DecodeError, match="empty input"):
        decode_short_string(b"")
    with pytest.raises(DecodeError, match="length exceeds 4"):
        decode_short_string(bytes([0x85]) + b"12345", max_length=4)
    with pytest.raises(DecodeError, match="length mismatch"):
        decode_short_string(bytes([0x83, 0x01]))
    with pytest.raises(DecodeError, match="not a string length prefix"):
        decode_short_string(bytes([0x7F]))
    with pytest.raises(ValueError):
        decode_short_string(bytes([0x80]), max_length=56)


def test_deeply_nested_list_headers_are_rejected_without_recursion() -> None:
    # List framing is not a short string; a long run of list headers must fail
    # with DecodeError on the first byte, never RecursionError.
    buf = b"\xc1" * 2000 + b"\xc0"
    with pytest.raises(DecodeError, match="length exceeds"):
        decode_short_string(buf)
