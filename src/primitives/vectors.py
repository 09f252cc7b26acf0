"""
Fail-closed loader for the canonical U256 encoding vectors.

The registry (`data/u256_rlp_v1.yaml`) is the compatibility corpus for the
wire format: any change to `U256.rlp_bytes()` / `U256.from_bytes()` that
breaks a vector is a consensus-visible change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import VectorFileError


VECTORS_SCHEMA = "primitives/u256-rlp-vectors/v1"
DEFAULT_VECTORS_PATH = Path(__file__).resolve().parent / "data" / "u256_rlp_v1.yaml"

_HEX_BODY_RE = re.compile(r"^(?:[0-9a-f]{2})*$")


@dataclass(frozen=True)
class EncodeVector:
    name: str
    input: str
    rlp: bytes


@dataclass(frozen=True)
class DecodeVector:
    name: str
    rlp: bytes
    value: str


@dataclass(frozen=True)
class RejectVector:
    name: str
    rlp: bytes
    error: str


@dataclass(frozen=True)
class U256VectorSet:
    encode: tuple[EncodeVector, ...]
    decode: tuple[DecodeVector, ...]
    reject: tuple[RejectVector, ...]


def _require_mapping(obj: Any, *, name: str) -> dict[str, Any]:
    if not isinstance(obj, dict):
        raise VectorFileError(f"{name} must be an object")
    return obj


def _require_list(obj: Any, *, name: str) -> list[Any]:
    if obj is None:
        return []
    if not isinstance(obj, list):
        raise VectorFileError(f"{name} must be a list")
    return obj


def _require_str(obj: Any, *, name: str, allow_empty: bool = False) -> str:
    if not isinstance(obj, str) or (not allow_empty and not obj.strip()):
        raise VectorFileError(f"{name} must be a non-empty string")
    return obj


def _require_hex(obj: Any, *, name: str) -> bytes:
    # Lowercase, unprefixed, whole bytes; "" is the empty buffer.
    text = _require_str(obj, name=name, allow_empty=True)
    if not _HEX_BODY_RE.fullmatch(text):
        raise VectorFileError(f"{name} must be lowercase hex with an even number of digits")
    return bytes.fromhex(text)


def _unique_name(entry: dict[str, Any], *, name: str, seen: set[str]) -> str:
    vector_name = _require_str(entry.get("name"), name=f"{name}.name")
    if vector_name in seen:
        raise VectorFileError(f"duplicate vector name: {vector_name}")
    seen.add(vector_name)
    return vector_name


def load_u256_vectors(path: Optional[Path] = None) -> U256VectorSet:
    """
    Load and validate a U256 vector registry.

    Raises:
        VectorFileError: If the file does not match the v1 schema
    """
    path = DEFAULT_VECTORS_PATH if path is None else Path(path)
    root = _require_mapping(yaml.safe_load(path.read_text(encoding="utf-8")), name="vectors")

    schema = _require_str(root.get("schema"), name="vectors.schema")
    if schema != VECTORS_SCHEMA:
        raise VectorFileError(f"unsupported vectors.schema: {schema}")

    seen: set[str] = set()

    encode: list[EncodeVector] = []
    for i, raw in enumerate(_require_list(root.get("encode"), name="vectors.encode")):
        entry = _require_mapping(raw, name=f"encode[{i}]")
        encode.append(
            EncodeVector(
                name=_unique_name(entry, name=f"encode[{i}]", seen=seen),
                input=_require_str(entry.get("input"), name=f"encode[{i}].input"),
                rlp=_require_hex(entry.get("rlp"), name=f"encode[{i}].rlp"),
            )
        )

    decode: list[DecodeVector] = []
    for i, raw in enumerate(_require_list(root.get("decode"), name="vectors.decode")):
        entry = _require_mapping(raw, name=f"decode[{i}]")
        decode.append(
            DecodeVector(
                name=_unique_name(entry, name=f"decode[{i}]", seen=seen),
                rlp=_require_hex(entry.get("rlp"), name=f"decode[{i}].rlp"),
                value=_require_str(entry.get("value"), name=f"decode[{i}].value"),
            )
        )

    reject: list[RejectVector] = []
    for i, raw in enumerate(_require_list(root.get("reject"), name="vectors.reject")):
        entry = _require_mapping(raw, name=f"reject[{i}]")
        reject.append(
            RejectVector(
                name=_unique_name(entry, name=f"reject[{i}]", seen=seen),
                rlp=_require_hex(entry.get("rlp"), name=f"reject[{i}].rlp"),
                error=_require_str(entry.get("error"), name=f"reject[{i}].error"),
            )
        )

    if not encode:
        raise VectorFileError("vectors.encode must not be empty")
    return U256VectorSet(encode=tuple(encode), decode=tuple(decode), reject=tuple(reject))
