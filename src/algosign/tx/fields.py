"""
Transaction field types.

Annotated pydantic types that validate a field on the way in and produce its
wire form on the way out:

- ``Address``: 58-character text in memory, 32 raw bytes on the wire; raw
  32-byte keys are accepted and converted. The zero address serializes to
  ``None`` so the canonical encoder drops it.
- ``Digest``: fixed 32 bytes; all zeros serializes to ``None``.
- ``Uint64``: unsigned 64-bit integer.
- ``MicroAlgosField`` / ``RoundField``: ``Uint64`` held as ``MicroAlgos`` or
  ``Round``, written to the wire as a plain int.
"""

from __future__ import annotations
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BeforeValidator, Field, PlainSerializer

from ..constants import HASH_LEN, MAX_UINT64, PUBLIC_KEY_LEN
from ..crypto.address import decode_address, encode_address
from ..types import MicroAlgos, Round


def _address_in(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)) and len(value) == PUBLIC_KEY_LEN:
        return encode_address(bytes(value))
    return value


def _address_check(value: str) -> str:
    decode_address(value)
    return value


def _address_out(value: Optional[str]) -> Optional[bytes]:
    if value is None:
        return None
    public_key = decode_address(value)
    if not any(public_key):
        return None
    return public_key


def _digest_check(value: bytes) -> bytes:
    if len(value) != HASH_LEN:
        raise ValueError(f"digest must be {HASH_LEN} bytes, got {len(value)}")
    return value


def _int_out(value: int) -> int:
    return int(value)


def _digest_out(value: Optional[bytes]) -> Optional[bytes]:
    if value is None or not any(value):
        return None
    return value


Address = Annotated[
    str,
    BeforeValidator(_address_in),
    AfterValidator(_address_check),
    PlainSerializer(_address_out),
]

Digest = Annotated[
    bytes,
    AfterValidator(_digest_check),
    PlainSerializer(_digest_out),
]

Uint64 = Annotated[int, Field(ge=0, le=MAX_UINT64)]

MicroAlgosField = Annotated[Uint64, AfterValidator(MicroAlgos), PlainSerializer(_int_out)]

RoundField = Annotated[Uint64, AfterValidator(Round), PlainSerializer(_int_out)]

ZERO_DIGEST = bytes(HASH_LEN)

__all__ = ["Address", "Digest", "Uint64", "MicroAlgosField", "RoundField", "ZERO_DIGEST"]
