"""
Canonical MessagePack

Produces the exact bytes the network hashes and signs:

- zero values (None, 0, False, "", b"", empty maps and lists) are dropped,
  recursively, so presence itself carries meaning
- map keys are emitted in byte-wise ascending order
- integers use the narrowest msgpack width, strings are ``str``, byte fields
  are ``bin``

Two values that differ only in how they were assembled encode identically.
"""

import logging
from typing import Any, Dict

import msgpack

from ..runtime.errors import EncodingInvariantError, DecodingError

logger = logging.getLogger(__name__)


def is_zero(value: Any) -> bool:
    """Return True for values that the canonical form omits."""
    if value is None:
        return True
    if isinstance(value, (bool, int)):
        return value == 0
    if isinstance(value, (str, bytes, bytearray, dict, list, tuple)):
        return len(value) == 0
    return False


def canonicalize(value: Any) -> Any:
    """
    Recursively canonicalize a value.

    - Maps: drop zero-valued entries, sort keys byte-wise, recurse into values
    - Lists: recurse into elements, preserve order
    - Primitives: pass through; floats are refused

    Args:
        value: Value to canonicalize

    Returns:
        Canonicalized value ready for msgpack

    Raises:
        EncodingInvariantError: On floats or non-string map keys
    """
    if isinstance(value, dict):
        for key in value:
            if not isinstance(key, str):
                raise EncodingInvariantError(f"map key must be str, got {type(key).__name__}")
        out: Dict[str, Any] = {}
        for key in sorted(value, key=lambda k: k.encode("utf-8")):
            item = canonicalize(value[key])
            if is_zero(item):
                continue
            out[key] = item
        return out
    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, float):
        raise EncodingInvariantError("floating point values have no canonical encoding")
    return value


def encode(value: Any) -> bytes:
    """
    Encode a value as canonical msgpack.

    Args:
        value: Mapping (or other msgpack-able value) using wire names as keys

    Returns:
        Canonical bytes
    """
    return msgpack.packb(canonicalize(value), use_bin_type=True)


def decode(data: bytes) -> Any:
    """
    Decode msgpack bytes.

    Args:
        data: Encoded bytes

    Returns:
        Decoded value, with ``str`` for msgpack str and ``bytes`` for bin

    Raises:
        DecodingError: If the bytes are not exactly one msgpack value
    """
    try:
        return msgpack.unpackb(bytes(data), raw=False, strict_map_key=True)
    except (msgpack.exceptions.ExtraData, msgpack.exceptions.UnpackException, ValueError, TypeError) as e:
        logger.debug("msgpack decode failed: %s", e)
        raise DecodingError("malformed msgpack", cause=e)


def decode_map(data: bytes) -> Dict[str, Any]:
    """Decode bytes that must hold a single msgpack map."""
    value = decode(data)
    if not isinstance(value, dict):
        raise DecodingError(f"expected a map, got {type(value).__name__}")
    return value


__all__ = ["is_zero", "canonicalize", "encode", "decode", "decode_map"]
