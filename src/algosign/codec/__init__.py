"""
algosign codec module

- hashes.py: SHA-512/256 and the 4-byte checksum codec
- canonical.py: canonical msgpack encoding (zero-value omission, sorted keys)
"""

from .hashes import sha512_256, checksum, verify_checksum, prefixed_hash
from .canonical import canonicalize, encode, decode, decode_map, is_zero

__all__ = [
    "sha512_256",
    "checksum",
    "verify_checksum",
    "prefixed_hash",
    "canonicalize",
    "encode",
    "decode",
    "decode_map",
    "is_zero",
]
