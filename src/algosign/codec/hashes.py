"""
Hash Functions

SHA-512/256 digests and the short integrity checksums built on them. Addresses
use the trailing four digest bytes; mnemonics use the leading eleven bits.
"""

import hashlib
import hmac

from ..constants import CHECKSUM_LEN


def sha512_256(input_bytes: bytes) -> bytes:
    """
    Compute the SHA-512/256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-512/256 hash as bytes (32 bytes)
    """
    return hashlib.new("sha512_256", bytes(input_bytes)).digest()


def checksum(input_bytes: bytes) -> bytes:
    """
    Compute the 4-byte checksum of input bytes.

    Args:
        input_bytes: Bytes to protect

    Returns:
        Last 4 bytes of the SHA-512/256 hash
    """
    return sha512_256(input_bytes)[-CHECKSUM_LEN:]


def verify_checksum(input_bytes: bytes, digest: bytes) -> bool:
    """
    Check a 4-byte checksum against freshly computed one.

    Args:
        input_bytes: Bytes the checksum claims to cover
        digest: Checksum to check

    Returns:
        True if the checksum matches
    """
    return hmac.compare_digest(checksum(input_bytes), bytes(digest))


def prefixed_hash(prefix: bytes, payload: bytes) -> bytes:
    """
    Hash a payload under a domain-separation prefix.

    Args:
        prefix: Domain tag such as b"TX" or b"TG"
        payload: Canonical bytes

    Returns:
        SHA-512/256 of prefix || payload
    """
    return sha512_256(prefix + payload)


__all__ = ["sha512_256", "checksum", "verify_checksum", "prefixed_hash"]
