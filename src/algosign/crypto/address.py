"""
Address codec.

An address is the unpadded RFC 4648 base32 text of ``public_key || checksum``,
where the checksum is the last four bytes of SHA-512/256 of the key. Decoding
recomputes the checksum and never truncates or coerces malformed input.
"""

from __future__ import annotations
import base64
import binascii

from ..codec.hashes import checksum, verify_checksum
from ..constants import ADDRESS_LEN, CHECKSUM_LEN, PUBLIC_KEY_LEN
from ..runtime.errors import InvalidAddressError


def _pad(text: str) -> str:
    return text + "=" * (-len(text) % 8)


def encode_address(public_key: bytes) -> str:
    """
    Encode a 32-byte public key as an address.

    Args:
        public_key: Raw Ed25519 public key

    Returns:
        58-character address

    Raises:
        InvalidAddressError: If the key is not 32 bytes
    """
    public_key = bytes(public_key)
    if len(public_key) != PUBLIC_KEY_LEN:
        raise InvalidAddressError(
            f"public key must be {PUBLIC_KEY_LEN} bytes, got {len(public_key)}"
        )
    raw = public_key + checksum(public_key)
    return base64.b32encode(raw).decode("ascii").rstrip("=")


def decode_address(text: str) -> bytes:
    """
    Decode an address back to its 32-byte public key.

    Args:
        text: Address text

    Returns:
        Raw public key

    Raises:
        InvalidAddressError: On bad length, alphabet or checksum
    """
    if not isinstance(text, str):
        raise InvalidAddressError(f"address must be str, got {type(text).__name__}")
    if len(text) != ADDRESS_LEN:
        raise InvalidAddressError(
            f"address must be {ADDRESS_LEN} characters, got {len(text)}",
            details={"reason": "length"},
        )
    try:
        raw = base64.b32decode(_pad(text))
    except (binascii.Error, ValueError) as e:
        raise InvalidAddressError("address is not valid base32", details={"reason": "alphabet"}, cause=e)

    if len(raw) != PUBLIC_KEY_LEN + CHECKSUM_LEN:
        raise InvalidAddressError(
            f"address decodes to {len(raw)} bytes", details={"reason": "length"}
        )
    public_key, digest = raw[:PUBLIC_KEY_LEN], raw[PUBLIC_KEY_LEN:]
    if not verify_checksum(public_key, digest):
        raise InvalidAddressError("address checksum mismatch", details={"reason": "checksum"})
    # Reject non-canonical spellings of the trailing bits
    if encode_address(public_key) != text:
        raise InvalidAddressError("address is not canonically encoded", details={"reason": "alphabet"})
    return public_key


def is_valid_address(text: str) -> bool:
    """Check whether text is a well-formed address."""
    try:
        decode_address(text)
    except InvalidAddressError:
        return False
    return True


ZERO_ADDRESS = encode_address(bytes(PUBLIC_KEY_LEN))

__all__ = ["encode_address", "decode_address", "is_valid_address", "ZERO_ADDRESS"]
