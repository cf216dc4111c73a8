"""
Mnemonic codec.

Turns a 32-byte secret into 25 words and back:

1. The 32 bytes plus one zero padding byte (264 bits) are cut into 24
   little-endian 11-bit groups; each group indexes the wordlist.
2. The 25th word indexes the wordlist with the low 11 bits of the first two
   bytes of SHA-512/256 over the 32 key bytes.

Decoding recomputes the checksum from the recovered key and fails closed on a
wrong word count, an unknown word, non-zero padding or a checksum mismatch.
"""

from __future__ import annotations
from typing import List, Sequence

from ..codec.hashes import sha512_256
from ..constants import BITS_PER_WORD, MNEMONIC_WORDS, SECRET_KEY_LEN, SEED_LEN
from ..runtime.errors import (
    ChecksumMismatchError,
    InvalidKeyError,
    InvalidMnemonicError,
    InvalidWordCountError,
    UnknownWordError,
)
from .ed25519 import Ed25519PrivateKey
from .wordlist import WORDLIST, WORD_INDEX

_WORD_MASK = (1 << BITS_PER_WORD) - 1


def _to_11_bit(data: bytes) -> List[int]:
    """Split bytes into little-endian 11-bit groups, padding the last group with zeros."""
    buffer = 0
    bits = 0
    out: List[int] = []
    for byte in data:
        buffer |= byte << bits
        bits += 8
        if bits >= BITS_PER_WORD:
            out.append(buffer & _WORD_MASK)
            buffer >>= BITS_PER_WORD
            bits -= BITS_PER_WORD
    if bits:
        out.append(buffer & _WORD_MASK)
    return out


def _from_11_bit(groups: Sequence[int]) -> bytes:
    """Reassemble little-endian 11-bit groups into bytes."""
    buffer = 0
    bits = 0
    out = bytearray()
    for group in groups:
        buffer |= group << bits
        bits += BITS_PER_WORD
        while bits >= 8:
            out.append(buffer & 0xFF)
            buffer >>= 8
            bits -= 8
    if bits:
        out.append(buffer & 0xFF)
    return bytes(out)


def _checksum_word(key: bytes) -> str:
    digest = sha512_256(key)
    return WORDLIST[_to_11_bit(digest[:2])[0]]


def from_key(key: bytes) -> str:
    """
    Encode a 32-byte key as a 25-word mnemonic.

    Args:
        key: 32 raw bytes (an Ed25519 seed or a master derivation key)

    Returns:
        Space-separated phrase

    Raises:
        InvalidKeyError: If key is not 32 bytes
    """
    key = bytes(key)
    if len(key) != SEED_LEN:
        raise InvalidKeyError(f"mnemonic key must be {SEED_LEN} bytes, got {len(key)}")
    words = [WORDLIST[group] for group in _to_11_bit(key + b"\x00")]
    words.append(_checksum_word(key))
    return " ".join(words)


def to_key(phrase: str) -> bytes:
    """
    Decode a 25-word mnemonic to its 32-byte key.

    Args:
        phrase: Whitespace-separated words; case is ignored

    Returns:
        32 raw bytes

    Raises:
        InvalidWordCountError: Not exactly 25 words
        UnknownWordError: A word is missing from the wordlist
        InvalidMnemonicError: The padding bits are not zero
        ChecksumMismatchError: The last word does not match the key
    """
    words = phrase.lower().split()
    if len(words) != MNEMONIC_WORDS:
        raise InvalidWordCountError(
            f"mnemonic must have {MNEMONIC_WORDS} words, got {len(words)}",
            details={"count": len(words)},
        )

    groups = []
    for position, word in enumerate(words):
        index = WORD_INDEX.get(word)
        if index is None:
            raise UnknownWordError(
                f"word {position + 1} is not in the wordlist",
                details={"position": position + 1},
            )
        groups.append(index)

    data = _from_11_bit(groups[:-1])
    if len(data) != SEED_LEN + 1 or data[-1] != 0:
        raise InvalidMnemonicError("mnemonic padding bits are not zero")
    key = data[:SEED_LEN]

    if _checksum_word(key) != words[-1]:
        raise ChecksumMismatchError("mnemonic checksum word does not match")
    return key


def from_private_key(secret_key: bytes) -> str:
    """
    Encode a 64-byte secret key (seed || public key) as a mnemonic.

    Only the seed half is encoded; the public half is derivable.
    """
    secret_key = bytes(secret_key)
    if len(secret_key) != SECRET_KEY_LEN:
        raise InvalidKeyError(f"secret key must be {SECRET_KEY_LEN} bytes, got {len(secret_key)}")
    return from_key(secret_key[:SEED_LEN])


def to_private_key(phrase: str) -> bytes:
    """Decode a mnemonic to the 64-byte secret key (seed || public key)."""
    seed = to_key(phrase)
    return seed + Ed25519PrivateKey(seed).public_key().to_bytes()


def from_master_derivation_key(mdk: bytes) -> str:
    """Encode a kmd wallet master derivation key as a mnemonic."""
    return from_key(mdk)


def to_master_derivation_key(phrase: str) -> bytes:
    """Decode a mnemonic to a kmd wallet master derivation key."""
    return to_key(phrase)


__all__ = [
    "from_key",
    "to_key",
    "from_private_key",
    "to_private_key",
    "from_master_derivation_key",
    "to_master_derivation_key",
]
