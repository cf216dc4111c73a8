"""
Ed25519 cryptographic operations.

Provides Ed25519 key generation, signing and verification on top of
``cryptography``. Private keys keep their seed in a mutable buffer that is
overwritten with zeros when the key is wiped, either explicitly or by leaving
its ``with`` block.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey,
)

from ..constants import PUBLIC_KEY_LEN, SECRET_KEY_LEN, SEED_LEN, SIGNATURE_LEN
from ..runtime.errors import InvalidKeyError
from .address import decode_address, encode_address

KeyMaterial = Union[bytes, bytearray, "Ed25519PrivateKey"]


class Ed25519PublicKey:
    """
    Ed25519 public key.

    Provides verification and serialization.
    """

    def __init__(self, public_key_bytes: bytes):
        """
        Initialize from a 32-byte public key.

        Raises:
            InvalidKeyError: If the key is not 32 bytes or not a curve point
        """
        public_key_bytes = bytes(public_key_bytes)
        if len(public_key_bytes) != PUBLIC_KEY_LEN:
            raise InvalidKeyError(
                f"Ed25519 public key must be {PUBLIC_KEY_LEN} bytes, got {len(public_key_bytes)}"
            )
        self._key_bytes = public_key_bytes
        try:
            self._crypto_key = CryptoEd25519PublicKey.from_public_bytes(public_key_bytes)
        except ValueError as e:
            raise InvalidKeyError("invalid Ed25519 public key", cause=e)

    @classmethod
    def from_address(cls, address: str) -> Ed25519PublicKey:
        """Create a public key from an address."""
        return cls(decode_address(address))

    def to_bytes(self) -> bytes:
        """Get the 32-byte public key."""
        return self._key_bytes

    def to_address(self) -> str:
        """Get the address for this key."""
        return encode_address(self._key_bytes)

    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify a signature against a message.

        Args:
            signature: 64-byte Ed25519 signature
            message: Message that was signed

        Returns:
            True if signature is valid
        """
        if signature is None or len(signature) != SIGNATURE_LEN:
            return False
        try:
            self._crypto_key.verify(bytes(signature), bytes(message))
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ed25519PublicKey):
            return NotImplemented
        return self._key_bytes == other._key_bytes

    def __hash__(self) -> int:
        return hash(self._key_bytes)

    def __repr__(self) -> str:
        return f"Ed25519PublicKey({self.to_address()})"


class Ed25519PrivateKey:
    """
    Ed25519 private key held in a wipeable buffer.

    Accepts a 32-byte seed or the 64-byte ``seed || public_key`` layout. Use
    it as a context manager to guarantee the seed is zeroed on every exit
    path::

        with Ed25519PrivateKey(seed) as key:
            signature = key.sign(message)
    """

    def __init__(self, key_material: Union[bytes, bytearray]):
        """
        Initialize from key material.

        Raises:
            InvalidKeyError: If the material has the wrong length, or the
                public half of a 64-byte key does not match the seed
        """
        if len(key_material) not in (SEED_LEN, SECRET_KEY_LEN):
            raise InvalidKeyError(
                f"Ed25519 private key must be {SEED_LEN} or {SECRET_KEY_LEN} bytes, got {len(key_material)}"
            )
        self._seed = bytearray(key_material[:SEED_LEN])
        crypto_key = CryptoEd25519PrivateKey.from_private_bytes(bytes(self._seed))
        self._public_key = Ed25519PublicKey(
            crypto_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )
        if len(key_material) == SECRET_KEY_LEN and bytes(key_material[SEED_LEN:]) != self._public_key.to_bytes():
            self.wipe()
            raise InvalidKeyError("public half of secret key does not match its seed")

    @classmethod
    def generate(cls) -> Ed25519PrivateKey:
        """Generate a new random private key."""
        crypto_key = CryptoEd25519PrivateKey.generate()
        return cls(
            crypto_key.private_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PrivateFormat.Raw,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )

    @property
    def wiped(self) -> bool:
        """True once the seed has been overwritten."""
        return self._seed is None

    def _require_live(self) -> None:
        if self._seed is None:
            raise InvalidKeyError("private key has been wiped")

    def public_key(self) -> Ed25519PublicKey:
        """Get the corresponding public key."""
        return self._public_key

    def seed(self) -> bytes:
        """Get a copy of the 32-byte seed."""
        self._require_live()
        return bytes(self._seed)

    def secret_key(self) -> bytes:
        """Get a copy of the 64-byte ``seed || public_key`` secret key."""
        return self.seed() + self._public_key.to_bytes()

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Returns:
            64-byte Ed25519 signature

        Raises:
            InvalidKeyError: If the key has been wiped
        """
        self._require_live()
        crypto_key = CryptoEd25519PrivateKey.from_private_bytes(bytes(self._seed))
        return crypto_key.sign(bytes(message))

    def wipe(self) -> None:
        """Overwrite the seed with zeros and drop it."""
        if self._seed is not None:
            for i in range(len(self._seed)):
                self._seed[i] = 0
            self._seed = None

    def __enter__(self) -> Ed25519PrivateKey:
        self._require_live()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.wipe()

    def __repr__(self) -> str:
        state = "wiped" if self.wiped else self._public_key.to_address()
        return f"Ed25519PrivateKey(<{state}>)"


@contextmanager
def secret_scope(key_material: KeyMaterial) -> Iterator[Ed25519PrivateKey]:
    """
    Borrow key material for the duration of a ``with`` block.

    Raw bytes are copied into a fresh ``Ed25519PrivateKey`` that is wiped on
    exit. A caller-supplied ``Ed25519PrivateKey`` is yielded as is and left
    for its owner to wipe.
    """
    if isinstance(key_material, Ed25519PrivateKey):
        key_material._require_live()
        yield key_material
        return
    if not isinstance(key_material, (bytes, bytearray)):
        raise InvalidKeyError(f"unsupported key material: {type(key_material).__name__}")
    key = Ed25519PrivateKey(key_material)
    try:
        yield key
    finally:
        key.wipe()


def verify_ed25519(public_key_bytes: bytes, signature: bytes, message: bytes) -> bool:
    """
    Verify an Ed25519 signature. Returns True if valid, False otherwise.

    Args:
        public_key_bytes: 32-byte public key
        signature: 64-byte signature
        message: Message that was signed
    """
    try:
        public_key = Ed25519PublicKey(public_key_bytes)
    except InvalidKeyError:
        return False
    return public_key.verify(signature, message)


__all__ = [
    "Ed25519PublicKey",
    "Ed25519PrivateKey",
    "secret_scope",
    "verify_ed25519",
]
