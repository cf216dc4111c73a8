"""
Cryptographic primitives and text codecs.

Ed25519 keys, the address codec and the mnemonic codec.
"""

from .ed25519 import Ed25519PublicKey, Ed25519PrivateKey, secret_scope, verify_ed25519
from .address import encode_address, decode_address, is_valid_address, ZERO_ADDRESS
from . import mnemonic

__all__ = [
    "Ed25519PublicKey",
    "Ed25519PrivateKey",
    "secret_scope",
    "verify_ed25519",
    "encode_address",
    "decode_address",
    "is_valid_address",
    "ZERO_ADDRESS",
    "mnemonic",
]
