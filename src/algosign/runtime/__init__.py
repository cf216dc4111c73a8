"""Runtime helpers for algosign"""

from .errors import (
    ErrorCode,
    AlgoSignError,
    InvalidAddressError,
    InvalidMnemonicError,
    InvalidWordCountError,
    UnknownWordError,
    ChecksumMismatchError,
    EncodingInvariantError,
    DecodingError,
    InvalidKeyError,
    SignatureVerificationError,
    MultisigMismatchError,
    DuplicateSignatureError,
)

__all__ = [
    "ErrorCode",
    "AlgoSignError",
    "InvalidAddressError",
    "InvalidMnemonicError",
    "InvalidWordCountError",
    "UnknownWordError",
    "ChecksumMismatchError",
    "EncodingInvariantError",
    "DecodingError",
    "InvalidKeyError",
    "SignatureVerificationError",
    "MultisigMismatchError",
    "DuplicateSignatureError",
]
