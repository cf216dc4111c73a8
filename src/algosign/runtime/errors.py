"""
algosign error model

Every failure the signing subsystem can report is an ``AlgoSignError`` carrying
an ``ErrorCode``, so callers can tell a bad checksum from an unknown word from a
tampered signature without parsing messages. Nothing here is retryable.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for the signing subsystem."""

    OK = 0
    UNKNOWN = 1
    INTERNAL = 2

    # Text formats (100-199)
    INVALID_ADDRESS = 100
    INVALID_MNEMONIC = 110
    INVALID_WORD_COUNT = 111
    UNKNOWN_WORD = 112
    CHECKSUM_MISMATCH = 113

    # Encoding (200-299)
    ENCODING_INVARIANT = 200
    DECODING_ERROR = 201

    # Keys and signatures (300-399)
    INVALID_KEY = 300
    INVALID_SIGNATURE = 301
    MULTISIG_MISMATCH = 310
    DUPLICATE_SIGNATURE = 311


class AlgoSignError(Exception):
    """
    Base class for all algosign errors.

    Provides structured error information: a code, optional details and the
    underlying exception, if any.
    """

    default_code = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an error.

        Args:
            message: Error message
            code: Error code, defaults to the class's code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result: Dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class InvalidAddressError(AlgoSignError):
    """Address text with a bad length, alphabet or checksum."""

    default_code = ErrorCode.INVALID_ADDRESS


class InvalidMnemonicError(AlgoSignError):
    """Mnemonic phrase that does not decode to a key."""

    default_code = ErrorCode.INVALID_MNEMONIC


class InvalidWordCountError(InvalidMnemonicError):
    """Mnemonic phrase without exactly 25 words."""

    default_code = ErrorCode.INVALID_WORD_COUNT


class UnknownWordError(InvalidMnemonicError):
    """Mnemonic word missing from the wordlist."""

    default_code = ErrorCode.UNKNOWN_WORD


class ChecksumMismatchError(InvalidMnemonicError):
    """Checksum word does not match the decoded key."""

    default_code = ErrorCode.CHECKSUM_MISMATCH


class EncodingInvariantError(AlgoSignError):
    """Value that cannot be encoded canonically, e.g. a transaction without a payload."""

    default_code = ErrorCode.ENCODING_INVARIANT


class DecodingError(AlgoSignError):
    """Bytes that are not a well-formed canonical encoding."""

    default_code = ErrorCode.DECODING_ERROR


class InvalidKeyError(AlgoSignError):
    """Key material with the wrong length or shape."""

    default_code = ErrorCode.INVALID_KEY


class SignatureVerificationError(AlgoSignError):
    """Signature that does not verify against the signed bytes."""

    default_code = ErrorCode.INVALID_SIGNATURE


class MultisigMismatchError(AlgoSignError):
    """Multisig structures that disagree on version, threshold or participants."""

    default_code = ErrorCode.MULTISIG_MISMATCH


class DuplicateSignatureError(AlgoSignError):
    """Merge would overwrite a filled multisig slot with a different signature."""

    default_code = ErrorCode.DUPLICATE_SIGNATURE


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
