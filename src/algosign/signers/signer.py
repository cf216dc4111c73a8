"""
Single-key transaction signing and verification.

Signatures cover ``b"TX" || canonical encoding``. Key material is borrowed
through ``secret_scope`` so raw seeds passed in as bytes are wiped as soon as
the signature is produced.
"""

from __future__ import annotations
import logging

from ..crypto.address import decode_address, encode_address
from ..crypto.ed25519 import KeyMaterial, secret_scope, verify_ed25519
from ..runtime.errors import InvalidAddressError, SignatureVerificationError
from ..tx.signed import SignedTransaction
from ..tx.transaction import Transaction
from .multisig import verify_multisig

logger = logging.getLogger(__name__)


def sign_transaction(txn: Transaction, private_key: KeyMaterial) -> SignedTransaction:
    """
    Sign a transaction with a single Ed25519 key.

    Args:
        txn: Transaction to sign
        private_key: ``Ed25519PrivateKey`` or raw 32/64-byte key material

    Returns:
        SignedTransaction carrying ``sig``, and ``sgnr`` when the signing key
        is not the sender's (rekeyed account)
    """
    with secret_scope(private_key) as key:
        signer_address = encode_address(key.public_key().to_bytes())
        signature = key.sign(txn.bytes_to_sign())
    auth_address = signer_address if signer_address != txn.sender else None
    logger.debug("Signed %s by %s", txn.id(), signer_address)
    return SignedTransaction(transaction=txn, signature=signature, auth_address=auth_address)


def verify_transaction(stxn: SignedTransaction) -> bool:
    """
    Verify a signed transaction.

    The signature must verify against ``sgnr`` when present, otherwise against
    the sender. Multisig envelopes are checked with ``verify_multisig``.

    Returns:
        True if the signature is valid; never raises for a bad signature
    """
    message = stxn.transaction.bytes_to_sign()
    if stxn.multisig is not None:
        return verify_multisig(message, stxn.multisig, stxn.authorizer)
    try:
        public_key = decode_address(stxn.authorizer)
    except InvalidAddressError:
        return False
    return verify_ed25519(public_key, stxn.signature, message)


def require_valid(stxn: SignedTransaction) -> SignedTransaction:
    """
    Verify a signed transaction or raise.

    Raises:
        SignatureVerificationError: If verification fails
    """
    if not verify_transaction(stxn):
        raise SignatureVerificationError(
            f"signature does not verify for transaction {stxn.id()}",
            details={"authorizer": stxn.authorizer},
        )
    return stxn


__all__ = ["sign_transaction", "verify_transaction", "require_valid"]
