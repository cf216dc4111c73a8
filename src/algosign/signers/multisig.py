"""
Threshold multisignature accounts.

A multisig account is an ordered list of Ed25519 public keys with a version
and threshold. Its address is SHA-512/256 over ``b"MultisigAddr"``, the
version and threshold bytes and the concatenated keys. Signatures are
collected slot by slot in a ``MultisigSignature`` and combined with
``merge``, which is commutative and associative so partial signatures can be
gathered in any order.

Reference: go-algorand crypto/multisig.go
"""

from __future__ import annotations
import logging
from functools import reduce
from typing import Iterable, Optional, Sequence, Tuple

from ..codec.hashes import prefixed_hash
from ..constants import MULTISIG_ADDR_PREFIX, MULTISIG_VERSION, PUBLIC_KEY_LEN
from ..crypto.address import decode_address, encode_address
from ..crypto.ed25519 import KeyMaterial, secret_scope, verify_ed25519
from ..runtime.errors import DuplicateSignatureError, MultisigMismatchError
from ..tx.signed import MultisigSignature, MultisigSubsig, SignedTransaction
from ..tx.transaction import Transaction

logger = logging.getLogger(__name__)

MAX_PARTICIPANTS = 255


def multisig_address(version: int, threshold: int, public_keys: Sequence[bytes]) -> str:
    """Derive the address of a multisig account."""
    preimage = bytes([version, threshold]) + b"".join(public_keys)
    return encode_address(prefixed_hash(MULTISIG_ADDR_PREFIX, preimage))


class MultisigAccount:
    """
    Multisig account preimage.

    Args:
        version: Multisig format version, currently 1
        threshold: Number of signatures required
        public_keys: Participant keys as 32-byte values or addresses, in order
    """

    def __init__(self, version: int, threshold: int, public_keys: Iterable):
        self.version = version
        self.threshold = threshold
        self.public_keys: Tuple[bytes, ...] = tuple(
            decode_address(pk) if isinstance(pk, str) else bytes(pk) for pk in public_keys
        )

    @classmethod
    def from_signature(cls, msig: MultisigSignature) -> MultisigAccount:
        """Recover the account described by a multisig's slots."""
        return cls(msig.version, msig.threshold, msig.public_keys())

    def validate(self) -> None:
        """
        Check the account preimage.

        Raises:
            MultisigMismatchError: Unknown version, bad threshold, or a
                malformed key
        """
        if self.version != MULTISIG_VERSION:
            raise MultisigMismatchError(f"unknown multisig version {self.version}")
        if not 0 < len(self.public_keys) <= MAX_PARTICIPANTS:
            raise MultisigMismatchError(f"multisig needs 1 to {MAX_PARTICIPANTS} keys")
        if not 0 < self.threshold <= len(self.public_keys):
            raise MultisigMismatchError(
                f"threshold {self.threshold} outside 1..{len(self.public_keys)}",
                details={"threshold": self.threshold, "participants": len(self.public_keys)},
            )
        for index, pk in enumerate(self.public_keys):
            if len(pk) != PUBLIC_KEY_LEN:
                raise MultisigMismatchError(f"key {index} is {len(pk)} bytes", details={"position": index})

    def address(self) -> str:
        """Multisig address; validates the preimage first."""
        self.validate()
        return multisig_address(self.version, self.threshold, self.public_keys)

    def template(self) -> MultisigSignature:
        """Multisig with every slot empty."""
        self.validate()
        return MultisigSignature(
            version=self.version,
            threshold=self.threshold,
            subsigs=tuple(MultisigSubsig(public_key=pk) for pk in self.public_keys),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, MultisigAccount):
            return NotImplemented
        return (self.version, self.threshold, self.public_keys) == (
            other.version, other.threshold, other.public_keys
        )

    def __hash__(self) -> int:
        return hash((self.version, self.threshold, self.public_keys))

    def __repr__(self) -> str:
        return f"MultisigAccount(v={self.version}, thr={self.threshold}, keys={len(self.public_keys)})"


def partial_sign(txn: Transaction, account: MultisigAccount, private_key: KeyMaterial) -> MultisigSignature:
    """
    Sign a transaction for one participant.

    Only the slot(s) holding the signer's public key are filled; every other
    slot is left empty.

    Raises:
        MultisigMismatchError: If the signer is not a participant
    """
    msig = account.template()
    with secret_scope(private_key) as key:
        public_key = key.public_key().to_bytes()
        if public_key not in account.public_keys:
            raise MultisigMismatchError(
                "signer is not a participant of the multisig account",
                details={"signer": encode_address(public_key)},
            )
        signature = key.sign(txn.bytes_to_sign())
    subsigs = tuple(
        MultisigSubsig(public_key=s.public_key, signature=signature if s.public_key == public_key else None)
        for s in msig.subsigs
    )
    logger.debug("Partially signed %s for %s", txn.id(), encode_address(public_key))
    return msig.model_copy(update={"subsigs": subsigs})


def merge(a: MultisigSignature, b: MultisigSignature) -> MultisigSignature:
    """
    Combine two partial multisigs over the same account.

    Each slot takes whichever side has a signature. Slots that are filled on
    both sides must hold the same signature.

    Raises:
        MultisigMismatchError: Different version, threshold or key list
        DuplicateSignatureError: A slot filled with two different signatures
    """
    if (a.version, a.threshold) != (b.version, b.threshold) or a.public_keys() != b.public_keys():
        raise MultisigMismatchError("multisig preimages differ")

    subsigs = []
    for index, (left, right) in enumerate(zip(a.subsigs, b.subsigs)):
        if left.filled and right.filled and left.signature != right.signature:
            raise DuplicateSignatureError(
                f"slot {index} carries two different signatures", details={"position": index}
            )
        subsigs.append(left if left.filled else right)
    merged = a.model_copy(update={"subsigs": tuple(subsigs)})
    logger.debug("Merged multisig: %d/%d slots filled", merged.filled_count(), merged.threshold)
    return merged


def merge_all(sigs: Iterable[MultisigSignature]) -> MultisigSignature:
    """
    Fold ``merge`` over partial multisigs.

    Raises:
        MultisigMismatchError: If no multisigs are given, or preimages differ
    """
    sigs = list(sigs)
    if not sigs:
        raise MultisigMismatchError("nothing to merge")
    return reduce(merge, sigs)


def verify_multisig(message: bytes, msig: Optional[MultisigSignature], address: str) -> bool:
    """
    Verify a multisig over a message.

    The address re-derived from the slots must equal ``address``, every
    present signature must verify, and at least ``threshold`` slots must be
    filled. Never raises for a bad signature.
    """
    if msig is None:
        return False
    account = MultisigAccount.from_signature(msig)
    try:
        if account.address() != address:
            return False
    except MultisigMismatchError:
        return False

    verified = 0
    for subsig in msig.subsigs:
        if not subsig.filled:
            continue
        if not verify_ed25519(subsig.public_key, subsig.signature, message):
            return False
        verified += 1
    return verified >= msig.threshold


def sign_multisig_transaction(txn: Transaction, account: MultisigAccount,
                              private_key: KeyMaterial) -> SignedTransaction:
    """
    Start a multisig signed transaction with one participant's signature.

    ``sgnr`` is set when the multisig address is not the sender.
    """
    address = account.address()
    msig = partial_sign(txn, account, private_key)
    auth_address = address if address != txn.sender else None
    return SignedTransaction(transaction=txn, multisig=msig, auth_address=auth_address)


def append_multisig_transaction(stxn: SignedTransaction, account: MultisigAccount,
                                private_key: KeyMaterial) -> SignedTransaction:
    """
    Add one participant's signature to an existing multisig signed transaction.

    Raises:
        MultisigMismatchError: If ``stxn`` is not a multisig for ``account``
        DuplicateSignatureError: If the slot already holds another signature
    """
    if stxn.multisig is None:
        raise MultisigMismatchError("signed transaction carries no multisig")
    partial = partial_sign(stxn.transaction, account, private_key)
    return stxn.model_copy(update={"multisig": merge(stxn.multisig, partial)})


def merge_signed_transactions(a: SignedTransaction, b: SignedTransaction) -> SignedTransaction:
    """
    Merge two multisig signed transactions over the same transaction.

    Raises:
        MultisigMismatchError: Different transactions, authorizers, or a
            transaction without a multisig
        DuplicateSignatureError: A slot filled with two different signatures
    """
    if a.multisig is None or b.multisig is None:
        raise MultisigMismatchError("both signed transactions must carry a multisig")
    if a.transaction.raw_id() != b.transaction.raw_id():
        raise MultisigMismatchError("signed transactions wrap different transactions")
    if a.auth_address != b.auth_address:
        raise MultisigMismatchError("signed transactions name different authorizers")
    return a.model_copy(update={"multisig": merge(a.multisig, b.multisig)})


__all__ = [
    "MultisigAccount",
    "multisig_address",
    "partial_sign",
    "merge",
    "merge_all",
    "verify_multisig",
    "sign_multisig_transaction",
    "append_multisig_transaction",
    "merge_signed_transactions",
    "MAX_PARTICIPANTS",
]
