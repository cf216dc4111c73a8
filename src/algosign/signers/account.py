"""
Standalone single-key account.
"""

from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Iterator, Union

from ..crypto import mnemonic
from ..crypto.ed25519 import Ed25519PrivateKey
from ..tx.auction import Bid, SignedBid, sign_bid
from ..tx.signed import SignedTransaction
from ..tx.transaction import Transaction
from .signer import sign_transaction

logger = logging.getLogger(__name__)


class Account:
    """
    An Ed25519 key pair and its address.

    The private key is held in a wipeable buffer. ``secret_scope()`` hands it
    out for a ``with`` block and wipes it afterwards, after which the account
    can still report its address but can no longer sign.
    """

    def __init__(self, private_key: Ed25519PrivateKey):
        self._private_key = private_key
        self._address = private_key.public_key().to_address()

    @classmethod
    def generate(cls) -> Account:
        """Create an account with a fresh random key."""
        account = cls(Ed25519PrivateKey.generate())
        logger.debug("Generated account %s", account.address)
        return account

    @classmethod
    def from_seed(cls, seed: Union[bytes, bytearray]) -> Account:
        """Create an account from a 32-byte seed or 64-byte secret key."""
        return cls(Ed25519PrivateKey(seed))

    @classmethod
    def from_mnemonic(cls, phrase: str) -> Account:
        """
        Create an account from a 25-word mnemonic.

        Raises:
            InvalidMnemonicError: If the phrase does not decode
        """
        return cls(Ed25519PrivateKey(mnemonic.to_key(phrase)))

    @property
    def address(self) -> str:
        return self._address

    @property
    def public_key(self) -> bytes:
        return self._private_key.public_key().to_bytes()

    def mnemonic(self) -> str:
        """25-word mnemonic for the account's seed."""
        return mnemonic.from_key(self._private_key.seed())

    def sign_transaction(self, txn: Transaction) -> SignedTransaction:
        return sign_transaction(txn, self._private_key)

    def sign_bid(self, bid: Bid) -> SignedBid:
        return sign_bid(bid, self._private_key)

    @contextmanager
    def secret_scope(self) -> Iterator[Ed25519PrivateKey]:
        """Yield the private key, wiping it when the block exits."""
        try:
            yield self._private_key
        finally:
            self._private_key.wipe()

    @property
    def wiped(self) -> bool:
        return self._private_key.wiped

    def __repr__(self) -> str:
        return f"Account({self._address})"


__all__ = ["Account"]
