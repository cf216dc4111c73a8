"""
algosign transaction module

- payloads.py: payment, key registration and asset payloads
- transaction.py: the unsigned envelope and its canonical encoding
- signed.py: single and multisig signed envelopes
- params.py: suggested parameters from a node
- group.py: atomic group ids
- auction.py: auction bids carried in notes
"""

from .fields import Address, Digest, MicroAlgosField, RoundField, Uint64, ZERO_DIGEST
from .payloads import (
    Payload,
    Payment,
    KeyRegistration,
    AssetParams,
    AssetConfig,
    AssetTransfer,
    AssetFreeze,
    PAYLOAD_TYPES,
)
from .params import SuggestedParams
from .transaction import Transaction
from .signed import MultisigSubsig, MultisigSignature, SignedTransaction, encode_group
from .group import compute_group_id, assign_group_id, MAX_GROUP_SIZE
from .auction import Bid, SignedBid, NoteField, sign_bid

__all__ = [
    "Address",
    "Digest",
    "Uint64",
    "MicroAlgosField",
    "RoundField",
    "ZERO_DIGEST",
    "Payload",
    "Payment",
    "KeyRegistration",
    "AssetParams",
    "AssetConfig",
    "AssetTransfer",
    "AssetFreeze",
    "PAYLOAD_TYPES",
    "SuggestedParams",
    "Transaction",
    "MultisigSubsig",
    "MultisigSignature",
    "SignedTransaction",
    "encode_group",
    "compute_group_id",
    "assign_group_id",
    "MAX_GROUP_SIZE",
    "Bid",
    "SignedBid",
    "NoteField",
    "sign_bid",
]
