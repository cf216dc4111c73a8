"""
algosign signers module

- signer.py: single-key signing and verification
- multisig.py: multisig accounts, partial signing and merging
- account.py: standalone accounts
"""

from .signer import sign_transaction, verify_transaction, require_valid
from .multisig import (
    MultisigAccount,
    multisig_address,
    partial_sign,
    merge,
    merge_all,
    verify_multisig,
    sign_multisig_transaction,
    append_multisig_transaction,
    merge_signed_transactions,
)
from .account import Account

__all__ = [
    "sign_transaction",
    "verify_transaction",
    "require_valid",
    "MultisigAccount",
    "multisig_address",
    "partial_sign",
    "merge",
    "merge_all",
    "verify_multisig",
    "sign_multisig_transaction",
    "append_multisig_transaction",
    "merge_signed_transactions",
    "Account",
]
