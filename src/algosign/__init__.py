"""
algosign - offline Algorand transaction signing

Builds transactions, encodes them canonically, signs them with single keys or
threshold multisig accounts, and converts keys to and from addresses and
25-word mnemonics. No network I/O; node access goes through the protocols in
``algosign.client``.
"""

from .constants import MIN_TXN_FEE, MICROALGOS_PER_ALGO
from .types import MicroAlgos, Round
from .runtime.errors import *
from .crypto import (
    Ed25519PublicKey,
    Ed25519PrivateKey,
    secret_scope,
    verify_ed25519,
    encode_address,
    decode_address,
    is_valid_address,
    ZERO_ADDRESS,
    mnemonic,
)
from .tx import *
from .signers import *
from .client import TransactionSubmitter, ParamsSource, suggested_params, send_signed

from .runtime import errors as _errors
from . import tx as _tx
from . import signers as _signers

__version__ = "0.1.0"
__all__ = (
    [
        "MIN_TXN_FEE",
        "MICROALGOS_PER_ALGO",
        "MicroAlgos",
        "Round",
        "Ed25519PublicKey",
        "Ed25519PrivateKey",
        "secret_scope",
        "verify_ed25519",
        "encode_address",
        "decode_address",
        "is_valid_address",
        "ZERO_ADDRESS",
        "mnemonic",
        "TransactionSubmitter",
        "ParamsSource",
        "suggested_params",
        "send_signed",
        "__version__",
    ]
    + list(_errors.__all__)
    + list(_tx.__all__)
    + list(_signers.__all__)
)
