"""
Signed transaction envelopes.

``SignedTransaction`` pairs a ``Transaction`` with either a single Ed25519
signature (``sig``) or a ``MultisigSignature`` (``msig``). ``sgnr`` names the
authorizing address when it differs from the sender (rekeyed accounts).
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..codec import canonical
from ..constants import PUBLIC_KEY_LEN, SIGNATURE_LEN
from ..runtime.errors import DecodingError, EncodingInvariantError
from .fields import Address, Uint64
from .transaction import Transaction


def _check_signature(value: Optional[bytes]) -> Optional[bytes]:
    if value is not None and len(value) not in (0, SIGNATURE_LEN):
        raise ValueError(f"signature must be {SIGNATURE_LEN} bytes, got {len(value)}")
    return value or None


class MultisigSubsig(BaseModel):
    """One participant slot: a public key and, once signed, its signature."""

    public_key: bytes = Field(..., alias="pk")
    signature: Optional[bytes] = Field(default=None, alias="s")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    @field_validator("public_key")
    @classmethod
    def check_public_key(cls, v: bytes) -> bytes:
        if len(v) != PUBLIC_KEY_LEN:
            raise ValueError(f"public key must be {PUBLIC_KEY_LEN} bytes, got {len(v)}")
        return v

    @field_validator("signature")
    @classmethod
    def check_signature(cls, v: Optional[bytes]) -> Optional[bytes]:
        return _check_signature(v)

    @property
    def filled(self) -> bool:
        return self.signature is not None


class MultisigSignature(BaseModel):
    """
    Threshold signature envelope.

    Slots are aligned with the participant keys of the multisig account.
    Whether enough slots are filled is only checked at verification time.
    """

    version: Uint64 = Field(..., alias="v")
    threshold: Uint64 = Field(..., alias="thr")
    subsigs: Tuple[MultisigSubsig, ...] = Field(..., alias="subsig")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    def public_keys(self) -> Tuple[bytes, ...]:
        """Participant keys in slot order."""
        return tuple(subsig.public_key for subsig in self.subsigs)

    def filled_count(self) -> int:
        """Number of slots holding a signature."""
        return sum(1 for subsig in self.subsigs if subsig.filled)

    def is_complete(self) -> bool:
        """True when filled slots reach the threshold. Advisory only."""
        return self.filled_count() >= self.threshold

    def to_wire(self) -> Dict[str, Any]:
        return canonical.canonicalize(self.model_dump(by_alias=True))

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> MultisigSignature:
        return cls.model_validate(data)


class SignedTransaction(BaseModel):
    """Transaction plus exactly one of a single signature or a multisig."""

    transaction: Transaction = Field(..., alias="txn")
    signature: Optional[bytes] = Field(default=None, alias="sig")
    multisig: Optional[MultisigSignature] = Field(default=None, alias="msig")
    auth_address: Optional[Address] = Field(default=None, alias="sgnr")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    @field_validator("signature")
    @classmethod
    def check_signature(cls, v: Optional[bytes]) -> Optional[bytes]:
        return _check_signature(v)

    @model_validator(mode="after")
    def check_one_authenticator(self) -> SignedTransaction:
        if (self.signature is None) == (self.multisig is None):
            raise ValueError("signed transaction needs exactly one of sig or msig")
        return self

    @property
    def authorizer(self) -> str:
        """Address whose key must authorize the transaction."""
        return self.auth_address or self.transaction.sender

    def to_wire(self) -> Dict[str, Any]:
        fields = self.model_dump(by_alias=True, exclude={"transaction", "multisig"})
        fields["txn"] = self.transaction.to_wire()
        if self.multisig is not None:
            fields["msig"] = self.multisig.to_wire()
        return canonical.canonicalize(fields)

    def encode(self) -> bytes:
        """Canonical msgpack bytes, as submitted to the network."""
        return canonical.encode(self.to_wire())

    def id(self) -> str:
        """Id of the wrapped transaction."""
        return self.transaction.id()

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> SignedTransaction:
        """
        Rebuild a signed transaction from its wire map.

        Raises:
            DecodingError: On unknown keys or malformed fields
            EncodingInvariantError: If the inner transaction has no known type
        """
        unknown = set(data) - {"txn", "sig", "msig", "sgnr"}
        if unknown:
            raise DecodingError(f"unexpected signed transaction fields: {sorted(unknown)}")
        txn_data = data.get("txn")
        if not isinstance(txn_data, dict):
            raise DecodingError("signed transaction has no txn map")
        try:
            msig = data.get("msig")
            return cls(
                transaction=Transaction.from_wire(txn_data),
                signature=data.get("sig"),
                multisig=MultisigSignature.from_wire(msig) if msig is not None else None,
                auth_address=data.get("sgnr"),
            )
        except ValidationError as e:
            raise DecodingError("invalid signed transaction", cause=e)

    @classmethod
    def decode(cls, data: bytes) -> SignedTransaction:
        """
        Decode canonical msgpack bytes into a signed transaction.

        Raises:
            DecodingError: If the bytes do not decode, or are not exactly the
                canonical encoding of the decoded envelope
        """
        stxn = cls.from_wire(canonical.decode_map(data))
        if stxn.encode() != bytes(data):
            raise DecodingError("signed transaction bytes are not canonically encoded")
        return stxn

    def __repr__(self) -> str:
        kind = "msig" if self.multisig is not None else "sig"
        return f"SignedTransaction({kind}, txid={self.id()})"


def encode_group(stxns) -> bytes:
    """
    Concatenate signed transactions for a single submission.

    Raises:
        EncodingInvariantError: If given no transactions
    """
    stxns = list(stxns)
    if not stxns:
        raise EncodingInvariantError("nothing to encode")
    return b"".join(stxn.encode() for stxn in stxns)


__all__ = ["MultisigSubsig", "MultisigSignature", "SignedTransaction", "encode_group"]
