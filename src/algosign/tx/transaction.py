"""
Unsigned transaction envelope.

``Transaction`` holds the fields every transaction shares plus exactly one
payload from ``payloads``. The wire form is a flat map: common fields, the
payload's fields and a ``type`` tag, encoded as canonical msgpack. The
transaction id is the base32 SHA-512/256 of ``b"TX" || encoding``.
"""

from __future__ import annotations
import base64
import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from ..codec import canonical
from ..codec.hashes import sha512_256
from ..constants import SIGNATURE_LEN, TX_PREFIX
from ..crypto.address import ZERO_ADDRESS
from ..runtime.errors import DecodingError, EncodingInvariantError
from ..types import MicroAlgos, Round
from .fields import Address, Digest, MicroAlgosField, RoundField, ZERO_DIGEST
from .params import SuggestedParams
from .payloads import AnyPayload, Payload, PAYLOAD_TYPES

logger = logging.getLogger(__name__)

MAX_NOTE_LEN = 1024


class Transaction(BaseModel):
    """
    Unsigned transaction.

    Immutable; every transformation (setting a group id, adjusting the fee)
    returns a new instance via ``model_copy``.
    """

    sender: Address = Field(..., alias="snd")
    fee: MicroAlgosField = Field(default=MicroAlgos(0), alias="fee")
    first_valid: RoundField = Field(default=Round(0), alias="fv")
    last_valid: RoundField = Field(default=Round(0), alias="lv")
    genesis_id: str = Field(default="", alias="gen")
    genesis_hash: Digest = Field(default=ZERO_DIGEST, alias="gh")
    note: bytes = Field(default=b"", max_length=MAX_NOTE_LEN, alias="note")
    lease: Optional[Digest] = Field(default=None, alias="lx")
    group: Optional[Digest] = Field(default=None, alias="grp")
    rekey_to: Optional[Address] = Field(default=None, alias="rekey")
    payload: AnyPayload

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    @property
    def type(self) -> str:
        """Wire type tag of the payload."""
        return self.payload.TYPE

    @classmethod
    def common_wire_names(cls) -> frozenset:
        """Wire names of the envelope fields."""
        return frozenset(
            field.alias or name for name, field in cls.model_fields.items() if name != "payload"
        )

    @classmethod
    def from_params(
        cls,
        params: SuggestedParams,
        sender: str,
        payload: Payload,
        note: bytes = b"",
        lease: Optional[bytes] = None,
        rekey_to: Optional[str] = None,
    ) -> Transaction:
        """
        Build a transaction from suggested parameters.

        With a per-byte fee the final fee is ``max(min_fee, fee * size)``;
        with a flat fee it is taken as given.

        Args:
            params: Parameters reported by the node
            sender: Sender address
            payload: Transaction payload
            note: Arbitrary note bytes
            lease: Optional 32-byte lease
            rekey_to: Optional address to rekey the sender to

        Returns:
            Transaction with its fee set
        """
        txn = cls(
            sender=sender,
            first_valid=params.first_valid,
            last_valid=params.last_valid,
            genesis_id=params.genesis_id,
            genesis_hash=params.genesis_hash,
            note=note,
            lease=lease,
            rekey_to=rekey_to,
            payload=payload,
        )
        if params.flat_fee:
            fee = params.fee
        else:
            fee = max(params.min_fee, params.fee * txn.estimate_size())
        logger.debug("Built %s transaction from %s with fee %d", payload.TYPE, sender, fee)
        return txn.model_copy(update={"fee": MicroAlgos(fee)})

    def to_wire(self) -> Dict[str, Any]:
        """
        Build the canonical wire map.

        Returns:
            Map of wire name to value with zero values removed and keys sorted

        Raises:
            EncodingInvariantError: If the instance has no payload, which can
                only happen when validation was bypassed
        """
        payload = self.__dict__.get("payload")
        if not isinstance(payload, Payload) or not payload.TYPE:
            raise EncodingInvariantError("transaction must carry exactly one payload")

        fields = self.model_dump(by_alias=True, exclude={"payload"})
        payload_fields = payload.model_dump(by_alias=True)
        clash = fields.keys() & payload_fields.keys()
        if clash:
            raise EncodingInvariantError(f"payload fields collide with envelope: {sorted(clash)}")
        fields.update(payload_fields)
        fields["type"] = payload.TYPE
        return canonical.canonicalize(fields)

    def encode(self) -> bytes:
        """Canonical msgpack bytes of this transaction."""
        return canonical.encode(self.to_wire())

    def bytes_to_sign(self) -> bytes:
        """Domain-tagged bytes that signatures cover."""
        return TX_PREFIX + self.encode()

    def raw_id(self) -> bytes:
        """32-byte transaction id."""
        return sha512_256(self.bytes_to_sign())

    def id(self) -> str:
        """Transaction id as unpadded base32 text."""
        return base64.b32encode(self.raw_id()).decode("ascii").rstrip("=")

    def estimate_size(self) -> int:
        """
        Estimate the size of this transaction once signed.

        Wraps the encoding in a signed envelope with a 64-byte placeholder
        signature.
        """
        return len(canonical.encode({"sig": b"\x01" * SIGNATURE_LEN, "txn": self.to_wire()}))

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> Transaction:
        """
        Rebuild a transaction from its wire map.

        Absent fields come back as their zero values.

        Raises:
            EncodingInvariantError: Unknown or missing ``type``
            DecodingError: Fields that belong to neither the envelope nor the payload
        """
        tx_type = data.get("type")
        payload_cls = PAYLOAD_TYPES.get(tx_type)
        if payload_cls is None:
            raise EncodingInvariantError(f"unknown transaction type: {tx_type!r}")

        common_names = cls.common_wire_names()
        payload_names = payload_cls.wire_names()
        unknown = set(data) - common_names - payload_names - {"type"}
        if unknown:
            raise DecodingError(f"unexpected transaction fields: {sorted(unknown)}")

        common = {k: v for k, v in data.items() if k in common_names}
        common.setdefault("snd", ZERO_ADDRESS)
        try:
            payload = payload_cls.model_validate({k: v for k, v in data.items() if k in payload_names})
            return cls.model_validate({**common, "payload": payload})
        except ValidationError as e:
            raise DecodingError(f"invalid {tx_type} transaction fields", cause=e)

    @classmethod
    def decode(cls, data: bytes) -> Transaction:
        """
        Decode canonical msgpack bytes into a transaction.

        Raises:
            DecodingError: If the bytes do not decode, or are not exactly the
                canonical encoding of the decoded transaction
        """
        txn = cls.from_wire(canonical.decode_map(data))
        if txn.encode() != bytes(data):
            raise DecodingError("transaction bytes are not canonically encoded")
        return txn

    def __repr__(self) -> str:
        return f"Transaction(type={self.type!r}, sender={self.sender!r}, fv={self.first_valid}, lv={self.last_valid})"


__all__ = ["Transaction", "MAX_NOTE_LEN"]
