"""
Auction bids carried in transaction notes.

A bid is signed under the ``aB`` domain prefix and wrapped in a note field
``{"b": signed_bid, "t": "b"}`` whose canonical encoding becomes the note of a
payment to the auction.
"""

from __future__ import annotations
from typing import Any, Dict

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..codec import canonical
from ..constants import BID_PREFIX, SIGNATURE_LEN
from ..crypto.ed25519 import secret_scope
from ..runtime.errors import DecodingError
from .fields import Address, Uint64

NOTE_FIELD_BID = "b"


class Bid(BaseModel):
    """An auction bid."""

    bidder: Address = Field(..., alias="bidder")
    bid_currency: Uint64 = Field(default=0, alias="cur")
    max_price: Uint64 = Field(default=0, alias="price")
    bid_id: Uint64 = Field(default=0, alias="id")
    auction_key: Address = Field(..., alias="auc")
    auction_id: Uint64 = Field(default=0, alias="aid")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    def to_wire(self) -> Dict[str, Any]:
        return canonical.canonicalize(self.model_dump(by_alias=True))

    def bytes_to_sign(self) -> bytes:
        """``aB`` prefix followed by the canonical encoding."""
        return BID_PREFIX + canonical.encode(self.to_wire())


class SignedBid(BaseModel):
    """A bid with the bidder's signature."""

    bid: Bid = Field(..., alias="bid")
    signature: bytes = Field(..., alias="sig")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    @field_validator("signature")
    @classmethod
    def check_signature(cls, v: bytes) -> bytes:
        if len(v) != SIGNATURE_LEN:
            raise ValueError(f"signature must be {SIGNATURE_LEN} bytes, got {len(v)}")
        return v

    def to_wire(self) -> Dict[str, Any]:
        return canonical.canonicalize({"bid": self.bid.to_wire(), "sig": self.signature})


class NoteField(BaseModel):
    """Note payload announcing a signed bid."""

    signed_bid: SignedBid = Field(..., alias="b")
    note_type: str = Field(default=NOTE_FIELD_BID, alias="t")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    def to_wire(self) -> Dict[str, Any]:
        return canonical.canonicalize({"b": self.signed_bid.to_wire(), "t": self.note_type})

    def encode(self) -> bytes:
        """Note bytes for the bid payment."""
        return canonical.encode(self.to_wire())

    @classmethod
    def decode(cls, data: bytes) -> NoteField:
        """
        Parse note bytes back into a note field.

        Raises:
            DecodingError: If the bytes are not a canonically encoded bid note
        """
        try:
            note = cls.model_validate(canonical.decode_map(data))
        except ValidationError as e:
            raise DecodingError("note is not a bid note field", cause=e)
        if note.encode() != bytes(data):
            raise DecodingError("note bytes are not canonically encoded")
        return note


def sign_bid(bid: Bid, private_key) -> SignedBid:
    """
    Sign a bid.

    Args:
        bid: Bid to sign
        private_key: ``Ed25519PrivateKey`` or raw 32/64-byte key material

    Returns:
        SignedBid
    """
    with secret_scope(private_key) as key:
        signature = key.sign(bid.bytes_to_sign())
    return SignedBid(bid=bid, signature=signature)


__all__ = ["Bid", "SignedBid", "NoteField", "sign_bid", "NOTE_FIELD_BID"]
