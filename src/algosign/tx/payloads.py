"""
Transaction payload variants.

A transaction carries exactly one payload. Each payload model knows its wire
``type`` tag and uses wire names as aliases, so ``model_dump(by_alias=True)``
yields the map the canonical encoder consumes.

Reference: go-algorand data/transactions (payment.go, keyreg.go, asset.go)
"""

from __future__ import annotations
from typing import ClassVar, Dict, Optional, Type, Union

from pydantic import BaseModel, Field

from ..crypto.address import ZERO_ADDRESS
from ..types import MicroAlgos, Round
from .fields import Address, Digest, MicroAlgosField, RoundField, Uint64


class Payload(BaseModel):
    """Base class for transaction payloads."""

    TYPE: ClassVar[str] = ""

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    @classmethod
    def wire_names(cls) -> frozenset:
        """Wire names of this payload's fields."""
        return frozenset(field.alias or name for name, field in cls.model_fields.items())


class Payment(Payload):
    """Transfer of microalgos, optionally closing the sender's account."""

    TYPE: ClassVar[str] = "pay"

    receiver: Address = Field(default=ZERO_ADDRESS, alias="rcv")
    amount: MicroAlgosField = Field(default=MicroAlgos(0), alias="amt")
    close_remainder_to: Optional[Address] = Field(default=None, alias="close")


class KeyRegistration(Payload):
    """Registers (or, with no keys, deregisters) participation keys."""

    TYPE: ClassVar[str] = "keyreg"

    vote_pk: Optional[Digest] = Field(default=None, alias="votekey")
    selection_pk: Optional[Digest] = Field(default=None, alias="selkey")
    vote_first: RoundField = Field(default=Round(0), alias="votefst")
    vote_last: RoundField = Field(default=Round(0), alias="votelst")
    vote_key_dilution: Uint64 = Field(default=0, alias="votekd")
    nonparticipation: bool = Field(default=False, alias="nonpart")


class AssetParams(BaseModel):
    """Parameters of an asset, nested under ``apar``."""

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "forbid",
    }

    total: Uint64 = Field(default=0, alias="t")
    decimals: int = Field(default=0, ge=0, le=19, alias="dc")
    default_frozen: bool = Field(default=False, alias="df")
    unit_name: str = Field(default="", max_length=8, alias="un")
    asset_name: str = Field(default="", max_length=32, alias="an")
    url: str = Field(default="", max_length=96, alias="au")
    metadata_hash: Optional[Digest] = Field(default=None, alias="am")
    manager: Optional[Address] = Field(default=None, alias="m")
    reserve: Optional[Address] = Field(default=None, alias="r")
    freeze: Optional[Address] = Field(default=None, alias="f")
    clawback: Optional[Address] = Field(default=None, alias="c")


class AssetConfig(Payload):
    """Creates (no asset id), reconfigures, or destroys (no params) an asset."""

    TYPE: ClassVar[str] = "acfg"

    asset_id: Uint64 = Field(default=0, alias="caid")
    params: Optional[AssetParams] = Field(default=None, alias="apar")


class AssetTransfer(Payload):
    """Moves asset units; also opt-in (self transfer of 0) and clawback."""

    TYPE: ClassVar[str] = "axfer"

    asset_id: Uint64 = Field(default=0, alias="xaid")
    amount: Uint64 = Field(default=0, alias="aamt")
    receiver: Optional[Address] = Field(default=None, alias="arcv")
    close_assets_to: Optional[Address] = Field(default=None, alias="aclose")
    revocation_target: Optional[Address] = Field(default=None, alias="asnd")


class AssetFreeze(Payload):
    """Freezes or unfreezes an account's holding of an asset."""

    TYPE: ClassVar[str] = "afrz"

    asset_id: Uint64 = Field(default=0, alias="faid")
    target: Optional[Address] = Field(default=None, alias="fadd")
    frozen: bool = Field(default=False, alias="afrz")


AnyPayload = Union[Payment, KeyRegistration, AssetConfig, AssetTransfer, AssetFreeze]

PAYLOAD_TYPES: Dict[str, Type[Payload]] = {
    cls.TYPE: cls
    for cls in (Payment, KeyRegistration, AssetConfig, AssetTransfer, AssetFreeze)
}

__all__ = [
    "Payload",
    "Payment",
    "KeyRegistration",
    "AssetParams",
    "AssetConfig",
    "AssetTransfer",
    "AssetFreeze",
    "AnyPayload",
    "PAYLOAD_TYPES",
]
