"""
Suggested transaction parameters.

The node's ``/v2/transactions/params`` response, as plain validated inputs for
transaction construction. Field aliases are the node's JSON names.
"""

from __future__ import annotations
import base64
import binascii
from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator, model_validator

from ..constants import MIN_TXN_FEE
from ..types import MicroAlgos, Round
from .fields import Digest, MicroAlgosField, RoundField, ZERO_DIGEST

DEFAULT_VALIDITY_WINDOW = 1000


class SuggestedParams(BaseModel):
    """
    Parameters for building a transaction.

    ``fee`` is microalgos per byte unless ``flat_fee`` is set, in which case
    it is the whole fee.
    """

    fee: MicroAlgosField = Field(default=MicroAlgos(0), description="Fee per byte, or flat fee")
    min_fee: MicroAlgosField = Field(default=MicroAlgos(MIN_TXN_FEE), alias="min-fee")
    flat_fee: bool = Field(default=False, alias="flat-fee")
    first_valid: RoundField = Field(default=Round(0), alias="first-round")
    last_valid: RoundField = Field(default=Round(0), alias="last-valid-round")
    genesis_id: str = Field(default="", alias="genesis-id")
    genesis_hash: Digest = Field(default=ZERO_DIGEST, alias="genesis-hash")
    consensus_version: str = Field(default="", alias="consensus-version")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("genesis_hash", mode="before")
    @classmethod
    def parse_genesis_hash(cls, v: Any) -> Any:
        """Accept the node's base64 text as well as raw bytes."""
        if isinstance(v, str):
            try:
                return base64.b64decode(v, validate=True)
            except (binascii.Error, ValueError) as e:
                raise ValueError(f"genesis hash is not base64: {e}")
        return v

    @model_validator(mode="after")
    def check_window(self) -> SuggestedParams:
        if self.last_valid < self.first_valid:
            raise ValueError("last valid round precedes first valid round")
        return self

    @classmethod
    def from_response(cls, response: Mapping[str, Any],
                      validity_window: int = DEFAULT_VALIDITY_WINDOW) -> SuggestedParams:
        """
        Build parameters from a node params response.

        The response's ``last-round`` becomes the first valid round and the
        last valid round is ``validity_window`` rounds later.

        Args:
            response: Decoded JSON from the node
            validity_window: Number of rounds the transaction stays valid

        Returns:
            SuggestedParams
        """
        last_round = int(response.get("last-round", 0))
        return cls(
            fee=response.get("fee", 0),
            min_fee=response.get("min-fee", MIN_TXN_FEE),
            first_valid=last_round,
            last_valid=last_round + validity_window,
            genesis_id=response.get("genesis-id", ""),
            genesis_hash=response.get("genesis-hash", ZERO_DIGEST),
            consensus_version=response.get("consensus-version", ""),
        )


__all__ = ["SuggestedParams", "DEFAULT_VALIDITY_WINDOW"]
