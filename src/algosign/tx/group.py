"""
Atomic transaction groups.

The group id is SHA-512/256 over ``b"TG"`` and the canonical encoding of
``{"txlist": [raw ids]}``, where each raw id is computed with the group field
unset.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from ..codec import canonical
from ..codec.hashes import prefixed_hash
from ..constants import TX_GROUP_PREFIX
from ..runtime.errors import EncodingInvariantError
from .transaction import Transaction

logger = logging.getLogger(__name__)

MAX_GROUP_SIZE = 16


def compute_group_id(txns: Sequence[Transaction]) -> bytes:
    """
    Compute the group id for a sequence of transactions.

    Raises:
        EncodingInvariantError: If the group is empty, too large, or a
            transaction already belongs to a group
    """
    if not txns:
        raise EncodingInvariantError("cannot group zero transactions")
    if len(txns) > MAX_GROUP_SIZE:
        raise EncodingInvariantError(f"group exceeds {MAX_GROUP_SIZE} transactions")
    for txn in txns:
        if txn.group is not None and any(txn.group):
            raise EncodingInvariantError(f"transaction {txn.id()} already has a group id")
    payload = canonical.encode({"txlist": [txn.raw_id() for txn in txns]})
    return prefixed_hash(TX_GROUP_PREFIX, payload)


def assign_group_id(txns: Sequence[Transaction], address: Optional[str] = None) -> List[Transaction]:
    """
    Return copies of the transactions with their group id set.

    Args:
        txns: Transactions forming the group, in order
        address: If given, only transactions sent by this address are returned

    Returns:
        New transactions carrying the group id
    """
    group_id = compute_group_id(txns)
    grouped = [txn.model_copy(update={"group": group_id}) for txn in txns]
    logger.debug("Assigned group of %d transactions", len(grouped))
    if address is None:
        return grouped
    return [txn for txn in grouped if txn.sender == address]


__all__ = ["compute_group_id", "assign_group_id", "MAX_GROUP_SIZE"]
