"""
Collaborator contract for node clients.

algosign performs no network I/O. Anything that can fetch suggested
parameters or accept raw signed transactions (an algod HTTP client, a test
double) satisfies these protocols structurally.
"""

from __future__ import annotations
import logging
from typing import Any, Mapping, Protocol, runtime_checkable

from .runtime.errors import EncodingInvariantError
from .tx.params import DEFAULT_VALIDITY_WINDOW, SuggestedParams
from .tx.signed import SignedTransaction, encode_group

logger = logging.getLogger(__name__)


@runtime_checkable
class TransactionSubmitter(Protocol):
    """Accepts encoded signed transactions."""

    def raw_transaction(self, data: bytes) -> str:
        """Submit concatenated signed transactions, returning the first id."""
        ...

    def account_information(self, address: str) -> Mapping[str, Any]:
        ...


@runtime_checkable
class ParamsSource(Protocol):
    """Reports suggested transaction parameters."""

    def transaction_params(self) -> Mapping[str, Any]:
        """The node's ``/v2/transactions/params`` JSON."""
        ...


def suggested_params(source: ParamsSource,
                     validity_window: int = DEFAULT_VALIDITY_WINDOW) -> SuggestedParams:
    """Fetch and validate suggested parameters from a params source."""
    return SuggestedParams.from_response(source.transaction_params(), validity_window)


def send_signed(submitter: TransactionSubmitter, *stxns: SignedTransaction) -> str:
    """
    Encode signed transactions and hand them to a submitter.

    Grouped transactions are concatenated in order and submitted together.

    Returns:
        Whatever id the submitter reports

    Raises:
        EncodingInvariantError: If no transactions are given
    """
    if not stxns:
        raise EncodingInvariantError("no signed transactions to send")
    payload = encode_group(stxns)
    logger.debug("Submitting %d signed transaction(s), first id %s", len(stxns), stxns[0].id())
    return submitter.raw_transaction(payload)


__all__ = ["TransactionSubmitter", "ParamsSource", "suggested_params", "send_signed"]
