"""
Collaborator contract tests, using in-memory node doubles.
"""

import base64

import pytest

from helpers.keys import GENESIS_HASH, SEED_A

from algosign.client import ParamsSource, TransactionSubmitter, send_signed, suggested_params
from algosign.runtime.errors import EncodingInvariantError
from algosign.signers import sign_transaction
from algosign.tx import Payment, Transaction, assign_group_id


class FakeNode:
    """Records submissions and serves fixed parameters."""

    def __init__(self):
        self.submitted = []

    def raw_transaction(self, data: bytes) -> str:
        self.submitted.append(data)
        return "TXID"

    def account_information(self, address: str):
        return {"address": address, "amount": 0}

    def transaction_params(self):
        return {
            "fee": 0,
            "genesis-hash": base64.b64encode(GENESIS_HASH).decode("ascii"),
            "genesis-id": "testnet-v1.0",
            "last-round": 77,
            "min-fee": 1000,
        }


class TestClientContract:
    """Test the protocols and submission helper."""

    def test_fake_satisfies_protocols(self):
        node = FakeNode()
        assert isinstance(node, TransactionSubmitter)
        assert isinstance(node, ParamsSource)

    def test_suggested_params(self):
        params = suggested_params(FakeNode(), validity_window=5)
        assert params.first_valid == 77
        assert params.last_valid == 82

    def test_send_single(self, payment):
        node = FakeNode()
        stxn = sign_transaction(payment, SEED_A)
        assert send_signed(node, stxn) == "TXID"
        assert node.submitted == [stxn.encode()]

    def test_send_group_concatenates(self, alice, bob):
        node = FakeNode()
        params = suggested_params(node)
        txns = assign_group_id([
            Transaction.from_params(params, alice.address, Payment(receiver=bob.address, amount=1)),
            Transaction.from_params(params, alice.address, Payment(receiver=bob.address, amount=2)),
        ])
        stxns = [alice.sign_transaction(t) for t in txns]
        send_signed(node, *stxns)
        assert node.submitted == [stxns[0].encode() + stxns[1].encode()]

    def test_send_nothing(self):
        with pytest.raises(EncodingInvariantError):
            send_signed(FakeNode())
