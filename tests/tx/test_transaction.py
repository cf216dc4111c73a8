"""
Transaction model and canonical encoding tests.
"""

import msgpack
import pytest
from pydantic import ValidationError

from helpers.keys import GENESIS_HASH, RFC8032_ADDRESS, make_payment
from helpers.vectors import PAYMENT_ENCODED, PAYMENT_TXID, RECEIVER_ADDRESS

from algosign.codec import canonical
from algosign.codec.hashes import sha512_256
from algosign.crypto.address import ZERO_ADDRESS
from algosign.runtime.errors import DecodingError, EncodingInvariantError, InvalidAddressError
from algosign.types import MicroAlgos, Round
from algosign.tx import (
    AssetConfig,
    AssetFreeze,
    AssetParams,
    AssetTransfer,
    KeyRegistration,
    Payment,
    SuggestedParams,
    Transaction,
)


class TestMinimalPayment:
    """A payment with only the required fields set."""

    @pytest.fixture
    def minimal(self, alice, bob):
        return Transaction(
            sender=alice.address,
            fee=1000,
            first_valid=100,
            last_valid=1100,
            genesis_id="testnet-v1.0",
            payload=Payment(receiver=bob.address, amount=5_000_000),
        )

    def test_wire_keys(self, minimal):
        assert list(minimal.to_wire()) == ["amt", "fee", "fv", "gen", "lv", "rcv", "snd", "type"]

    def test_no_optional_fields(self, minimal):
        wire = minimal.to_wire()
        for key in ("note", "close", "gh", "grp", "lx", "rekey"):
            assert key not in wire

    def test_wire_values(self, minimal, alice, bob):
        wire = minimal.to_wire()
        assert wire["snd"] == alice.public_key
        assert wire["rcv"] == bob.public_key
        assert wire["amt"] == 5_000_000
        assert wire["type"] == "pay"

    def test_stable_digest(self, minimal, alice, bob):
        rebuilt = Transaction(
            payload=Payment(amount=5_000_000, receiver=bob.address),
            genesis_id="testnet-v1.0",
            last_valid=1100,
            first_valid=100,
            fee=1000,
            sender=alice.address,
        )
        assert rebuilt.encode() == minimal.encode()
        assert rebuilt.raw_id() == minimal.raw_id()

    def test_id(self, minimal):
        assert minimal.raw_id() == sha512_256(b"TX" + minimal.encode())
        assert len(minimal.id()) == 52
        assert "=" not in minimal.id()

    def test_bytes_to_sign_prefix(self, minimal):
        assert minimal.bytes_to_sign() == b"TX" + minimal.encode()


class TestZeroOmission:
    """Zero values vanish on the wire and come back as defaults."""

    def test_all_zero_digest_omitted(self, alice, bob):
        txn = make_payment(alice.address, bob.address, genesis_hash=bytes(32), lease=bytes(32))
        wire = txn.to_wire()
        assert "gh" not in wire
        assert "lx" not in wire

    def test_zero_address_omitted(self, alice):
        txn = make_payment(alice.address, ZERO_ADDRESS)
        assert "rcv" not in txn.to_wire()

    def test_zero_amount_omitted(self, alice, bob):
        assert "amt" not in make_payment(alice.address, bob.address, amount=0).to_wire()

    def test_decode_restores_absent_fields(self, alice):
        txn = make_payment(alice.address, ZERO_ADDRESS, amount=0)
        decoded = Transaction.decode(txn.encode())
        assert decoded == txn
        assert decoded.payload.receiver == ZERO_ADDRESS
        assert decoded.payload.amount == 0
        assert decoded.note == b""
        assert decoded.lease is None

    def test_round_trip_with_optional_fields(self, alice, bob, carol):
        txn = make_payment(
            alice.address,
            bob.address,
            note=b"hello",
            lease=b"\x07" * 32,
            rekey_to=carol.address,
            payload=Payment(receiver=bob.address, amount=1, close_remainder_to=carol.address),
        )
        decoded = Transaction.decode(txn.encode())
        assert decoded == txn
        assert decoded.to_wire()["close"] == carol.public_key


class TestPayloadVariants:
    """Each payload encodes under its own type tag."""

    def test_keyreg(self, alice):
        payload = KeyRegistration(
            vote_pk=b"\x01" * 32,
            selection_pk=b"\x02" * 32,
            vote_first=10,
            vote_last=1000,
            vote_key_dilution=100,
        )
        txn = make_payment(alice.address, alice.address, payload=payload)
        wire = txn.to_wire()
        assert wire["type"] == "keyreg"
        assert wire["votekey"] == b"\x01" * 32
        assert "nonpart" not in wire
        assert Transaction.decode(txn.encode()) == txn

    def test_asset_config_nested_params(self, alice):
        params = AssetParams(total=1000, decimals=2, unit_name="TOK", asset_name="Token", manager=alice.address)
        txn = make_payment(alice.address, alice.address, payload=AssetConfig(params=params))
        wire = txn.to_wire()
        assert wire["type"] == "acfg"
        assert "caid" not in wire
        assert list(wire["apar"]) == ["an", "dc", "m", "t", "un"]
        assert Transaction.decode(txn.encode()) == txn

    def test_asset_destroy_has_no_params(self, alice):
        txn = make_payment(alice.address, alice.address, payload=AssetConfig(asset_id=42))
        wire = txn.to_wire()
        assert wire["caid"] == 42
        assert "apar" not in wire

    def test_asset_transfer(self, alice, bob):
        payload = AssetTransfer(asset_id=42, amount=3, receiver=bob.address)
        txn = make_payment(alice.address, bob.address, payload=payload)
        wire = txn.to_wire()
        assert wire["type"] == "axfer"
        assert wire["arcv"] == bob.public_key
        assert Transaction.decode(txn.encode()) == txn

    def test_asset_freeze(self, alice, bob):
        payload = AssetFreeze(asset_id=42, target=bob.address, frozen=True)
        txn = make_payment(alice.address, bob.address, payload=payload)
        assert txn.to_wire()["afrz"] is True
        assert Transaction.decode(txn.encode()) == txn

    def test_asset_params_limits(self):
        with pytest.raises(ValidationError):
            AssetParams(unit_name="TOOLONGNAME")
        with pytest.raises(ValidationError):
            AssetParams(decimals=20)


class TestTransactionInvariants:
    """Construction and decoding failures."""

    def test_payload_required(self, alice):
        with pytest.raises(ValidationError):
            Transaction(sender=alice.address)

    def test_bypassed_payload_caught_at_encode(self, alice):
        txn = Transaction.model_construct(sender=alice.address)
        with pytest.raises(EncodingInvariantError):
            txn.encode()

    def test_unknown_type_rejected(self, payment):
        wire = dict(payment.to_wire())
        wire["type"] = "appl"
        with pytest.raises(EncodingInvariantError):
            Transaction.from_wire(wire)

    def test_unknown_field_rejected(self, payment):
        wire = dict(payment.to_wire())
        wire["xyz"] = 1
        with pytest.raises(DecodingError):
            Transaction.from_wire(wire)

    def test_field_of_other_payload_rejected(self, payment):
        wire = dict(payment.to_wire())
        wire["xaid"] = 1
        with pytest.raises(DecodingError):
            Transaction.from_wire(wire)

    def test_garbage_bytes_rejected(self):
        with pytest.raises(DecodingError):
            Transaction.decode(b"\xc1")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            Payment(amount=-1)

    def test_amount_overflow_rejected(self):
        with pytest.raises(ValidationError):
            Payment(amount=2 ** 64)

    def test_note_limit(self, alice, bob):
        with pytest.raises(ValidationError):
            make_payment(alice.address, bob.address, note=b"x" * 1025)

    def test_frozen(self, payment):
        with pytest.raises(ValidationError):
            payment.fee = 5

    def test_bad_address_rejected(self, alice):
        with pytest.raises((InvalidAddressError, ValidationError)):
            Payment(receiver=ZERO_ADDRESS[:-1] + "A")

    def test_float_never_reaches_encoder(self, alice, bob):
        with pytest.raises(ValidationError):
            make_payment(alice.address, bob.address, fee=1.5)


class TestUnitTypes:
    """Amount and round fields carry their unit types."""

    def test_fields_hold_unit_types(self, payment):
        assert isinstance(payment.fee, MicroAlgos)
        assert isinstance(payment.payload.amount, MicroAlgos)
        assert isinstance(payment.first_valid, Round)
        assert isinstance(payment.last_valid, Round)
        assert payment.payload.amount.to_algos() == 5

    def test_defaults_hold_unit_types(self, alice):
        txn = Transaction(sender=alice.address, payload=Payment())
        assert isinstance(txn.fee, MicroAlgos)
        assert isinstance(txn.first_valid, Round)

    def test_wire_values_are_plain_ints(self, payment):
        wire = payment.to_wire()
        for key in ("fee", "fv", "lv", "amt"):
            assert type(wire[key]) is int

    def test_fee_from_params_is_microalgos(self, alice, bob):
        params = SuggestedParams(fee=10, first_valid=1, last_valid=2)
        txn = Transaction.from_params(params, alice.address, Payment(receiver=bob.address, amount=1))
        assert isinstance(txn.fee, MicroAlgos)
        assert isinstance(params.first_valid, Round)

    def test_round_overflow_rejected(self, alice):
        with pytest.raises(ValidationError):
            Transaction(sender=alice.address, last_valid=2 ** 64, payload=Payment())

class TestFromParams:
    """Fee computation from suggested parameters."""

    def test_min_fee_floor(self, alice, bob):
        params = SuggestedParams(fee=0, first_valid=10, last_valid=20, genesis_id="net", genesis_hash=GENESIS_HASH)
        txn = Transaction.from_params(params, alice.address, Payment(receiver=bob.address, amount=1))
        assert txn.fee == 1000
        assert txn.first_valid == 10
        assert txn.last_valid == 20
        assert txn.genesis_hash == GENESIS_HASH

    def test_per_byte_fee(self, alice, bob):
        params = SuggestedParams(fee=100, first_valid=10, last_valid=20)
        payload = Payment(receiver=bob.address, amount=1)
        txn = Transaction.from_params(params, alice.address, payload)
        unpriced = txn.model_copy(update={"fee": 0})
        assert txn.fee == max(1000, 100 * unpriced.estimate_size())
        assert txn.fee > 1000

    def test_flat_fee(self, alice, bob):
        params = SuggestedParams(fee=2500, flat_fee=True, first_valid=10, last_valid=20)
        txn = Transaction.from_params(params, alice.address, Payment(receiver=bob.address, amount=1))
        assert txn.fee == 2500

    def test_estimate_size_includes_signature(self, payment):
        assert payment.estimate_size() > len(payment.encode()) + 64

    def test_assembly_order_independent(self, alice, bob):
        a = Transaction(sender=alice.address, fee=1000, payload=Payment(receiver=bob.address, amount=7))
        b = Transaction(payload=Payment(amount=7, receiver=bob.address), fee=1000, sender=alice.address)
        assert canonical.encode(a.to_wire()) == canonical.encode(b.to_wire())


class TestReferenceEncoding:
    """Encodings pinned to bytes produced outside this package."""

    @pytest.fixture
    def minimal(self):
        return Transaction(
            sender=RFC8032_ADDRESS,
            fee=1000,
            first_valid=100,
            last_valid=1100,
            genesis_id="testnet-v1.0",
            payload=Payment(receiver=RECEIVER_ADDRESS, amount=5_000_000),
        )

    def test_encoded_bytes(self, minimal):
        assert minimal.encode() == PAYMENT_ENCODED

    def test_txid(self, minimal):
        assert minimal.id() == PAYMENT_TXID

    def test_decode_reference_bytes(self, minimal):
        assert Transaction.decode(PAYMENT_ENCODED) == minimal


class TestCanonicalDecoding:
    """Only the canonical encoding of a transaction decodes."""

    @staticmethod
    def _repack(wire):
        return msgpack.packb(wire, use_bin_type=True)

    def test_canonical_bytes_accepted(self, payment):
        assert Transaction.decode(payment.encode()) == payment

    def test_float_fee_rejected(self, payment):
        wire = dict(payment.to_wire())
        wire["fee"] = float(wire["fee"])
        with pytest.raises(DecodingError):
            Transaction.decode(self._repack(wire))

    def test_str_note_rejected(self, alice, bob):
        wire = dict(make_payment(alice.address, bob.address, note=b"hello").to_wire())
        wire["note"] = "hello"
        with pytest.raises(DecodingError):
            Transaction.decode(self._repack(wire))

    def test_explicit_nil_rejected(self, payment):
        wire = dict(payment.to_wire())
        wire["grp"] = None
        with pytest.raises(DecodingError):
            Transaction.decode(self._repack(wire))

    def test_unsorted_keys_rejected(self, payment):
        wire = dict(reversed(list(payment.to_wire().items())))
        with pytest.raises(DecodingError):
            Transaction.decode(self._repack(wire))

    def test_wide_integer_rejected(self, payment):
        # fee 1000 as uint64 instead of uint16
        data = payment.encode().replace(b"\xa3fee\xcd\x03\xe8", b"\xa3fee\xcf" + (1000).to_bytes(8, "big"))
        assert data != payment.encode()
        assert msgpack.unpackb(data)["fee"] == 1000
        with pytest.raises(DecodingError):
            Transaction.decode(data)
