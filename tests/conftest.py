"""
Test bootstrap:
- Make tests/helpers importable
- Provide deterministic keys, accounts and a sample payment
"""
import pathlib
import sys

import pytest

TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers.keys import RFC8032_SEED, SEED_A, SEED_B, SEED_C, make_payment  # noqa: E402

from algosign.crypto import Ed25519PrivateKey  # noqa: E402
from algosign.signers import Account, MultisigAccount  # noqa: E402


@pytest.fixture
def rfc_key():
    """RFC 8032 test vector 1 private key."""
    return Ed25519PrivateKey(RFC8032_SEED)


@pytest.fixture
def alice():
    return Account.from_seed(SEED_A)


@pytest.fixture
def bob():
    return Account.from_seed(SEED_B)


@pytest.fixture
def carol():
    return Account.from_seed(SEED_C)


@pytest.fixture
def payment(alice, bob):
    """5 algo payment from alice to bob."""
    return make_payment(alice.address, bob.address)


@pytest.fixture
def msig_account(alice, bob, carol):
    """2-of-3 multisig over alice, bob and carol."""
    return MultisigAccount(1, 2, [alice.public_key, bob.public_key, carol.public_key])
