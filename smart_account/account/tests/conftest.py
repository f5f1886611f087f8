import os

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from smart_account.account.services.operator_smart_account import OperatorSmartAccount
from smart_account.account.store.in_memory_ownership_store import InMemoryOwnershipStore
from smart_account.host.ledger.in_memory_host_ledger import InMemoryHostLedger


def sign_digest(private_key, digest: bytes) -> bytes:
    """Signs the personal-message form of `digest`, the way a wallet does."""
    return bytes(Account.sign_message(encode_defunct(primitive=digest), private_key).signature)


@pytest.fixture
def owner():
    return Account.create()


@pytest.fixture
def operator():
    return Account.create()


@pytest.fixture
def stranger():
    return Account.create()


@pytest.fixture
def digest():
    return os.urandom(32)


@pytest.fixture
def ledger():
    return InMemoryHostLedger()


@pytest.fixture
def ownership_store(owner):
    return InMemoryOwnershipStore(owner.address)


@pytest.fixture
def account(ledger, operator, ownership_store):
    account = OperatorSmartAccount(
        address=Account.create().address,
        operator=operator.address,
        ownership_store=ownership_store,
        ledger=ledger,
    )
    ledger.credit(account.address, 100)
    return account


@pytest.fixture
def sign():
    return sign_digest
