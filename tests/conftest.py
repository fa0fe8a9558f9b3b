"""Shared fixtures for tracer_utils tests."""

import pytest
from eth_account import Account
from eth_utils import to_checksum_address

from tracer_utils import BookLevel, LocalAccountSigner, Order

TEST_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
OTHER_KEY = "0x" + "11" * 32


@pytest.fixture
def account():
    return Account.from_key(TEST_KEY)


@pytest.fixture
def other_account():
    return Account.from_key(OTHER_KEY)


@pytest.fixture
def signer(account, other_account):
    return LocalAccountSigner(account, other_account)


@pytest.fixture
def trader_address() -> str:
    return to_checksum_address("0x" + "ab" * 20)


@pytest.fixture
def tracer_address() -> str:
    return to_checksum_address("0x" + "cd" * 20)


@pytest.fixture
def make_order(account, tracer_address):
    def _make(**overrides) -> Order:
        fields = dict(
            user=account.address,
            target_tracer=tracer_address,
            side=True,
            price=100 * 10**18,
            amount=5 * 10**18,
            expiration=1_700_000_000,
            nonce=1,
        )
        fields.update(overrides)
        return Order(**fields)
    return _make


@pytest.fixture
def book():
    return [
        BookLevel(price=1.0, amount=10),
        BookLevel(price=1.1, amount=20),
        BookLevel(price=1.2, amount=30),
    ]
