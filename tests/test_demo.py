import pytest

from deploygen.data import InitialAccount
from deploygen.demo import DEMO_ADDRESSES, apply_demo_addresses
from deploygen.errors import InvalidPubKeyError, InvalidValueError


def _accounts(n: int):
    return [InitialAccount(address=f"addr{i}", supply=i, balance=i, staking_value=0) for i in range(n)]


def test_apply_demo_addresses(wallet_converter) -> None:
    accounts = _accounts(6)

    apply_demo_addresses(accounts, wallet_converter)

    assert [a.address for a in accounts[:2]] == ["addr0", "addr1"]
    assert [a.address for a in accounts[2:]] == list(DEMO_ADDRESSES.values())
    assert [a.supply for a in accounts] == list(range(6))


def test_apply_demo_addresses_too_few_accounts(wallet_converter) -> None:
    with pytest.raises(InvalidValueError):
        apply_demo_addresses(_accounts(3), wallet_converter)


def test_apply_demo_addresses_invalid_address(wallet_converter) -> None:
    accounts = _accounts(1)

    with pytest.raises(InvalidPubKeyError):
        apply_demo_addresses(accounts, wallet_converter, {"faucet": "erd1invalid"})
    assert accounts[0].address == "addr0"


def test_apply_demo_addresses_is_all_or_nothing(wallet_converter) -> None:
    accounts = _accounts(2)
    overrides = {"faucet": DEMO_ADDRESSES["faucet"], "web": "erd1bad"}

    with pytest.raises(InvalidPubKeyError):
        apply_demo_addresses(accounts, wallet_converter, overrides)
    assert [a.address for a in accounts] == ["addr0", "addr1"]
