import pytest

from conftest import MINIMUM_BALANCE, NODE_PRICE
from deploygen.config import GeneratorArgs
from deploygen.data import WalletKey
from deploygen.delegation import (
    DelegationContract,
    check_delegated_staking_args,
    prepare_delegation_contract,
    prepare_delegators,
)
from deploygen.errors import InvalidPubKeyError, InvalidValueError

OWNER = "erd1ulhw20j7jvgfgak5p05kv667k5k9f320sgef5ayxkt9784ql0zssrzyhjp"
CONTRACT = "erd1qqqqqqqqqqqqqpgqvyvaeu6mnr9fq25kt0gyaymtn6zgjmp80zssuqmp6l"


def test_check_delegated_staking_args_requires_delegators() -> None:
    with pytest.raises(InvalidValueError, match="num_delegators"):
        check_delegated_staking_args(GeneratorArgs(num_delegators=0))

    check_delegated_staking_args(GeneratorArgs(num_delegators=1))


def test_prepare_delegation_contract(wallet_converter) -> None:
    args = GeneratorArgs(
        wallet_pub_key_converter=wallet_converter,
        delegation_owner_pk_string=OWNER,
        delegation_owner_nonce=0,
        vm_type="0500",
    )

    contract = prepare_delegation_contract(args)

    assert contract.address == CONTRACT
    assert contract.address_bytes == wallet_converter.decode(CONTRACT)


def test_prepare_delegation_contract_invalid_owner(wallet_converter) -> None:
    args = GeneratorArgs(wallet_pub_key_converter=wallet_converter, delegation_owner_pk_string="erd1nope")

    with pytest.raises(InvalidPubKeyError):
        prepare_delegation_contract(args)


def test_prepare_delegators_spreads_stake() -> None:
    contract = DelegationContract(address="contract", address_bytes=b"\x01" * 32)
    delegators = [WalletKey(pub_key_bytes=bytes([i]) * 32, priv_key_bytes=b"") for i in range(3)]

    used = prepare_delegators(delegators, 2, NODE_PRICE, contract, MINIMUM_BALANCE)

    # 5000 over 3 delegators: 1666 each, delegator 0 takes the 2 left over
    assert [d.delegated_value for d in delegators] == [1668, 1666, 1666]
    assert all(d.balance == MINIMUM_BALANCE for d in delegators)
    assert all(d.delegated_pub_key_bytes == contract.address_bytes for d in delegators)
    assert used == 2 * NODE_PRICE + 3 * MINIMUM_BALANCE
