import pytest

from conftest import MINIMUM_BALANCE, NODE_PRICE, TOTAL_SUPPLY
from deploygen.checker import InitialAccountsChecker
from deploygen.delegated import DelegatedStakingGenerator
from deploygen.delegation import prepare_delegation_contract
from deploygen.errors import (
    InvalidNumberOfWalletKeysError,
    InvalidValueError,
    NilPubKeyConverterError,
    TotalSupplyTooSmallError,
)


@pytest.fixture
def delegated_args(generator_args):
    generator_args.num_validator_bls_keys = 33
    generator_args.num_observer_bls_keys = 3
    generator_args.num_delegators = 47
    generator_args.num_additional_wallet_keys = 3
    return generator_args


def test_delegated_constructor_errors(generator_args) -> None:
    with pytest.raises(InvalidValueError, match="num_delegators"):
        DelegatedStakingGenerator(generator_args)

    generator_args.num_delegators = 1
    generator_args.validator_pub_key_converter = None
    with pytest.raises(NilPubKeyConverterError):
        DelegatedStakingGenerator(generator_args)


def test_delegated_generate(delegated_args) -> None:
    output = DelegatedStakingGenerator(delegated_args).generate()

    assert len(output.validator_bls_keys) == 33
    assert len(output.observer_bls_keys) == 3
    assert len(output.initial_accounts) == 33 + 3 + 47
    assert len(output.wallet_keys) == 33
    assert len(output.additional_keys) == 3
    assert len(output.initial_nodes) == 33
    assert len(output.delegator_keys) == 47

    contract = prepare_delegation_contract(delegated_args).address
    assert all(node.address == contract for node in output.initial_nodes)
    assert all(account.staking_value == 0 for account in output.initial_accounts)

    delegations = [account.delegation for account in output.initial_accounts[:47]]
    assert all(d.address == contract for d in delegations)
    assert sum(d.value for d in delegations) == 33 * NODE_PRICE

    InitialAccountsChecker(NODE_PRICE, TOTAL_SUPPLY).check_initial_accounts(output.initial_accounts)


def test_delegated_generate_richest_account(delegated_args) -> None:
    delegated_args.richest_account_mode = True

    output = DelegatedStakingGenerator(delegated_args).generate()

    InitialAccountsChecker(NODE_PRICE, TOTAL_SUPPLY).check_initial_accounts(output.initial_accounts)
    for i, account in enumerate(output.initial_accounts):
        if i == 47:
            assert account.balance != MINIMUM_BALANCE
        else:
            assert account.balance == MINIMUM_BALANCE


def test_delegated_generate_without_validators(generator_args) -> None:
    generator_args.num_delegators = 2

    with pytest.raises(InvalidNumberOfWalletKeysError):
        DelegatedStakingGenerator(generator_args).generate()


def test_delegated_generate_supply_misses_claim_balances(delegated_args) -> None:
    # covers the delegated stake but not the delegators' claim balances
    delegated_args.total_supply = 33 * NODE_PRICE

    with pytest.raises(TotalSupplyTooSmallError) as exc:
        DelegatedStakingGenerator(delegated_args).generate()
    assert exc.value.used_balance == 33 * NODE_PRICE + 47 * MINIMUM_BALANCE
