"""
Arithmetic and account/node builders shared by all generation strategies.

Every strategy ends the same way: whatever the stakes and delegations leave of
the total supply is split across the balance-holding wallets, and the first of
those wallets takes the leftover so that the supply is conserved exactly.
"""
import logging
from typing import Iterable, List, Sequence, Tuple

from .data import BlsKey, DelegationData, InitialAccount, InitialNode, WalletKey
from .errors import NilPubKeyConverterError, TotalSupplyTooSmallError
from .keygen import ValidatorKeyGenerator, WalletKeyGenerator

log = logging.getLogger(__name__)


def check_pub_key_converters(wallet_converter, validator_converter) -> None:
    if wallet_converter is None:
        raise NilPubKeyConverterError("the wallet_pub_key_converter")
    if validator_converter is None:
        raise NilPubKeyConverterError("the validator_pub_key_converter")


def prepare_key_generators(args, randomizer) -> Tuple[ValidatorKeyGenerator, WalletKeyGenerator]:
    vkg = ValidatorKeyGenerator(args.key_generator_for_validators)
    wkg = WalletKeyGenerator(
        args.key_generator_for_wallets,
        randomizer,
        args.node_price,
        args.num_shards,
        args.generate_in_all_shards,
    )
    return vkg, wkg


def compute_wallet_balance(
    num_total_wallet_keys: int,
    balance: int,
    richest_account_mode: bool,
    minimum_balance: int,
) -> Tuple[int, int]:
    """
    Return (per-wallet balance, remainder).

    Normally this is the floor division of `balance` over the wallets and its
    remainder. In richest account mode, when the equal share would exceed
    `minimum_balance`, every wallet gets exactly `minimum_balance` and all the
    rest is returned as the remainder.
    """
    wallet_balance, remainder = divmod(balance, num_total_wallet_keys)
    if wallet_balance <= minimum_balance or not richest_account_mode:
        return wallet_balance, remainder

    return minimum_balance, balance - num_total_wallet_keys * minimum_balance


def compute_remaining_balance(total_supply: int, used_balance: int) -> int:
    balance = total_supply - used_balance
    if balance < 0:
        raise TotalSupplyTooSmallError(total_supply, used_balance)
    return balance


def distribute_balance(
    wallet_keys: Sequence[WalletKey],
    additional_keys: Sequence[WalletKey],
    balance: int,
    richest_account_mode: bool,
    minimum_balance: int,
) -> None:
    """Set the balance of every wallet; the first one (the richest account) takes the remainder."""
    receivers = list(wallet_keys) + list(additional_keys)
    wallet_balance, remainder = compute_wallet_balance(
        len(receivers), balance, richest_account_mode, minimum_balance
    )
    for key in receivers:
        key.balance = wallet_balance
    receivers[0].balance += remainder

    log.debug(
        "distributed %d across %d wallets: %d each, remainder %d",
        balance, len(receivers), wallet_balance, remainder,
    )


def generate_validators_and_observers(
    vkg: ValidatorKeyGenerator,
    num_validators: int,
    num_observers: int,
) -> Tuple[List[BlsKey], List[BlsKey]]:
    return vkg.generate_keys(num_validators), vkg.generate_keys(num_observers)


# -------------------- Initial accounts --------------------

def staked_account(key: WalletKey, converter) -> InitialAccount:
    return InitialAccount(
        address=converter.encode(key.pub_key_bytes),
        supply=key.balance + key.staked_value,
        balance=key.balance,
        staking_value=key.staked_value,
        delegation=DelegationData(),
    )


def balance_account(key: WalletKey, converter) -> InitialAccount:
    return InitialAccount(
        address=converter.encode(key.pub_key_bytes),
        supply=key.balance,
        balance=key.balance,
        staking_value=0,
        delegation=DelegationData(),
    )


def delegator_account(key: WalletKey, converter) -> InitialAccount:
    return InitialAccount(
        address=converter.encode(key.pub_key_bytes),
        supply=key.balance + key.delegated_value,
        balance=key.balance,
        staking_value=0,
        delegation=DelegationData(
            address=converter.encode(key.delegated_pub_key_bytes),
            value=key.delegated_value,
        ),
    )


# -------------------- Initial nodes --------------------

def compute_initial_nodes_for_wallet_key(
    key: WalletKey,
    wallet_converter,
    validator_converter,
    initial_rating: int,
) -> List[InitialNode]:
    wallet_address = wallet_converter.encode(key.pub_key_bytes)
    return [
        InitialNode(
            pub_key=validator_converter.encode(bls_key.pub_key_bytes),
            address=wallet_address,
            initial_rating=initial_rating,
        )
        for bls_key in key.bls_keys
    ]


def compute_initial_nodes_for_wallet_keys(
    wallet_keys: Iterable[WalletKey],
    wallet_converter,
    validator_converter,
    initial_rating: int,
) -> List[InitialNode]:
    nodes = []
    for key in wallet_keys:
        nodes.extend(
            compute_initial_nodes_for_wallet_key(key, wallet_converter, validator_converter, initial_rating)
        )
    return nodes


def compute_delegated_initial_nodes(
    bls_keys: Iterable[BlsKey],
    contract_address: str,
    validator_converter,
    initial_rating: int,
) -> List[InitialNode]:
    return [
        InitialNode(
            pub_key=validator_converter.encode(bls_key.pub_key_bytes),
            address=contract_address,
            initial_rating=initial_rating,
        )
        for bls_key in bls_keys
    ]
