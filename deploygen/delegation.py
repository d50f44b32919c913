"""Shared pieces of the strategies that stake through the delegation contract."""
import logging
from dataclasses import dataclass
from typing import Sequence

from .config import GeneratorArgs
from .crypto import generate_sc_address
from .data import WalletKey
from .errors import InvalidValueError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DelegationContract:
    address: str
    address_bytes: bytes


def check_delegated_staking_args(args: GeneratorArgs) -> None:
    if args.num_delegators == 0:
        raise InvalidValueError("the num_delegators")


def prepare_delegation_contract(args: GeneratorArgs) -> DelegationContract:
    """Derive the delegation contract address from its owner, the owner's nonce and the vm type."""
    converter = args.wallet_pub_key_converter
    address = generate_sc_address(
        args.delegation_owner_pk_string,
        args.delegation_owner_nonce,
        args.vm_type,
        converter,
    )
    log.info("delegation contract address: %s", address)
    return DelegationContract(address=address, address_bytes=converter.decode(address))


def prepare_delegators(
    delegators: Sequence[WalletKey],
    num_delegated_nodes: int,
    node_price: int,
    contract: DelegationContract,
    minimum_balance: int,
) -> int:
    """
    Spread the stake of `num_delegated_nodes` nodes over the delegators and give
    each of them `minimum_balance` to pay for claiming rewards. Delegator 0 takes
    the remainder of the division.

    Returns the amount taken out of the total supply.
    """
    total_delegated = num_delegated_nodes * node_price
    delegated, remainder = divmod(total_delegated, len(delegators))

    for i, wallet in enumerate(delegators):
        wallet.delegated_pub_key_bytes = contract.address_bytes
        wallet.delegated_value = delegated
        if i == 0:
            wallet.delegated_value += remainder
        wallet.balance = minimum_balance

    return total_delegated + len(delegators) * minimum_balance
