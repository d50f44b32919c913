import logging
from typing import List, Tuple

from .base import (
    balance_account,
    check_pub_key_converters,
    compute_delegated_initial_nodes,
    compute_initial_nodes_for_wallet_keys,
    compute_remaining_balance,
    delegator_account,
    distribute_balance,
    generate_validators_and_observers,
    prepare_key_generators,
    staked_account,
)
from .config import GeneratorArgs
from .data import BlsKey, GeneratorOutput, WalletKey
from .delegation import check_delegated_staking_args, prepare_delegation_contract, prepare_delegators
from .errors import InvalidNumberOfWalletKeysError, InvalidValueError, NilRandomizerError

log = logging.getLogger(__name__)


class MixedStakingGenerator:
    """
    The first `num_delegated_nodes` validators are staked through the delegation
    contract, the rest are staked directly by owner wallets.
    """

    def __init__(self, args: GeneratorArgs):
        check_pub_key_converters(args.wallet_pub_key_converter, args.validator_pub_key_converter)
        check_delegated_staking_args(args)
        if args.num_delegated_nodes == 0:
            raise InvalidValueError("the num_delegated_nodes")
        if args.num_delegated_nodes > args.num_validator_bls_keys:
            raise InvalidValueError(
                f"num_delegated_nodes {args.num_delegated_nodes} > "
                f"num_validator_bls_keys {args.num_validator_bls_keys}"
            )
        if args.max_num_nodes_on_owner == 0:
            raise InvalidValueError("max_num_nodes_on_owner")
        if args.int_randomizer is None:
            raise NilRandomizerError()

        self.num_validator_bls_keys = args.num_validator_bls_keys
        self.num_observer_bls_keys = args.num_observer_bls_keys
        self.num_additional_wallet_keys = args.num_additional_wallet_keys
        self.num_delegators = args.num_delegators
        self.num_delegated_nodes = args.num_delegated_nodes
        self.max_num_nodes_on_owner = args.max_num_nodes_on_owner
        self.richest_account_mode = args.richest_account_mode
        self.minimum_initial_balance = args.minimum_initial_balance
        self.total_supply = args.total_supply
        self.initial_rating = args.initial_rating
        self.wallet_converter = args.wallet_pub_key_converter
        self.validator_converter = args.validator_pub_key_converter
        self.vkg, self.wkg = prepare_key_generators(args, args.int_randomizer)
        self.contract = prepare_delegation_contract(args)

    def generate(self) -> GeneratorOutput:
        validators, observers = generate_validators_and_observers(
            self.vkg, self.num_validator_bls_keys, self.num_observer_bls_keys
        )
        delegators = self.wkg.generate_additional_keys(self.num_delegators)
        additional_keys = self.wkg.generate_additional_keys(self.num_additional_wallet_keys)

        delegated_used_balance = prepare_delegators(
            delegators, self.num_delegated_nodes, self.wkg.node_price, self.contract, self.minimum_initial_balance
        )
        wallet_keys, staked_used_balance = self._generate_wallet_keys(validators)
        if len(wallet_keys) + len(additional_keys) == 0:
            raise InvalidNumberOfWalletKeysError()

        balance = compute_remaining_balance(self.total_supply, delegated_used_balance + staked_used_balance)
        # delegators already hold their claim balance
        distribute_balance(
            wallet_keys, additional_keys, balance, self.richest_account_mode, self.minimum_initial_balance
        )

        accounts = [delegator_account(key, self.wallet_converter) for key in delegators]
        accounts += [staked_account(key, self.wallet_converter) for key in wallet_keys]
        accounts += [balance_account(key, self.wallet_converter) for key in additional_keys]

        nodes = compute_delegated_initial_nodes(
            validators[:self.num_delegated_nodes], self.contract.address, self.validator_converter, self.initial_rating
        )
        nodes += compute_initial_nodes_for_wallet_keys(
            wallet_keys, self.wallet_converter, self.validator_converter, self.initial_rating
        )

        log.debug(
            "mixed staking: %d validators (%d delegated), %d observers, %d owners, %d delegators, %d additional wallets",
            len(validators), self.num_delegated_nodes, len(observers), len(wallet_keys),
            len(delegators), len(additional_keys),
        )
        return GeneratorOutput(
            validator_bls_keys=validators,
            observer_bls_keys=observers,
            wallet_keys=wallet_keys,
            additional_keys=additional_keys,
            delegator_keys=delegators,
            initial_accounts=accounts,
            initial_nodes=nodes,
        )

    def _generate_wallet_keys(self, validators: List[BlsKey]) -> Tuple[List[WalletKey], int]:
        staked_nodes = validators[self.num_delegated_nodes:]
        wallet_keys = self.wkg.generate_keys(staked_nodes, self.max_num_nodes_on_owner)
        return wallet_keys, len(staked_nodes) * self.wkg.node_price
