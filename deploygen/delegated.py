import logging

from .base import (
    balance_account,
    check_pub_key_converters,
    compute_delegated_initial_nodes,
    compute_remaining_balance,
    delegator_account,
    distribute_balance,
    generate_validators_and_observers,
    prepare_key_generators,
)
from .config import GeneratorArgs
from .data import GeneratorOutput
from .delegation import check_delegated_staking_args, prepare_delegation_contract, prepare_delegators
from .errors import InvalidNumberOfWalletKeysError
from .randomizer import DisabledRandomizer

log = logging.getLogger(__name__)


class DelegatedStakingGenerator:
    """
    All validators are staked through the delegation contract, funded by the
    delegators. Each validator still gets a plain wallet (balance only), and
    every initial node points at the contract address.
    """

    def __init__(self, args: GeneratorArgs):
        check_pub_key_converters(args.wallet_pub_key_converter, args.validator_pub_key_converter)
        check_delegated_staking_args(args)

        self.num_validator_bls_keys = args.num_validator_bls_keys
        self.num_observer_bls_keys = args.num_observer_bls_keys
        self.num_additional_wallet_keys = args.num_additional_wallet_keys
        self.num_delegators = args.num_delegators
        self.richest_account_mode = args.richest_account_mode
        self.minimum_initial_balance = args.minimum_initial_balance
        self.total_supply = args.total_supply
        self.initial_rating = args.initial_rating
        self.wallet_converter = args.wallet_pub_key_converter
        self.validator_converter = args.validator_pub_key_converter
        self.vkg, self.wkg = prepare_key_generators(args, DisabledRandomizer())
        self.contract = prepare_delegation_contract(args)

    def generate(self) -> GeneratorOutput:
        validators, observers = generate_validators_and_observers(
            self.vkg, self.num_validator_bls_keys, self.num_observer_bls_keys
        )
        wallet_keys = self.wkg.generate_additional_keys(len(validators))
        delegators = self.wkg.generate_additional_keys(self.num_delegators)
        additional_keys = self.wkg.generate_additional_keys(self.num_additional_wallet_keys)
        if not wallet_keys:
            raise InvalidNumberOfWalletKeysError()

        used_balance = prepare_delegators(
            delegators, len(validators), self.wkg.node_price, self.contract, self.minimum_initial_balance
        )
        balance = compute_remaining_balance(self.total_supply, used_balance)
        distribute_balance(
            wallet_keys, additional_keys, balance, self.richest_account_mode, self.minimum_initial_balance
        )

        accounts = [delegator_account(key, self.wallet_converter) for key in delegators]
        accounts += [balance_account(key, self.wallet_converter) for key in wallet_keys]
        accounts += [balance_account(key, self.wallet_converter) for key in additional_keys]

        log.debug(
            "delegated staking: %d validators, %d observers, %d delegators, %d additional wallets",
            len(validators), len(observers), len(delegators), len(additional_keys),
        )
        return GeneratorOutput(
            validator_bls_keys=validators,
            observer_bls_keys=observers,
            wallet_keys=wallet_keys,
            additional_keys=additional_keys,
            delegator_keys=delegators,
            initial_accounts=accounts,
            initial_nodes=compute_delegated_initial_nodes(
                validators, self.contract.address, self.validator_converter, self.initial_rating
            ),
        )
