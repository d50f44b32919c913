import logging

from .base import (
    balance_account,
    check_pub_key_converters,
    compute_initial_nodes_for_wallet_keys,
    compute_remaining_balance,
    distribute_balance,
    generate_validators_and_observers,
    prepare_key_generators,
    staked_account,
)
from .config import GeneratorArgs
from .data import GeneratorOutput
from .errors import InvalidNumberOfWalletKeysError, InvalidValueError, NilRandomizerError

log = logging.getLogger(__name__)


class DirectStakingGenerator:
    """Every validator is staked by the owner wallet holding its BLS key."""

    def __init__(self, args: GeneratorArgs):
        if args.max_num_nodes_on_owner == 0:
            raise InvalidValueError("max_num_nodes_on_owner")
        check_pub_key_converters(args.wallet_pub_key_converter, args.validator_pub_key_converter)
        if args.int_randomizer is None:
            raise NilRandomizerError()

        self.num_validator_bls_keys = args.num_validator_bls_keys
        self.num_observer_bls_keys = args.num_observer_bls_keys
        self.num_additional_wallet_keys = args.num_additional_wallet_keys
        self.max_num_nodes_on_owner = args.max_num_nodes_on_owner
        self.richest_account_mode = args.richest_account_mode
        self.minimum_initial_balance = args.minimum_initial_balance
        self.total_supply = args.total_supply
        self.initial_rating = args.initial_rating
        self.wallet_converter = args.wallet_pub_key_converter
        self.validator_converter = args.validator_pub_key_converter
        self.vkg, self.wkg = prepare_key_generators(args, args.int_randomizer)

    def generate(self) -> GeneratorOutput:
        validators, observers = generate_validators_and_observers(
            self.vkg, self.num_validator_bls_keys, self.num_observer_bls_keys
        )
        wallet_keys = self.wkg.generate_keys(validators, self.max_num_nodes_on_owner)
        additional_keys = self.wkg.generate_additional_keys(self.num_additional_wallet_keys)
        if len(wallet_keys) + len(additional_keys) == 0:
            raise InvalidNumberOfWalletKeysError()

        used_balance = sum(key.staked_value for key in wallet_keys)
        balance = compute_remaining_balance(self.total_supply, used_balance)
        distribute_balance(
            wallet_keys, additional_keys, balance, self.richest_account_mode, self.minimum_initial_balance
        )

        accounts = [staked_account(key, self.wallet_converter) for key in wallet_keys]
        accounts += [balance_account(key, self.wallet_converter) for key in additional_keys]

        log.debug(
            "direct staking: %d validators, %d observers, %d owners, %d additional wallets",
            len(validators), len(observers), len(wallet_keys), len(additional_keys),
        )
        return GeneratorOutput(
            validator_bls_keys=validators,
            observer_bls_keys=observers,
            wallet_keys=wallet_keys,
            additional_keys=additional_keys,
            initial_accounts=accounts,
            initial_nodes=compute_initial_nodes_for_wallet_keys(
                wallet_keys, self.wallet_converter, self.validator_converter, self.initial_rating
            ),
        )
