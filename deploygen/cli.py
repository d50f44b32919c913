#!/usr/bin/env python3
"""
Deploy preparation tool.

Generates, in the output directory:
  - nodesSetup.json     initial nodes and consensus parameters
  - genesis.json        initial accounts (supply = balance + staking + delegation)
  - validatorKey.pem    BLS keys of validators, then observers
  - walletKey.pem       owner wallets
  - delegators.pem      delegators (delegated/mixed stake types only)
  - accounts.json       txgen accounts grouped by shard (--txgen)

Before anything is written, the initial accounts must add up exactly to the
total supply; otherwise the run aborts and no files are produced.

Run:
  deploygen --output-directory ./output --num-of-shards 3 \
      --num-of-nodes-in-each-shard 7 --consensus-group-size 5 \
      --num-of-metachain-nodes 7 --metachain-consensus-group-size 5 \
      --stake-type mixed --num-delegators 100 --num-delegated-nodes 4 -v

Exit codes:
  0  success
  1  invalid configuration or generation/check failure
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .checker import InitialAccountsChecker
from .config import GenerationType, GeneratorArgs, convert_to_positive_big_int
from .crypto import (
    VALIDATOR_PUB_KEY_LEN,
    WALLET_PUB_KEY_LEN,
    Bech32PubkeyConverter,
    BlsKeyGenerator,
    Ed25519KeyGenerator,
    HexPubkeyConverter,
)
from .demo import apply_demo_addresses
from .errors import DeployGenError, InvalidValueError
from .factory import create_data_generator
from .output import NodesSetupParams, OutputHandler
from .randomizer import RandomIntRandomizer
from .shard import MultiShardCoordinator


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="deploygen",
        description="Generate genesis accounts, nodes setup and key files for a sharded network",
    )
    ap.add_argument("--output-directory", type=Path, default=Path("."),
                    help="Directory where the generated files are written (default: .)")

    topo = ap.add_argument_group("topology")
    topo.add_argument("--num-of-shards", type=int, default=3, help="Number of initial shards")
    topo.add_argument("--num-of-nodes-in-each-shard", type=int, default=7,
                      help="Number of validators in each shard")
    topo.add_argument("--consensus-group-size", type=int, default=5, help="Shard consensus group size")
    topo.add_argument("--num-of-observers-in-each-shard", type=int, default=1,
                      help="Number of observers in each shard")
    topo.add_argument("--num-of-metachain-nodes", type=int, default=7, help="Number of metachain validators")
    topo.add_argument("--metachain-consensus-group-size", type=int, default=5,
                      help="Metachain consensus group size")
    topo.add_argument("--num-of-observers-in-metachain", type=int, default=1,
                      help="Number of metachain observers")

    econ = ap.add_argument_group("economics")
    econ.add_argument("--total-supply", default=str(config.DEFAULT_TOTAL_SUPPLY),
                      help="Total supply, in base units")
    econ.add_argument("--node-price", default=str(config.DEFAULT_NODE_PRICE),
                      help="Stake required for one validator, in base units")
    econ.add_argument("--minimum-balance", default=str(config.MINIMUM_INITIAL_BALANCE),
                      help="Claim balance of delegators and the per-wallet cap in richest account mode")
    econ.add_argument("--stake-type", default=GenerationType.DIRECT.value,
                      help="One of: " + ", ".join(t.value for t in GenerationType))
    econ.add_argument("--max-num-nodes-on-owner", type=int, default=1,
                      help="Maximum number of validators grouped under one owner wallet")
    econ.add_argument("--num-additional-accounts", type=int, default=0,
                      help="Number of extra wallets holding only balance")
    econ.add_argument("--richest-account", action="store_true",
                      help="Give every wallet the minimum balance and the rest to the first wallet")
    econ.add_argument("--initial-rating", type=int, default=config.DEFAULT_INITIAL_RATING,
                      help="Initial rating of every node")
    econ.add_argument("--seed", type=int, default=None,
                      help="Seed for the owner grouping randomizer (keys stay random)")

    deleg = ap.add_argument_group("delegation")
    deleg.add_argument("--delegation-owner-public-key", default=config.DEFAULT_DELEGATION_OWNER,
                       help="Bech32 address of the delegation contract owner")
    deleg.add_argument("--delegation-owner-nonce", type=int, default=0,
                       help="Nonce of the owner when deploying the delegation contract")
    deleg.add_argument("--vm-type", default=config.DEFAULT_VM_TYPE, help="Hex encoded vm type")
    deleg.add_argument("--num-delegators", type=int, default=0, help="Number of delegators")
    deleg.add_argument("--num-delegated-nodes", type=int, default=0,
                       help="Number of validators staked through the contract (mixed stake type)")

    setup = ap.add_argument_group("nodes setup")
    setup.add_argument("--round-duration", type=int, default=config.DEFAULT_ROUND_DURATION,
                       help="Round duration in milliseconds")
    setup.add_argument("--hysteresis", type=float, default=config.DEFAULT_HYSTERESIS, help="Hysteresis value")
    setup.add_argument("--adaptivity", action="store_true", help="Enable adaptivity")
    setup.add_argument("--chain-id", default=config.DEFAULT_CHAIN_ID, help="Chain ID")
    setup.add_argument("--tx-version", type=int, default=config.DEFAULT_TX_VERSION,
                       help="Minimum transaction version")

    ap.add_argument("--generate-in-all-shards", action="store_true",
                    help="Spread wallets round-robin over all shards")
    ap.add_argument("--txgen", action="store_true", help="Also write the txgen accounts file")
    ap.add_argument("--demo-addresses", action="store_true",
                    help="Replace the last four initial accounts with the demo role addresses")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging verbosity (-v, -vv)")
    return ap


def check_topology(args: argparse.Namespace) -> None:
    if args.num_of_shards < 1:
        raise InvalidValueError("num-of-shards")
    if args.num_of_nodes_in_each_shard < 1:
        raise InvalidValueError("num-of-nodes-in-each-shard")
    if args.num_of_metachain_nodes < 1:
        raise InvalidValueError("num-of-metachain-nodes")
    if not 1 <= args.consensus_group_size <= args.num_of_nodes_in_each_shard:
        raise InvalidValueError("consensus-group-size")
    if not 1 <= args.metachain_consensus_group_size <= args.num_of_metachain_nodes:
        raise InvalidValueError("metachain-consensus-group-size")
    if args.num_of_observers_in_each_shard < 0:
        raise InvalidValueError("num-of-observers-in-each-shard")
    if args.num_of_observers_in_metachain < 0:
        raise InvalidValueError("num-of-observers-in-metachain")
    for name in ("max_num_nodes_on_owner", "num_additional_accounts", "num_delegators",
                 "num_delegated_nodes", "delegation_owner_nonce"):
        if getattr(args, name) < 0:
            raise InvalidValueError(name.replace("_", "-"))


def generator_args_from(args: argparse.Namespace) -> GeneratorArgs:
    num_validators = args.num_of_shards * args.num_of_nodes_in_each_shard + args.num_of_metachain_nodes
    num_observers = args.num_of_shards * args.num_of_observers_in_each_shard + args.num_of_observers_in_metachain

    return GeneratorArgs(
        key_generator_for_validators=BlsKeyGenerator(),
        key_generator_for_wallets=Ed25519KeyGenerator(),
        wallet_pub_key_converter=Bech32PubkeyConverter(WALLET_PUB_KEY_LEN),
        validator_pub_key_converter=HexPubkeyConverter(VALIDATOR_PUB_KEY_LEN),
        int_randomizer=RandomIntRandomizer(args.seed),
        num_validator_bls_keys=num_validators,
        num_observer_bls_keys=num_observers,
        num_additional_wallet_keys=args.num_additional_accounts,
        richest_account_mode=args.richest_account,
        max_num_nodes_on_owner=args.max_num_nodes_on_owner,
        node_price=convert_to_positive_big_int(args.node_price),
        total_supply=convert_to_positive_big_int(args.total_supply),
        minimum_initial_balance=convert_to_positive_big_int(args.minimum_balance),
        initial_rating=args.initial_rating,
        generation_type=args.stake_type,
        delegation_owner_pk_string=args.delegation_owner_public_key,
        delegation_owner_nonce=args.delegation_owner_nonce,
        vm_type=args.vm_type,
        num_delegators=args.num_delegators,
        num_delegated_nodes=args.num_delegated_nodes,
        num_shards=args.num_of_shards,
        generate_in_all_shards=args.generate_in_all_shards,
    )


def run(args: argparse.Namespace) -> None:
    check_topology(args)
    gen_args = generator_args_from(args)
    checker = InitialAccountsChecker(gen_args.node_price, gen_args.total_supply)

    logging.info(
        "generating %s stake data for %d validators and %d observers",
        gen_args.generation_type, gen_args.num_validator_bls_keys, gen_args.num_observer_bls_keys,
    )
    output = create_data_generator(gen_args).generate()
    if args.demo_addresses:
        apply_demo_addresses(output.initial_accounts, gen_args.wallet_pub_key_converter)
    checker.check_initial_accounts(output.initial_accounts)

    handler = OutputHandler(
        args.output_directory,
        gen_args.validator_pub_key_converter,
        gen_args.wallet_pub_key_converter,
        MultiShardCoordinator(args.num_of_shards),
        NodesSetupParams(
            round_duration=args.round_duration,
            consensus_group_size=args.consensus_group_size,
            min_nodes_per_shard=args.num_of_nodes_in_each_shard,
            metachain_consensus_group_size=args.metachain_consensus_group_size,
            metachain_min_nodes=args.num_of_metachain_nodes,
            hysteresis=args.hysteresis,
            adaptivity=args.adaptivity,
            chain_id=args.chain_id,
            min_transaction_version=args.tx_version,
        ),
        write_txgen_accounts=args.txgen,
        write_delegators=gen_args.generation_type != GenerationType.DIRECT.value,
    )
    handler.write_data(output)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Logging
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    try:
        run(args)
    except DeployGenError as e:
        logging.error("generation failed: %s", e)
        return 1

    logging.info("files generated successfully in %s", args.output_directory)
    return 0


if __name__ == "__main__":
    sys.exit(main())
