"""Defaults and the argument record shared by every generation strategy."""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .errors import NegativeNumberError, StringIsNotANumberError

# === CONFIGURATION ===
DENOMINATION = 10**18  # base units per native token

MINIMUM_INITIAL_BALANCE = 1 * DENOMINATION
DEFAULT_TOTAL_SUPPLY = 20_000_000 * DENOMINATION
DEFAULT_NODE_PRICE = 2_500 * DENOMINATION

DEFAULT_DELEGATION_OWNER = "erd1vxy22x0fj4zv6hktmydg8vpfh6euv02cz4yg0aaws6rrad5a5awqgqky80"
DEFAULT_VM_TYPE = "0500"
DEFAULT_INITIAL_RATING = 5000001

DEFAULT_ROUND_DURATION = 6000  # ms
DEFAULT_HYSTERESIS = 0.2
DEFAULT_CHAIN_ID = "testnet"
DEFAULT_TX_VERSION = 1

# Output file names
WALLET_KEY_FILE = "walletKey.pem"
VALIDATOR_KEY_FILE = "validatorKey.pem"
DELEGATORS_FILE = "delegators.pem"
GENESIS_FILE = "genesis.json"
NODES_SETUP_FILE = "nodesSetup.json"
TXGEN_ACCOUNTS_FILE = "accounts.json"

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


class GenerationType(str, Enum):
    DIRECT = "direct"
    DELEGATED = "delegated"
    MIXED = "mixed"


@dataclass
class GeneratorArgs:
    """
    Everything a strategy needs. Each strategy validates and copies only the
    fields it uses; the rest are ignored.
    """
    key_generator_for_validators: Any = None
    key_generator_for_wallets: Any = None
    wallet_pub_key_converter: Any = None
    validator_pub_key_converter: Any = None
    int_randomizer: Any = None
    num_validator_bls_keys: int = 0
    num_observer_bls_keys: int = 0
    num_additional_wallet_keys: int = 0
    richest_account_mode: bool = False
    max_num_nodes_on_owner: int = 1
    node_price: Optional[int] = DEFAULT_NODE_PRICE
    total_supply: int = DEFAULT_TOTAL_SUPPLY
    minimum_initial_balance: int = MINIMUM_INITIAL_BALANCE
    initial_rating: int = DEFAULT_INITIAL_RATING
    generation_type: str = GenerationType.DIRECT.value
    delegation_owner_pk_string: str = DEFAULT_DELEGATION_OWNER
    delegation_owner_nonce: int = 0
    vm_type: str = DEFAULT_VM_TYPE
    num_delegators: int = 0
    num_delegated_nodes: int = 0
    num_shards: int = 1
    generate_in_all_shards: bool = False


def convert_to_positive_big_int(value: str) -> int:
    """Parse a base 10 string. Only non-negative numbers are accepted."""
    if not _DECIMAL_RE.fullmatch(value):
        raise StringIsNotANumberError(value)
    number = int(value, 10)
    if number < 0:
        raise NegativeNumberError(value)
    return number
