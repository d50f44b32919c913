"""
Data records handed from the generators to the checker and the output handler.

All amounts are plain Python ints (arbitrary precision), denominated in the
smallest unit of the native token.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class BlsKey:
    """A validator or observer identity."""
    pub_key_bytes: bytes
    priv_key_bytes: bytes


@dataclass
class WalletKey:
    """One genesis account's key material plus the validator keys it owns, if any."""
    pub_key_bytes: bytes
    priv_key_bytes: bytes
    bls_keys: List[BlsKey] = field(default_factory=list)
    balance: int = 0
    delegated_value: int = 0
    delegated_pub_key_bytes: bytes = b""
    staked_value: int = 0


@dataclass
class DelegationData:
    address: str = ""
    value: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"address": self.address, "value": str(self.value)}


@dataclass
class InitialAccount:
    """A genesis ledger entry: supply == balance + staking_value + delegation.value."""
    address: str
    supply: int
    balance: int
    staking_value: int
    delegation: DelegationData = field(default_factory=DelegationData)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "supply": str(self.supply),
            "balance": str(self.balance),
            "stakingvalue": str(self.staking_value),
            "delegation": self.delegation.to_dict(),
        }


@dataclass(frozen=True)
class InitialNode:
    """Maps a validator public key to the address responsible for its stake."""
    pub_key: str
    address: str
    initial_rating: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pubkey": self.pub_key,
            "address": self.address,
            "initialRating": self.initial_rating,
        }


@dataclass
class GeneratorOutput:
    validator_bls_keys: List[BlsKey] = field(default_factory=list)
    observer_bls_keys: List[BlsKey] = field(default_factory=list)
    wallet_keys: List[WalletKey] = field(default_factory=list)
    additional_keys: List[WalletKey] = field(default_factory=list)
    delegator_keys: List[WalletKey] = field(default_factory=list)
    initial_accounts: List[InitialAccount] = field(default_factory=list)
    initial_nodes: List[InitialNode] = field(default_factory=list)
