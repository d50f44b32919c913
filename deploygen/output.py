"""
Persists a generator output: nodes setup, genesis, PEM key files and the
optional txgen accounts file.
"""
import base64
import json
import logging
import os
import textwrap
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from . import config
from .data import BlsKey, GeneratorOutput, InitialAccount, InitialNode, WalletKey

log = logging.getLogger(__name__)


@dataclass
class NodesSetupParams:
    round_duration: int = config.DEFAULT_ROUND_DURATION
    consensus_group_size: int = 1
    min_nodes_per_shard: int = 1
    metachain_consensus_group_size: int = 1
    metachain_min_nodes: int = 1
    hysteresis: float = config.DEFAULT_HYSTERESIS
    adaptivity: bool = False
    chain_id: str = config.DEFAULT_CHAIN_ID
    min_transaction_version: int = config.DEFAULT_TX_VERSION
    start_time: int = 0


# -------------------- Helpers --------------------

def write_atomic(path: Path, text: str) -> None:
    """Atomically write text to path and fsync."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        f.write(text)
        f.flush()
        os.fsync(f.fileno())
    tmp.replace(path)
    log.info("wrote %s", path)


def pem_block(identifier: str, sk_bytes: bytes) -> str:
    """PEM block whose payload is the hex encoded private key."""
    label = f"PRIVATE KEY for {identifier}"
    body = base64.b64encode(sk_bytes.hex().encode()).decode()
    lines = "\n".join(textwrap.wrap(body, 64))
    return f"-----BEGIN {label}-----\n{lines}\n-----END {label}-----\n"


def nodes_setup_dict(params: NodesSetupParams, initial_nodes: Sequence[InitialNode]) -> Dict[str, Any]:
    return {
        "startTime": params.start_time,
        "roundDuration": params.round_duration,
        "consensusGroupSize": params.consensus_group_size,
        "minNodesPerShard": params.min_nodes_per_shard,
        "metaChainConsensusGroupSize": params.metachain_consensus_group_size,
        "metaChainMinNodes": params.metachain_min_nodes,
        "hysteresis": params.hysteresis,
        "adaptivity": params.adaptivity,
        "chainID": params.chain_id,
        "minTransactionVersion": params.min_transaction_version,
        "initialNodes": [node.to_dict() for node in initial_nodes],
    }


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2)


def genesis_list(accounts: Sequence[InitialAccount]) -> List[Dict[str, Any]]:
    return [account.to_dict() for account in accounts]


# -------------------- Output handler --------------------

class OutputHandler:
    def __init__(
        self,
        output_dir: Path,
        validator_converter,
        wallet_converter,
        shard_coordinator,
        nodes_setup: NodesSetupParams,
        write_txgen_accounts: bool = False,
        write_delegators: bool = False,
    ):
        self.output_dir = Path(output_dir)
        self.validator_converter = validator_converter
        self.wallet_converter = wallet_converter
        self.shard_coordinator = shard_coordinator
        self.nodes_setup = nodes_setup
        self.write_txgen_accounts = write_txgen_accounts
        self.write_delegators = write_delegators

    def write_data(self, output: GeneratorOutput) -> None:
        """Render every file first, then write them, so a rendering error leaves no partial output."""
        files = {
            config.NODES_SETUP_FILE: _to_json(nodes_setup_dict(self.nodes_setup, output.initial_nodes)),
            config.GENESIS_FILE: _to_json(genesis_list(output.initial_accounts)),
            config.VALIDATOR_KEY_FILE: self._pem_file(
                self.validator_converter, output.validator_bls_keys + output.observer_bls_keys
            ),
            config.WALLET_KEY_FILE: self._pem_file(self.wallet_converter, output.wallet_keys),
        }
        if self.write_delegators:
            files[config.DELEGATORS_FILE] = self._pem_file(self.wallet_converter, output.delegator_keys)
        else:
            log.debug("delegators file disabled; skipping %d keys", len(output.delegator_keys))

        if self.write_txgen_accounts:
            files[config.TXGEN_ACCOUNTS_FILE] = _to_json(self._txgen_accounts(output.additional_keys))
        else:
            log.debug("txgen accounts file disabled; skipping %d keys", len(output.additional_keys))

        for file_name, text in files.items():
            write_atomic(self.output_dir / file_name, text)

    @staticmethod
    def _pem_file(converter, keys: Sequence[Union[BlsKey, WalletKey]]) -> str:
        return "".join(pem_block(converter.encode(key.pub_key_bytes), key.priv_key_bytes) for key in keys)

    def _txgen_accounts(self, keys: Sequence[WalletKey]) -> Dict[str, List[Dict[str, Any]]]:
        accounts = defaultdict(list)
        for key in keys:
            shard_id = self.shard_coordinator.compute_id(key.pub_key_bytes)
            accounts[str(shard_id)].append({
                "pubKey": self.wallet_converter.encode(key.pub_key_bytes),
                "privKey": key.priv_key_bytes.hex(),
                "lastNonce": 0,
                "balance": key.balance,
                "tokenBalance": 0,
                "canReuseNonce": True,
            })
        return dict(accounts)
