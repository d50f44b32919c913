"""Validator (BLS) and wallet key generation, including owner grouping."""
import logging
from typing import List, Optional, Tuple

from .data import BlsKey, WalletKey
from .errors import (
    InvalidValueError,
    KeyGenerationError,
    NilKeyGeneratorError,
    NilNodePriceError,
    NilRandomizerError,
    NumShardsIsZeroError,
)

log = logging.getLogger(__name__)


class ValidatorKeyGenerator:
    def __init__(self, key_gen):
        if key_gen is None:
            raise NilKeyGeneratorError()
        self._key_gen = key_gen

    def generate_keys(self, num_keys: int) -> List[BlsKey]:
        keys = []
        for i in range(num_keys):
            sk, pk = self._key_gen.generate_pair()
            try:
                priv_key_bytes = sk.to_bytes()
                pub_key_bytes = pk.to_bytes()
            except Exception as e:
                raise KeyGenerationError(f"{e} at index {i}") from e
            keys.append(BlsKey(pub_key_bytes=pub_key_bytes, priv_key_bytes=priv_key_bytes))

        log.debug("generated %d BLS keys", len(keys))
        return keys


class WalletKeyGenerator:
    """
    Produces wallet keys, optionally grouping validator keys under owner wallets.

    With `generate_in_all_shards` set, consecutive keys are pinned round-robin to
    shards 0..num_shards-1: a key is kept only when the last byte of its public
    key equals the current shard, otherwise generation is retried.
    """

    def __init__(
        self,
        key_gen,
        randomizer,
        node_price: Optional[int],
        num_shards: int = 1,
        generate_in_all_shards: bool = False,
    ):
        if key_gen is None:
            raise NilKeyGeneratorError()
        if randomizer is None:
            raise NilRandomizerError()
        if node_price is None:
            raise NilNodePriceError()
        if num_shards == 0:
            raise NumShardsIsZeroError()
        if generate_in_all_shards and num_shards > 256:
            # the shard is matched against a single public key byte
            raise InvalidValueError("num_shards when generating in all shards")

        self._key_gen = key_gen
        self._randomizer = randomizer
        self._node_price = node_price
        self._num_shards = num_shards
        self._generate_in_all_shards = generate_in_all_shards
        self._crt_shard = 0

    @property
    def node_price(self) -> int:
        return self._node_price

    def generate_keys(self, bls_keys: List[BlsKey], max_num_keys_on_owner: int) -> List[WalletKey]:
        """Pop batches of 1..max_num_keys_on_owner BLS keys, one new owner wallet per batch."""
        if max_num_keys_on_owner < 1:
            raise InvalidValueError("max_num_keys_on_owner")

        keys = []
        pool = list(bls_keys)
        while pool:
            num_keys_on_owner = max_num_keys_on_owner
            if max_num_keys_on_owner > 1:
                num_keys_on_owner = self._randomizer.intn(max_num_keys_on_owner) + 1
                num_keys_on_owner = min(num_keys_on_owner, len(pool))

            extracted, pool = pool[:num_keys_on_owner], pool[num_keys_on_owner:]

            wallet_key = self._generate_wallet_key()
            wallet_key.bls_keys = extracted
            wallet_key.staked_value = self._node_price * len(extracted)
            keys.append(wallet_key)

        log.debug("grouped %d BLS keys under %d owner wallets", len(bls_keys), len(keys))
        return keys

    def generate_additional_keys(self, num_keys: int) -> List[WalletKey]:
        return [self._generate_wallet_key() for _ in range(num_keys)]

    def _generate_wallet_key(self) -> WalletKey:
        sk_bytes, pk_bytes = self._generate_key()
        return WalletKey(pub_key_bytes=pk_bytes, priv_key_bytes=sk_bytes)

    def _generate_key(self) -> Tuple[bytes, bytes]:
        try:
            while True:
                sk, pk = self._key_gen.generate_pair()
                try:
                    sk_bytes = sk.to_bytes()
                    pk_bytes = pk.to_bytes()
                except Exception as e:
                    raise KeyGenerationError(f"{e} for wallet key") from e
                if self._generate_in_all_shards and pk_bytes[-1] != self._crt_shard:
                    continue
                return sk_bytes, pk_bytes
        finally:
            self._crt_shard = (self._crt_shard + 1) % self._num_shards
