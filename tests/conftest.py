import itertools
import os
from typing import Callable, List, Optional

import pytest

from deploygen.config import GeneratorArgs
from deploygen.crypto import (
    VALIDATOR_PUB_KEY_LEN,
    WALLET_PUB_KEY_LEN,
    Bech32PubkeyConverter,
    HexPubkeyConverter,
    PrivateKey,
    PublicKey,
)
from deploygen.data import BlsKey

NODE_PRICE = 2500
TOTAL_SUPPLY = 20_000_000_000
MINIMUM_BALANCE = 1_000


class StubIntRandomizer:
    """Returns whatever `intn_called` returns and records every bound it was asked for."""

    def __init__(self, intn_called: Optional[Callable[[int], int]] = None):
        self.intn_called = intn_called or (lambda n: 0)
        self.calls: List[int] = []

    def intn(self, n: int) -> int:
        self.calls.append(n)
        return self.intn_called(n)


class RandomBytesKeyGenerator:
    """Fast stand-in for the real key generators: random bytes of the right length."""

    def __init__(self, pub_key_len: int, priv_key_len: int = 32):
        self.pub_key_len = pub_key_len
        self.priv_key_len = priv_key_len
        self.num_calls = 0

    def generate_pair(self):
        self.num_calls += 1
        return PrivateKey(os.urandom(self.priv_key_len)), PublicKey(os.urandom(self.pub_key_len))


class SequentialLastByteKeyGenerator:
    """Public keys whose last byte counts 0, 1, 2, ... modulo 256."""

    def __init__(self):
        self._counter = itertools.count()
        self.num_calls = 0

    def generate_pair(self):
        self.num_calls += 1
        last = next(self._counter) % 256
        return PrivateKey(os.urandom(32)), PublicKey(os.urandom(WALLET_PUB_KEY_LEN - 1) + bytes([last]))


class _FailingKey:
    def to_bytes(self) -> bytes:
        raise ValueError("expected error")


class FailingKeyGenerator:
    def generate_pair(self):
        return _FailingKey(), _FailingKey()


def counting_intn() -> Callable[[int], int]:
    counter = itertools.count()
    return lambda n: next(counter)


@pytest.fixture
def wallet_converter() -> Bech32PubkeyConverter:
    return Bech32PubkeyConverter(WALLET_PUB_KEY_LEN)


@pytest.fixture
def validator_converter() -> HexPubkeyConverter:
    return HexPubkeyConverter(VALIDATOR_PUB_KEY_LEN)


@pytest.fixture
def bls_keys() -> Callable[[int], List[BlsKey]]:
    def make(n: int) -> List[BlsKey]:
        return [BlsKey(pub_key_bytes=os.urandom(VALIDATOR_PUB_KEY_LEN), priv_key_bytes=os.urandom(32)) for _ in range(n)]

    return make


@pytest.fixture
def generator_args(wallet_converter, validator_converter) -> GeneratorArgs:
    """Small amounts and fast key generators; tests override the counts they care about."""
    return GeneratorArgs(
        key_generator_for_validators=RandomBytesKeyGenerator(VALIDATOR_PUB_KEY_LEN),
        key_generator_for_wallets=RandomBytesKeyGenerator(WALLET_PUB_KEY_LEN, 64),
        wallet_pub_key_converter=wallet_converter,
        validator_pub_key_converter=validator_converter,
        int_randomizer=StubIntRandomizer(),
        node_price=NODE_PRICE,
        total_supply=TOTAL_SUPPLY,
        minimum_initial_balance=MINIMUM_BALANCE,
        initial_rating=50,
    )
