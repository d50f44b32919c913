"""
Key pair generators, public key converters and smart contract address derivation.

Wallet keys are Ed25519 (bip_utils), validator keys are BLS12-381 with the
public key on G2 (py_ecc). Addresses are bech32 strings with the "erd" prefix.
"""
import secrets
from typing import Tuple

from bip_utils import Bech32ChecksumError, Bech32Decoder, Bech32Encoder, Ed25519PrivateKey
from eth_utils import keccak
from py_ecc.bls.g2_primitives import G2_to_signature
from py_ecc.optimized_bls12_381 import G2, curve_order, multiply

from .errors import InvalidPubKeyError, InvalidValueError

# === CONFIGURATION ===
ADDRESS_HRP = "erd"
WALLET_PUB_KEY_LEN = 32
VALIDATOR_PUB_KEY_LEN = 96

# smart contract address layout: 8 zero bytes + vm type | hash | creator shard bytes
NUM_INIT_CHARACTERS_FOR_SC_ADDRESS = 10
VM_TYPE_LEN = 2
SHARD_IDENTIFIER_LEN = 2


class PrivateKey:
    def __init__(self, raw: bytes):
        self._raw = raw

    def to_bytes(self) -> bytes:
        return self._raw


class PublicKey:
    def __init__(self, raw: bytes):
        self._raw = raw

    def to_bytes(self) -> bytes:
        return self._raw


# -------------------- Key generators --------------------

class Ed25519KeyGenerator:
    """Wallet key pairs. The private key bytes are the seed followed by the public key."""

    def generate_pair(self) -> Tuple[PrivateKey, PublicKey]:
        seed = secrets.token_bytes(32)
        sk = Ed25519PrivateKey.FromBytes(seed)
        # drop the 0x00 prefix bip_utils puts in front of ed25519 public keys
        pk_bytes = sk.PublicKey().RawCompressed().ToBytes()[1:]
        return PrivateKey(sk.Raw().ToBytes() + pk_bytes), PublicKey(pk_bytes)


class BlsKeyGenerator:
    """Validator key pairs on BLS12-381, public key as a compressed G2 point."""

    def generate_pair(self) -> Tuple[PrivateKey, PublicKey]:
        sk = 0
        while sk == 0:
            sk = int.from_bytes(secrets.token_bytes(32), "big") % curve_order
        pk = G2_to_signature(multiply(G2, sk))
        return PrivateKey(sk.to_bytes(32, "big")), PublicKey(bytes(pk))


# -------------------- Converters --------------------

class Bech32PubkeyConverter:
    def __init__(self, length: int = WALLET_PUB_KEY_LEN, hrp: str = ADDRESS_HRP):
        if length < 1:
            raise InvalidValueError("pub key length")
        self.length = length
        self.hrp = hrp

    def encode(self, pk_bytes: bytes) -> str:
        if len(pk_bytes) != self.length:
            raise InvalidPubKeyError(f"wrong size for bech32 encoding: {len(pk_bytes)}, expected {self.length}")
        return Bech32Encoder.Encode(self.hrp, pk_bytes)

    def decode(self, address: str) -> bytes:
        try:
            decoded = Bech32Decoder.Decode(self.hrp, address)
        except (Bech32ChecksumError, ValueError) as e:
            raise InvalidPubKeyError(f"invalid bech32 address {address!r}: {e}") from e
        if len(decoded) != self.length:
            raise InvalidPubKeyError(f"wrong size for address {address!r}: {len(decoded)}, expected {self.length}")
        return decoded


class HexPubkeyConverter:
    def __init__(self, length: int = VALIDATOR_PUB_KEY_LEN):
        if length < 1:
            raise InvalidValueError("pub key length")
        self.length = length

    def encode(self, pk_bytes: bytes) -> str:
        if len(pk_bytes) != self.length:
            raise InvalidPubKeyError(f"wrong size for hex encoding: {len(pk_bytes)}, expected {self.length}")
        return pk_bytes.hex()

    def decode(self, pk_string: str) -> bytes:
        try:
            decoded = bytes.fromhex(pk_string)
        except ValueError as e:
            raise InvalidPubKeyError(f"invalid hex public key {pk_string!r}") from e
        if len(decoded) != self.length:
            raise InvalidPubKeyError(f"wrong size for public key: {len(decoded)}, expected {self.length}")
        return decoded


# -------------------- Smart contract addresses --------------------

def new_sc_address(creator: bytes, nonce: int, vm_type: bytes) -> bytes:
    """Address of the contract deployed by `creator` at `nonce` for the given vm type."""
    if len(creator) < SHARD_IDENTIFIER_LEN:
        raise InvalidValueError("creator address")
    if len(vm_type) != VM_TYPE_LEN:
        raise InvalidValueError("vm type")
    if nonce < 0:
        raise InvalidValueError("nonce")

    base = bytearray(keccak(creator + nonce.to_bytes(8, "little")))
    base[:NUM_INIT_CHARACTERS_FOR_SC_ADDRESS] = bytes(NUM_INIT_CHARACTERS_FOR_SC_ADDRESS - VM_TYPE_LEN) + vm_type
    base[-SHARD_IDENTIFIER_LEN:] = creator[-SHARD_IDENTIFIER_LEN:]
    return bytes(base)


def generate_sc_address(pk_string: str, nonce: int, vm_type: str, converter) -> str:
    pk = converter.decode(pk_string)
    try:
        vm_type_bytes = bytes.fromhex(vm_type)
    except ValueError as e:
        raise InvalidValueError(f"vm type {vm_type!r}") from e

    return converter.encode(new_sc_address(pk, nonce, vm_type_bytes))
