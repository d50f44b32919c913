import pytest

from deploygen.crypto import (
    VALIDATOR_PUB_KEY_LEN,
    WALLET_PUB_KEY_LEN,
    Bech32PubkeyConverter,
    BlsKeyGenerator,
    Ed25519KeyGenerator,
    HexPubkeyConverter,
    generate_sc_address,
    new_sc_address,
)
from deploygen.errors import InvalidPubKeyError, InvalidValueError

CREATOR = "erd1ulhw20j7jvgfgak5p05kv667k5k9f320sgef5ayxkt9784ql0zssrzyhjp"


def test_generate_sc_address(wallet_converter) -> None:
    address = generate_sc_address(CREATOR, 0, "0500", wallet_converter)

    assert address == "erd1qqqqqqqqqqqqqpgqvyvaeu6mnr9fq25kt0gyaymtn6zgjmp80zssuqmp6l"


def test_new_sc_address_layout(wallet_converter) -> None:
    creator = wallet_converter.decode(CREATOR)

    address = new_sc_address(creator, 7, bytes.fromhex("0500"))

    assert len(address) == 32
    assert address[:10] == bytes(8) + bytes.fromhex("0500")
    assert address[-2:] == creator[-2:]
    assert address != new_sc_address(creator, 8, bytes.fromhex("0500"))


@pytest.mark.parametrize("vm_type", ["05", "zz00"])
def test_generate_sc_address_invalid_vm_type(wallet_converter, vm_type) -> None:
    with pytest.raises(InvalidValueError):
        generate_sc_address(CREATOR, 0, vm_type, wallet_converter)


def test_bech32_converter(wallet_converter) -> None:
    pk = bytes(range(32))

    address = wallet_converter.encode(pk)

    assert address.startswith("erd1")
    assert wallet_converter.decode(address) == pk


def test_bech32_converter_errors(wallet_converter) -> None:
    with pytest.raises(InvalidPubKeyError):
        wallet_converter.encode(b"\x01" * 31)
    with pytest.raises(InvalidPubKeyError):
        wallet_converter.decode(CREATOR[:-1] + ("q" if CREATOR[-1] != "q" else "p"))
    with pytest.raises(InvalidPubKeyError):
        Bech32PubkeyConverter(20).decode(CREATOR)


def test_hex_converter(validator_converter) -> None:
    pk = bytes(range(96))

    assert validator_converter.decode(validator_converter.encode(pk)) == pk
    with pytest.raises(InvalidPubKeyError):
        validator_converter.decode("abcd")
    with pytest.raises(InvalidPubKeyError):
        validator_converter.decode("xy" * 96)


def test_converter_rejects_zero_length() -> None:
    with pytest.raises(InvalidValueError):
        HexPubkeyConverter(0)


def test_ed25519_key_generator() -> None:
    sk, pk = Ed25519KeyGenerator().generate_pair()

    assert len(pk.to_bytes()) == WALLET_PUB_KEY_LEN
    assert len(sk.to_bytes()) == 64
    assert sk.to_bytes()[32:] == pk.to_bytes()


def test_bls_key_generator() -> None:
    sk, pk = BlsKeyGenerator().generate_pair()

    assert len(sk.to_bytes()) == 32
    assert len(pk.to_bytes()) == VALIDATOR_PUB_KEY_LEN
