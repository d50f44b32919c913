"""Exceptions raised while preparing the genesis artifacts."""
from typing import Optional


class DeployGenError(Exception):
    """Base class for every error raised by deploygen."""


class _DetailedError(DeployGenError):
    message = ""

    def __init__(self, detail: Optional[str] = None):
        text = self.message if not detail else f"{self.message} for {detail}"
        super().__init__(text)
        self.detail = detail


# -------------------- Construction --------------------

class NilKeyGeneratorError(_DetailedError):
    message = "nil key generator"


class NilRandomizerError(_DetailedError):
    message = "nil int randomizer"


class NilNodePriceError(_DetailedError):
    message = "nil node price"


class NilPubKeyConverterError(_DetailedError):
    message = "nil pub key converter"


class NumShardsIsZeroError(_DetailedError):
    message = "number of shards is zero"


class InvalidValueError(_DetailedError):
    message = "invalid value"


class UnknownGenerationTypeError(DeployGenError):
    def __init__(self, generation_type):
        super().__init__(f"unknown data generation type: {generation_type}")
        self.generation_type = generation_type


class StringIsNotANumberError(DeployGenError):
    def __init__(self, value: str):
        super().__init__(f"string is not a number: {value!r}")


class NegativeNumberError(DeployGenError):
    def __init__(self, value: str):
        super().__init__(f"negative value: {value}")


class InvalidPubKeyError(DeployGenError):
    pass


class KeyGenerationError(DeployGenError):
    pass


# -------------------- Generation --------------------

class TotalSupplyTooSmallError(DeployGenError):
    def __init__(self, total_supply: int, used_balance: int):
        super().__init__(
            f"total supply is too small, total supply: {total_supply}, usedBalance: {used_balance}"
        )
        self.total_supply = total_supply
        self.used_balance = used_balance


class InvalidNumberOfWalletKeysError(DeployGenError):
    def __init__(self):
        super().__init__("invalid number of wallet keys")


# -------------------- Initial accounts check --------------------

class InitialAccountsError(DeployGenError):
    """Raised when the generated initial accounts break the conservation rules."""


class NilValueError(InitialAccountsError):
    def __init__(self, field: str):
        super().__init__(f"nil value for {field}")
        self.field = field


class ZeroOrNegativeError(InitialAccountsError):
    def __init__(self, field: str):
        super().__init__(f"zero or negative value for {field}")
        self.field = field


class EmptyInitialAccountsError(InitialAccountsError):
    def __init__(self):
        super().__init__("empty initial accounts list")


class NegativeValueError(InitialAccountsError):
    def __init__(self, address: str, field: str):
        super().__init__(f"negative value for address {address}, field {field}")
        self.address = address
        self.field = field


class SupplyMismatchError(InitialAccountsError):
    def __init__(self, address: str):
        super().__init__(f"supply mismatch for address {address}")
        self.address = address


class StakingValueError(InitialAccountsError):
    def __init__(self, address: str):
        super().__init__(f"staking value error for address {address}")
        self.address = address


class DelegationValuesError(InitialAccountsError):
    def __init__(self, address: str):
        super().__init__(f"delegation values error for address {address}")
        self.address = address


class TotalSupplyMismatchError(InitialAccountsError):
    def __init__(self, computed: int, provided: int):
        super().__init__(f"total supply mismatch computed: {computed}, provided: {provided}")
        self.computed = computed
        self.provided = provided
