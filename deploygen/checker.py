import logging
from typing import Optional, Sequence

from .data import InitialAccount
from .errors import (
    DelegationValuesError,
    EmptyInitialAccountsError,
    NegativeValueError,
    NilValueError,
    StakingValueError,
    SupplyMismatchError,
    TotalSupplyMismatchError,
    ZeroOrNegativeError,
)

log = logging.getLogger(__name__)


class InitialAccountsChecker:
    """
    Verifies the conservation law over a set of initial accounts:

      - per account: supply == balance + staking value + delegated value,
        no negative amounts, staking value a multiple of the node price and a
        delegation address whenever something is delegated;
      - globally: the supplies add up to the configured total supply.

    Run it on every generator output before anything is written to disk.
    """

    def __init__(self, node_price: Optional[int], total_supply: Optional[int]):
        if node_price is None:
            raise NilValueError("node_price")
        if total_supply is None:
            raise NilValueError("total_supply")
        if node_price <= 0:
            raise ZeroOrNegativeError("node_price")
        if total_supply <= 0:
            raise ZeroOrNegativeError("total_supply")

        self.node_price = node_price
        self.total_supply = total_supply

    def check_initial_accounts(self, accounts: Sequence[InitialAccount]) -> None:
        if not accounts:
            raise EmptyInitialAccountsError()

        total_supply = 0
        total_staked = 0
        total_balance = 0
        total_delegated = 0
        for account in accounts:
            self._check_account(account)

            total_supply += account.supply
            total_balance += account.balance
            total_staked += account.staking_value
            total_delegated += account.delegation.value

        if total_supply != self.total_supply:
            raise TotalSupplyMismatchError(total_supply, self.total_supply)

        log.info(
            "checked values: total supply %d, total staked %d, total balance %d, total delegated %d",
            total_supply, total_staked, total_balance, total_delegated,
        )

    def _check_account(self, account: InitialAccount) -> None:
        for field, value in (
            ("StakingValue", account.staking_value),
            ("Balance", account.balance),
            ("Supply", account.supply),
            ("Delegation.Value", account.delegation.value),
        ):
            if value < 0:
                raise NegativeValueError(account.address, field)

        if account.balance + account.staking_value + account.delegation.value != account.supply:
            raise SupplyMismatchError(account.address)
        if account.staking_value % self.node_price != 0:
            raise StakingValueError(account.address)
        if account.delegation.value > 0 and not account.delegation.address:
            raise DelegationValuesError(account.address)
