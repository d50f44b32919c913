"""
Address overrides for the public demo deployment.

The last four initial accounts are handed to well known demo roles. Only the
addresses change: the amounts stay, so the accounts still pass the checker, but
the generated private keys no longer match those accounts.
"""
import logging
from collections import OrderedDict
from typing import List, Mapping

from .data import InitialAccount
from .errors import InvalidValueError

log = logging.getLogger(__name__)

# ordered from the fourth-last account to the last one
DEMO_ADDRESSES = OrderedDict([
    ("faucet", "erd1sjs26q5pmngu7qjnpkcqgstdppvqul7vdqa0cru5ae5axkq37czqndz3vp"),
    ("web", "erd1wh9c0sjr2xn8hzf02lwwcr4jk2s84tat9ud2kaq6zr7xzpvl9l5q8awmex"),
    ("controller", "erd10nht7cm9tqyq8r6aqdx2ec46ak94q8xjxdzwcngffvlzmaju97tszdca2y"),
    ("sponsor", "erd1guzgwrg6mwvmftx4ppdg8dv2s239d6pt2crdxklcmz9ngq8zztxsl9ah7z"),
])


def apply_demo_addresses(
    accounts: List[InitialAccount],
    converter,
    addresses: Mapping[str, str] = DEMO_ADDRESSES,
) -> None:
    if len(accounts) < len(addresses):
        raise InvalidValueError(
            f"demo addresses: {len(addresses)} overrides for {len(accounts)} initial accounts"
        )

    # validate all of them before touching any account
    for address in addresses.values():
        converter.decode(address)

    start = len(accounts) - len(addresses)
    for offset, (role, address) in enumerate(addresses.items()):
        log.info("account %d is now the %s account %s", start + offset, role, address)
        accounts[start + offset].address = address
