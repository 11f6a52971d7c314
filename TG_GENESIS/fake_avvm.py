"""
Fake AVVM Voucher Generator

Synthetic legacy vouchers for test networks: each voucher is a redeem key
derived from a 32-byte seed plus a fixed balance. The seeds are returned so
the vouchers can be redeemed later.
"""

import logging
from typing import List, Tuple

from TG_Crypto.address import make_redeem_address
from TG_Crypto.keys import REDEEM_SEED_SIZE, redeem_deterministic_keygen
from TG_Tool_Box.SeedEnvironment import SeedEnvironment

from .errors import ConfigurationInconsistency, LibraryContractViolation
from .types import AddrDistribution, CustomBalances, FakeAvvmOptions, is_valid_coin

logger = logging.getLogger(__name__)


def generate_fake_avvm(env: SeedEnvironment) -> Tuple[bytes, bytes]:
    """Draw one voucher seed and return ``(redeem_public_key, seed)``."""
    seed = env.draw(REDEEM_SEED_SIZE)
    keypair = redeem_deterministic_keygen(seed)
    if keypair is None:
        raise LibraryContractViolation(f"Impossible - seed is not {REDEEM_SEED_SIZE} bytes long")
    public_key, _ = keypair
    return public_key, seed


def generate_fake_avvm_genesis(
    env: SeedEnvironment,
    options: FakeAvvmOptions,
) -> Tuple[List[AddrDistribution], List[bytes]]:
    if options.count < 0:
        raise ConfigurationInconsistency([f"Fake AVVM count {options.count} is negative"])
    if not is_valid_coin(options.one_balance):
        raise ConfigurationInconsistency([f"Fake AVVM balance {options.one_balance} is not a valid coin value"])

    pubkeys_and_seeds = [generate_fake_avvm(env) for _ in range(options.count)]

    addresses = tuple(make_redeem_address(pk) for pk, _ in pubkeys_and_seeds)
    distribution = CustomBalances(tuple(options.one_balance for _ in addresses))
    seeds = [seed for _, seed in pubkeys_and_seeds]

    logger.info(f"Generated {len(addresses)} fake AVVM vouchers of {options.one_balance} each")
    return [AddrDistribution(addresses, distribution)], seeds
