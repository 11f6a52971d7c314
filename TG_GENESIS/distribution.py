"""
Testnet Balance Distribution Planner

Splits a total test balance between "rich" and "poor" participants so that
every richman individually clears the MPC (committee-eligibility) threshold
and every poor participant individually falls short of it.

Each poor participant owns two keyed balances (plain key and HD wallet key),
so the poor share is divided over ``2 * poors`` balances. Richmen are not
doubled.

All checks run before a plan is returned; every failed check is reported
together in one ConfigurationInconsistency.
"""

import logging
from dataclasses import dataclass
from typing import List

from .errors import ConfigurationInconsistency
from .types import ProtocolConstants, RichPoorBalances, TestnetBalanceOptions, is_valid_coin

logger = logging.getLogger(__name__)

# Balances per poor participant: one for the plain key, one for the HD wallet key.
POOR_KEYS_PER_PARTICIPANT = 2


@dataclass(frozen=True)
class BalancePlan:
    """Every intermediate value of a rich/poor split, before validation."""
    richmen_count: int
    poor_count: int
    total_balance: int
    rich_share_amount: int
    per_rich_balance: int
    real_rich_total: int
    poors_total: int
    effective_poor_count: int
    per_poor_balance: int
    threshold_balance: int

    @property
    def real_poor_total(self) -> int:
        return self.per_poor_balance * self.effective_poor_count

    def to_rich_poor_balances(self) -> RichPoorBalances:
        return RichPoorBalances(
            rich_count=self.richmen_count,
            rich_balance=self.per_rich_balance,
            poor_count=self.effective_poor_count,
            poor_balance=self.per_poor_balance,
        )


def get_share(fraction: float, amount: int) -> int:
    # Python's round() rounds half to even.
    return int(round(fraction * amount))


def compute_balance_plan(
    richmen_count: int,
    poor_count: int,
    total_balance: int,
    richmen_share: float,
    threshold_fraction: float,
) -> BalancePlan:
    rich_share_amount = get_share(richmen_share, total_balance)

    if richmen_count > 0:
        per_rich_balance = rich_share_amount // richmen_count
        if rich_share_amount % richmen_count > 0:
            per_rich_balance += 1
    else:
        per_rich_balance = 0
    real_rich_total = per_rich_balance * richmen_count

    poors_total = total_balance - real_rich_total
    effective_poor_count = poor_count * POOR_KEYS_PER_PARTICIPANT
    per_poor_balance = 0 if effective_poor_count == 0 else poors_total // effective_poor_count

    return BalancePlan(
        richmen_count=richmen_count,
        poor_count=poor_count,
        total_balance=total_balance,
        rich_share_amount=rich_share_amount,
        per_rich_balance=per_rich_balance,
        real_rich_total=real_rich_total,
        poors_total=poors_total,
        effective_poor_count=effective_poor_count,
        per_poor_balance=per_poor_balance,
        threshold_balance=get_share(threshold_fraction, total_balance),
    )


def check_balance_plan(plan: BalancePlan) -> List[str]:
    """Return the message of every failed consistency check (empty when the plan is sound)."""
    checks = [
        (plan.real_rich_total + plan.real_poor_total <= plan.total_balance,
         "Real rich + poor balance is more than desired."),
        (plan.per_rich_balance >= plan.threshold_balance,
         "Richman's balance is less than MPC threshold"),
        (plan.per_poor_balance < plan.threshold_balance,
         "Poor's balance is more than MPC threshold"),
        (plan.richmen_count > 0,
         "Richmen count must be positive"),
        (is_valid_coin(plan.per_rich_balance),
         f"Richman's balance {plan.per_rich_balance} is not a valid coin value"),
        (is_valid_coin(plan.per_poor_balance),
         f"Poor's balance {plan.per_poor_balance} is not a valid coin value"),
    ]
    return [message for ok, message in checks if not ok]


def plan_balance_distribution(
    richmen_count: int,
    poor_count: int,
    total_balance: int,
    richmen_share: float,
    threshold_fraction: float,
) -> RichPoorBalances:
    """
    Compute and validate the rich/poor balance split.

    Raises:
        ConfigurationInconsistency: with every failed check, if any fails
    """
    plan = compute_balance_plan(richmen_count, poor_count, total_balance, richmen_share, threshold_fraction)
    errors = check_balance_plan(plan)
    if errors:
        logger.error(f"Balance plan rejected with {len(errors)} failed check(s)")
        raise ConfigurationInconsistency(errors)

    logger.info(
        f"Balance plan: {plan.richmen_count} richmen x {plan.per_rich_balance}, "
        f"{plan.effective_poor_count} poor balances x {plan.per_poor_balance}, "
        f"threshold {plan.threshold_balance}"
    )
    return plan.to_rich_poor_balances()


def gen_testnet_distribution(options: TestnetBalanceOptions, constants: ProtocolConstants) -> RichPoorBalances:
    return plan_balance_distribution(
        options.richmen,
        options.poors,
        options.total_balance,
        options.richmen_share,
        constants.mpc_threshold,
    )
