"""Rebalance triggers."""

from __future__ import annotations

from rebalance_sim.config.models import RebalanceType, StrategyConfig

# Trades at or below this notional are skipped.
DUST_THRESHOLD = 1.0


def should_rebalance(
    strategy: StrategyConfig,
    day: int,
    allocation: float,
    target: float,
) -> bool:
    if strategy.rebalance_type == RebalanceType.THRESHOLD:
        return abs(allocation - target) > strategy.rebalance_threshold
    if strategy.rebalance_type == RebalanceType.TIME:
        return day % strategy.rebalance_frequency == 0
    raise ValueError(f"unsupported rebalance type: {strategy.rebalance_type}")


def exceeds_dust(trade_amount: float) -> bool:
    return abs(trade_amount) > DUST_THRESHOLD
