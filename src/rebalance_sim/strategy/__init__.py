"""Indicators, allocation policies and rebalance triggers."""

from rebalance_sim.strategy.allocation import (
    NEUTRAL_ALLOCATION,
    adx_target,
    fixed_target,
    initial_target_allocation,
    rsi_target,
    target_allocation,
)
from rebalance_sim.strategy.indicators import (
    IndicatorReading,
    IndicatorState,
    IndicatorTracker,
    TrendReading,
    advance,
    rsi_step,
    trend_step,
)
from rebalance_sim.strategy.rebalance import DUST_THRESHOLD, exceeds_dust, should_rebalance

__all__ = [
    "DUST_THRESHOLD",
    "IndicatorReading",
    "IndicatorState",
    "IndicatorTracker",
    "NEUTRAL_ALLOCATION",
    "TrendReading",
    "adx_target",
    "advance",
    "exceeds_dust",
    "fixed_target",
    "initial_target_allocation",
    "rsi_target",
    "rsi_step",
    "should_rebalance",
    "target_allocation",
    "trend_step",
]
